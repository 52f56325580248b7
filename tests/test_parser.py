import pytest

from kas import (
	Add, ExpressionSyntaxError, Func, LexError, Mul, Neg, Num, Pow, Var,
	parse, parse_expr,
)

x, y, a, b = Var("x"), Var("y"), Var("a"), Var("b")


def test_implicit_multiplication():
	assert parse("ab").expr == Mul((a, b))
	assert parse("(a)(b)").expr == Mul((a, b))
	assert parse("2x").expr == Mul((Num(2), x))


def test_subtraction_and_division_fold():
	assert parse("x-y").expr == Add((x, Neg(y)))
	assert parse("a/b").expr == Mul((a, Pow(b, Num(-1))))
	assert parse("1/2x").expr == Mul((Num(1), Pow(Num(2), Num(-1)), x))


def test_unary_and_power():
	assert parse("-x^2").expr == Neg(Pow(x, Num(2)))
	assert parse("x^-1").expr == Pow(x, Neg(Num(1)))
	assert parse("+x").expr == x


def test_power_is_right_associative():
	assert parse("2^3^2").expr == Pow(Num(2), Pow(Num(3), Num(2)))


def test_function_calls():
	assert parse("log(x,2)").expr == Func("log", (x, Num(2)))
	assert parse("sqrt(x+1)").expr == Func("sqrt", (Add((x, Num(1))),))


def test_ok_result():
	r = parse("x")
	assert r.ok and r.error is None
	assert r.message == "ok"


@pytest.mark.parametrize(
	"text, fragment, offset",
	[
		("(((", "unmatched '('", 2),
		(")", "unmatched ')'", 0),
		("x)", "unmatched ')'", 1),
		("", "empty expression", 0),
		("   ", "empty expression", 3),
		("sin", "missing '('", 3),
		("sin()", "empty argument list", 4),
		("x+", "unexpected end of input", 2),
		("2*/3", "unexpected token '/'", 2),
	],
)
def test_syntax_errors(text, fragment, offset):
	r = parse(text)
	assert not r.ok
	assert r.expr is None
	assert isinstance(r.error, ExpressionSyntaxError)
	assert fragment in r.message
	assert r.error.offset == offset


def test_lex_errors_are_returned():
	r = parse("1.2.3")
	assert not r.ok
	assert isinstance(r.error, LexError)


def test_non_string_input():
	r = parse(None)
	assert not r.ok


def test_parse_reports_rejection(capsys):
	parse("(((")
	out = capsys.readouterr().out
	assert out.startswith("parse: unmatched '('")


def test_parse_expr_raises():
	with pytest.raises(ExpressionSyntaxError):
		parse_expr("(((")
	with pytest.raises(ValueError):
		parse_expr("x$")
