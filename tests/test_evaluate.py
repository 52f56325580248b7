import math

import pytest

from kas import Func, Var, normalize
from kas.numeric import Evaluator


def test_polynomial(p):
	assert p("2x+1").eval({"x": 3}) == 7.0


def test_constants_are_bound(p):
	assert p("pi").eval() == pytest.approx(math.pi)
	assert p("ln(e)").eval() == pytest.approx(1.0)


def test_logarithms(p):
	assert p("log(100)").eval() == pytest.approx(2.0)
	assert p("log(8,2)").eval() == pytest.approx(3.0)


def test_reciprocal_trig(p):
	assert p("sec(0)").eval() == pytest.approx(1.0)
	assert p("cot(x)").eval({"x": 1.0}) == pytest.approx(1.0 / math.tan(1.0))


def test_division_by_zero_is_infinite(p):
	assert math.isinf(p("1/0").eval())


def test_caller_binding_wins_over_constant(p):
	assert p("e").eval({"e": 2.0}) == 2.0


def test_unbound_variable():
	with pytest.raises(KeyError):
		Evaluator().eval(Var("q"), {})


def test_unknown_function():
	with pytest.raises(ValueError):
		Func("foo", (Var("x"),)).eval({"x": 1.0})


@pytest.mark.parametrize(
	"text",
	["(6x+1)(x-1)", "-(a+b)c", "x/(2y)", "sqrt(x)^2", "(x-y)^3/(x+y)", "2^-1x"],
)
def test_normalize_preserves_value(p, text):
	env = {"x": 0.7, "y": 1.3, "a": -2.0, "b": 0.4, "c": 3.0}
	e = p(text)
	assert normalize(e).eval(env) == pytest.approx(e.eval(env))


def test_wrong_arity(p):
	with pytest.raises(ValueError):
		p("sin(x,y)").eval({"x": 1.0, "y": 2.0})
