from fractions import Fraction

import pytest

from kas import EngineConfig, LexError, TokenKind, tokenize


def kinds(text):
	return [t.kind for t in tokenize(text)]


def values(text):
	return [t.value for t in tokenize(text)[:-1]]


def test_basic_stream():
	assert kinds("2x+sin(y)") == [
		TokenKind.NUMBER, TokenKind.IDENTIFIER, TokenKind.OPERATOR,
		TokenKind.FUNCTION, TokenKind.LPAREN, TokenKind.IDENTIFIER,
		TokenKind.RPAREN, TokenKind.EOF,
	]


def test_numbers_are_exact():
	assert values("0.5") == [Fraction(1, 2)]
	assert values(".25") == [Fraction(1, 4)]
	assert values("12") == [Fraction(12)]


def test_offsets_skip_whitespace():
	toks = tokenize("  x + 1")
	assert [t.offset for t in toks] == [2, 4, 6, 7]


def test_letter_runs_split_unless_reserved():
	assert values("ab") == ["a", "b"]
	assert values("sinx") == ["sin", "x"]
	assert values("sinh(x)")[0] == "sinh"
	assert values("theta") == ["theta"]
	assert values("e") == ["e"]


def test_subscripts():
	assert values("x_1") == ["x_1"]
	assert values("x_{12}y") == ["x_12", "y"]


def test_operator_aliases():
	assert values("2**3") == [Fraction(2), "^", Fraction(3)]
	assert values("3×4") == [Fraction(3), "*", Fraction(4)]
	assert values("a−b") == ["a", "-", "b"]
	assert values("6÷2") == [Fraction(6), "/", Fraction(2)]
	assert values("2π") == [Fraction(2), "pi"]


def test_malformed_number():
	with pytest.raises(LexError) as exc:
		tokenize("1.2.3")
	assert exc.value.offset == 3


def test_unrecognized_character():
	with pytest.raises(LexError) as exc:
		tokenize("x$")
	assert exc.value.offset == 1
	assert "unrecognized character" in str(exc.value)


def test_reserved_words_from_config():
	cfg = EngineConfig(function_names=("f",))
	assert tokenize("f(x)", cfg)[0].kind is TokenKind.FUNCTION
	assert values("f(x)")[0] == "f"
	words = cfg.reserved_words()
	assert len(words[0]) == max(len(w) for w in words)
