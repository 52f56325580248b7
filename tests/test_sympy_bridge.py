import pytest
import sympy as sp

from kas import Func, Var, normalize, strip
from kas.io import to_sympy


def test_constants_map_to_sympy():
	assert to_sympy(Var("pi")) is sp.pi
	assert to_sympy(Var("e")) is sp.E
	assert to_sympy(Var("x")) == sp.Symbol("x")


def test_conversion_is_faithful(p):
	x = sp.Symbol("x")
	assert sp.simplify(p("x^2+2x+1").to_sympy() - (x + 1) ** 2) == 0
	assert sp.simplify(p("log(x,2)").to_sympy() - sp.log(x, 2)) == 0


def test_unknown_function_rejected():
	with pytest.raises(ValueError):
		to_sympy(Func("foo", (Var("x"),)))


@pytest.mark.parametrize(
	"text",
	[
		"(6x+1)(x-1)",
		"x+x",
		"-(a+b)",
		"x/(2y)",
		"x*x^3",
		"(a-b)(a+b)",
		"3/(2y)",
		"(x-1)^2",
		"-(6x+1)(1-x)",
	],
)
def test_transforms_preserve_value(p, text):
	e = p(text)
	assert sp.simplify(normalize(e).to_sympy() - e.to_sympy()) == 0
	assert sp.simplify(strip(e).to_sympy() - e.to_sympy()) == 0
