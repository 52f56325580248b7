"""SymPy bridge: non-evaluating conversion of KAS trees for symbolic certificates.

Provides:
  • SympyBridge.to_sympy(expr): structural conversion with evaluate=False.
  • SympyBridge.symbol_for(name): pi/e map to SymPy constants, everything else to a Symbol.

Module-level functions proxy to SympyBridge methods.
"""

from __future__ import annotations
from fractions import Fraction
from typing import Callable, Dict
import sympy as sp

from kas.syntax.nodes import Add, Expr, Func, Mul, Neg, Num, Pow, Var


def _log(x, base=None):
	if base is None:
		return sp.log(x, 10)
	return sp.log(x, base)


_HEADS: Dict[str, Callable] = {
	"sin": sp.sin, "cos": sp.cos, "tan": sp.tan,
	"sec": sp.sec, "csc": sp.csc, "cot": sp.cot,
	"sinh": sp.sinh, "cosh": sp.cosh, "tanh": sp.tanh,
	"arcsin": sp.asin, "arccos": sp.acos, "arctan": sp.atan,
	"asin": sp.asin, "acos": sp.acos, "atan": sp.atan,
	"ln": sp.log, "log": _log,
	"sqrt": sp.sqrt, "abs": sp.Abs, "exp": sp.exp,
}


class SympyBridge:
	"""Utility namespace for converting KAS trees into SymPy."""

	@staticmethod
	def symbol_for(name: str) -> sp.Expr:
		"""Return the SymPy atom for a variable name."""
		if name == "pi":
			return sp.pi
		if name == "e":
			return sp.E
		return sp.Symbol(name)

	@staticmethod
	def _number(v) -> sp.Expr:
		if isinstance(v, Fraction):
			return sp.Rational(v.numerator, v.denominator)
		return sp.Float(v)

	@staticmethod
	def to_sympy(e: Expr) -> sp.Expr:
		"""Convert a KAS tree into a SymPy expression without evaluating it."""
		if isinstance(e, Num):
			return SympyBridge._number(e.value)
		if isinstance(e, Var):
			return SympyBridge.symbol_for(e.name)
		if isinstance(e, Neg):
			return sp.Mul(sp.Integer(-1), SympyBridge.to_sympy(e.operand), evaluate=False)
		if isinstance(e, Add):
			args_list = []
			for t in e.terms:
				args_list.append(SympyBridge.to_sympy(t))
			return sp.Add(*args_list, evaluate=False)
		if isinstance(e, Mul):
			args_list = []
			for f in e.factors:
				args_list.append(SympyBridge.to_sympy(f))
			return sp.Mul(*args_list, evaluate=False)
		if isinstance(e, Pow):
			return sp.Pow(SympyBridge.to_sympy(e.base), SympyBridge.to_sympy(e.exponent), evaluate=False)
		if isinstance(e, Func):
			head = _HEADS.get(e.name)
			if head is None:
				raise ValueError(f"Function not allowed: {e.name}")
			args_list = []
			for a in e.args:
				args_list.append(SympyBridge.to_sympy(a))
			return head(*args_list)
		raise TypeError(f"to_sympy: unsupported node type {type(e).__name__}")


def to_sympy(e: Expr) -> sp.Expr:
	"""Proxy to SympyBridge.to_sympy."""
	return SympyBridge.to_sympy(e)
