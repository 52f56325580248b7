"""
Floating-point evaluator for expression trees
---------------------------------------------
Evaluates with NumPy float64 semantics under `np.errstate(all="ignore")`, so
division by zero and domain errors surface as inf/nan instead of raising:

  • ln(x)      → natural logarithm
  • log(x)     → base-10 logarithm; log(x, b) → base b
  • sec/csc/cot → reciprocals of cos/sin/tan
  • pi, e      → bound from the config unless the caller binds them

Unbound variables raise KeyError; unknown function names and wrong arities
raise ValueError.
"""

from __future__ import annotations
from typing import Callable, Dict, Mapping, Optional
import numpy as np

from kas.config import DEFAULT_CONFIG, EngineConfig
from kas.syntax.nodes import Add, Expr, Func, Mul, Neg, Num, Pow, Var


def _log(x, base=None):
	if base is None:
		return np.log10(x)
	return np.log(x) / np.log(base)


_FUNCS: Dict[str, Callable] = {
	"sin": np.sin,
	"cos": np.cos,
	"tan": np.tan,
	"sec": lambda x: 1.0 / np.cos(x),
	"csc": lambda x: 1.0 / np.sin(x),
	"cot": lambda x: 1.0 / np.tan(x),
	"sinh": np.sinh,
	"cosh": np.cosh,
	"tanh": np.tanh,
	"arcsin": np.arcsin,
	"arccos": np.arccos,
	"arctan": np.arctan,
	"asin": np.arcsin,
	"acos": np.arccos,
	"atan": np.arctan,
	"ln": np.log,
	"log": _log,
	"sqrt": np.sqrt,
	"abs": np.abs,
	"exp": np.exp,
}


class Evaluator:
	"""Evaluate expression trees at a point."""

	def __init__(self, config: Optional[EngineConfig] = None) -> None:
		self.config = config or DEFAULT_CONFIG

	def _lookup(self, name: str, env: Mapping[str, float]) -> np.float64:
		if name in env:
			return np.float64(env[name])
		if name in self.config.constants:
			return np.float64(self.config.constants[name])
		raise KeyError(f"unbound variable '{name}'")

	def _eval(self, e: Expr, env: Mapping[str, float]) -> np.float64:
		if isinstance(e, Num):
			return np.float64(float(e.value))
		if isinstance(e, Var):
			return self._lookup(e.name, env)
		if isinstance(e, Neg):
			return -self._eval(e.operand, env)
		if isinstance(e, Add):
			total = np.float64(0.0)
			for t in e.terms:
				total = total + self._eval(t, env)
			return total
		if isinstance(e, Mul):
			prod = np.float64(1.0)
			for f in e.factors:
				prod = prod * self._eval(f, env)
			return prod
		if isinstance(e, Pow):
			return np.power(self._eval(e.base, env), self._eval(e.exponent, env))
		if isinstance(e, Func):
			fn = _FUNCS.get(e.name)
			if fn is None:
				raise ValueError(f"unknown function '{e.name}'")
			if len(e.args) != 1 and not (e.name == "log" and len(e.args) == 2):
				raise ValueError(f"wrong number of arguments for '{e.name}': {len(e.args)}")
			args = []
			for a in e.args:
				args.append(self._eval(a, env))
			return np.float64(fn(*args))
		raise TypeError(f"eval: unsupported node type {type(e).__name__}")

	def eval(self, e: Expr, env: Mapping[str, float]) -> float:
		"""Return e evaluated at env as a Python float (may be inf or nan)."""
		with np.errstate(all="ignore"):
			return float(self._eval(e, env))
