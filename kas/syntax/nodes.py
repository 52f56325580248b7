"""
Immutable expression tree.

Variants: Num, Var, Add, Mul, Pow, Neg, Func. Every transform returns a new
tree; nodes are frozen dataclasses and may be shared freely between trees.
"""

from __future__ import annotations
from dataclasses import dataclass
from fractions import Fraction
from typing import Dict, Iterator, Optional, Tuple, Union

Number = Union[Fraction, float]


class Expr:
	"""Base class for all expression nodes."""

	def children(self) -> Tuple["Expr", ...]:
		return ()

	def walk(self) -> Iterator["Expr"]:
		"""Pre-order traversal of this node and all descendants."""
		yield self
		for c in self.children():
			yield from c.walk()

	def normalize(self, config=None) -> "Expr":
		"""Return the canonical representative of this expression."""
		from kas.canonical.normalize import Normalizer
		return Normalizer(config).canonical(self)

	def strip(self, config=None) -> "Expr":
		"""Return the sign-class representative of this expression."""
		from kas.canonical.strip import Stripper
		return Stripper(config).strip(self)

	def print(self) -> str:
		"""Render with minimal parentheses."""
		from kas.printing.printer import Printer
		return Printer().print(self)

	def eval(self, env: Optional[Dict[str, float]] = None, config=None) -> float:
		"""Evaluate in floating point with the given variable bindings."""
		from kas.numeric.evaluate import Evaluator
		return Evaluator(config).eval(self, env or {})

	def to_sympy(self):
		"""Convert to a SymPy expression without evaluation."""
		from kas.io.sympy_bridge import SympyBridge
		return SympyBridge.to_sympy(self)

	def get_vars(self) -> Tuple[str, ...]:
		"""Sorted names of the variables occurring in this expression."""
		names = set()
		for node in self.walk():
			if isinstance(node, Var):
				names.add(node.name)
		return tuple(sorted(names))

	def has(self, node_type: type) -> bool:
		for node in self.walk():
			if isinstance(node, node_type):
				return True
		return False

	def __str__(self) -> str:
		return self.print()


@dataclass(frozen=True, eq=True)
class Num(Expr):
	value: Number

	def __post_init__(self) -> None:
		if isinstance(self.value, bool):
			raise TypeError("Num value must be numeric, not bool")
		if isinstance(self.value, int):
			object.__setattr__(self, "value", Fraction(self.value))

	def is_integer(self) -> bool:
		if isinstance(self.value, Fraction):
			return self.value.denominator == 1
		return float(self.value).is_integer()

	def is_negative(self) -> bool:
		return self.value < 0


@dataclass(frozen=True, eq=True)
class Var(Expr):
	name: str


@dataclass(frozen=True, eq=True)
class Add(Expr):
	terms: Tuple[Expr, ...]

	def __post_init__(self) -> None:
		object.__setattr__(self, "terms", tuple(self.terms))

	def children(self) -> Tuple[Expr, ...]:
		return self.terms


@dataclass(frozen=True, eq=True)
class Mul(Expr):
	factors: Tuple[Expr, ...]

	def __post_init__(self) -> None:
		object.__setattr__(self, "factors", tuple(self.factors))

	def children(self) -> Tuple[Expr, ...]:
		return self.factors

	def coefficient(self) -> Optional[Num]:
		"""Leading numeric factor, if any."""
		if self.factors and isinstance(self.factors[0], Num):
			return self.factors[0]
		return None


@dataclass(frozen=True, eq=True)
class Pow(Expr):
	base: Expr
	exponent: Expr

	def children(self) -> Tuple[Expr, ...]:
		return (self.base, self.exponent)


@dataclass(frozen=True, eq=True)
class Neg(Expr):
	operand: Expr

	def children(self) -> Tuple[Expr, ...]:
		return (self.operand,)


@dataclass(frozen=True, eq=True)
class Func(Expr):
	name: str
	args: Tuple[Expr, ...]

	def __post_init__(self) -> None:
		object.__setattr__(self, "args", tuple(self.args))

	def children(self) -> Tuple[Expr, ...]:
		return self.args


ZERO = Num(Fraction(0))
ONE = Num(Fraction(1))
MINUS_ONE = Num(Fraction(-1))
