"""
Canonical total order over already-canonical subtrees.

Keys are derived from printed forms, never from insertion order or hashes:
  • Add terms: (printed body, coefficient), constant term first
  • Mul factors: (printed base, printed exponent), coefficient first
  • Sign orientation of a sum: (number of negative terms, printed form)
"""

from __future__ import annotations
from fractions import Fraction
from typing import Tuple

from kas.printing.printer import Printer
from kas.syntax.nodes import Add, Expr, Mul, Num, ONE, Pow

_printer = Printer()


def split_coefficient(t: Expr) -> Tuple[object, Expr | None]:
	"""Split a canonical term into (numeric coefficient, body); body is None for constants."""
	if isinstance(t, Num):
		return t.value, None
	if isinstance(t, Mul):
		head = t.coefficient()
		if head is not None:
			rest = t.factors[1:]
			if len(rest) == 1:
				return head.value, rest[0]
			return head.value, Mul(rest)
	return Fraction(1), t


def split_power(f: Expr) -> Tuple[Expr, Expr]:
	"""Split a factor into (base, exponent); non-powers have exponent 1."""
	if isinstance(f, Pow):
		return f.base, f.exponent
	return f, ONE


def term_key(body: Expr, coef) -> Tuple[str, object]:
	return (_printer.print(body), coef)


def factor_key(f: Expr) -> Tuple[str, str]:
	base, exp = split_power(f)
	return (_printer.print(base), _printer.print(exp))


def orientation_key(e: Expr) -> Tuple[int, str]:
	"""Order used to pick between a sum and its sign-flipped counterpart."""
	negatives = 0
	if isinstance(e, Add):
		for t in e.terms:
			neg, _mag = _printer.split_sign(t)
			if neg:
				negatives += 1
	return (negatives, _printer.print(e))
