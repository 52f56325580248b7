"""
Deterministic serializer from expression trees back to text.

Rules:
  • minimal parentheses under + - < * / < unary - < ^
  • subtracted terms print as "-"; products put the coefficient first
  • juxtaposition (6x, x^2y) unless it would tokenize differently, then "*"
  • negative numeric exponents print as a denominator (x/(2y)); a^(1/2) as sqrt(a)
"""

from __future__ import annotations
from fractions import Fraction
from typing import List, Tuple
import math

from kas.errors import LexError
from kas.syntax.nodes import Add, Expr, Func, Mul, Neg, Num, Pow, Var
from kas.syntax.tokens import TokenKind, Tokenizer

PREC_ADD = 1
PREC_MUL = 2
PREC_NEG = 3
PREC_POW = 4
PREC_ATOM = 5

_HALF = Fraction(1, 2)


def _is_half(e: Expr) -> bool:
	return isinstance(e, Num) and e.value == _HALF


def _is_negative_number(e: Expr) -> bool:
	return isinstance(e, Num) and e.value < 0


def _is_zero_reciprocal(e: Expr) -> bool:
	"""0^-n: kept as an explicit power, since 1/(0y) would reparse as 1/0."""
	return isinstance(e, Pow) and isinstance(e.base, Num) and e.base.value == 0 and _is_negative_number(e.exponent)


class Printer:
	"""Stateless printer; the output is the comparison key for equivalence checks."""

	def __init__(self) -> None:
		self._tok = Tokenizer()

	def print(self, e: Expr) -> str:
		if isinstance(e, Num):
			return self._num(e.value)
		if isinstance(e, Var):
			return e.name
		if isinstance(e, Add):
			return self._add(e)
		if isinstance(e, Mul):
			return self._mul(e.factors)
		if isinstance(e, Pow):
			return self._pow(e)
		if isinstance(e, Neg):
			op = e.operand
			s = self.print(op)
			if self.prec(op) <= PREC_ADD or self.prec(op) == PREC_NEG or (isinstance(op, Mul) and s.startswith("(")):
				return f"-({s})"
			return "-" + s
		if isinstance(e, Func):
			args = []
			for a in e.args:
				args.append(self.print(a))
			return f"{e.name}({','.join(args)})"
		raise TypeError(f"print: unsupported node type {type(e).__name__}")

	def prec(self, e: Expr) -> int:
		"""Binding strength of the printed form of e."""
		if isinstance(e, Num):
			if e.value < 0:
				return PREC_NEG
			if isinstance(e.value, Fraction) and e.value.denominator != 1:
				return PREC_MUL
			return PREC_ATOM
		if isinstance(e, (Var, Func)):
			return PREC_ATOM
		if isinstance(e, Add):
			return PREC_ADD
		if isinstance(e, Mul):
			return PREC_MUL
		if isinstance(e, Pow):
			if _is_half(e.exponent):
				return PREC_ATOM
			if _is_zero_reciprocal(e):
				return PREC_POW
			if _is_negative_number(e.exponent):
				return PREC_MUL
			return PREC_POW
		if isinstance(e, Neg):
			return PREC_NEG
		raise TypeError(f"prec: unsupported node type {type(e).__name__}")

	def _wrap(self, e: Expr, paren: bool) -> str:
		s = self.print(e)
		if paren:
			return f"({s})"
		return s

	def _num(self, v) -> str:
		if isinstance(v, Fraction):
			if v.denominator == 1:
				return str(v.numerator)
			return f"{v.numerator}/{v.denominator}"
		f = float(v)
		if math.isfinite(f) and f.is_integer():
			return str(int(f))
		s = repr(f)
		if "e" in s or not math.isfinite(f):
			return self._num(Fraction(f))
		return s

	def split_sign(self, e: Expr) -> Tuple[bool, Expr]:
		"""Return (negative, magnitude) so that e == -magnitude when negative."""
		if isinstance(e, Num) and e.value < 0:
			return True, Num(-e.value)
		if isinstance(e, Neg):
			return True, e.operand
		if isinstance(e, Mul) and e.factors:
			head = e.factors[0]
			rest = e.factors[1:]
			if isinstance(head, Num) and head.value < 0:
				if head.value != -1:
					rest = (Num(-head.value),) + rest
			elif isinstance(head, Neg):
				rest = (head.operand,) + rest
			else:
				return False, e
			if len(rest) == 0:
				return True, Num(1)
			if len(rest) == 1:
				return True, rest[0]
			return True, Mul(rest)
		return False, e

	def _add(self, e: Add) -> str:
		if len(e.terms) == 0:
			raise ValueError("print: Add with no terms")
		first = e.terms[0]
		out = [self._wrap(first, self.prec(first) <= PREC_ADD)]
		for t in e.terms[1:]:
			neg, mag = self.split_sign(t)
			if neg:
				out.append("-" + self._wrap(mag, self.prec(mag) <= PREC_ADD or self.prec(mag) == PREC_NEG))
			else:
				out.append("+" + self._wrap(t, self.prec(t) <= PREC_ADD))
		return "".join(out)

	def _mul(self, factors: Tuple[Expr, ...]) -> str:
		if len(factors) == 0:
			raise ValueError("print: Mul with no factors")
		neg, mag = self.split_sign(Mul(factors))
		if neg:
			s = self.print(mag)
			# a leading group would otherwise take the unary minus alone
			if self.prec(mag) <= PREC_ADD or (isinstance(mag, Mul) and s.startswith("(")):
				return f"-({s})"
			return "-" + s

		num: List[str] = []
		den: List[Tuple[str, Expr]] = []
		rest = factors
		head = factors[0]
		if isinstance(head, Num) and isinstance(head.value, Fraction):
			if head.value.numerator != 1:
				num.append(str(head.value.numerator))
			if head.value.denominator != 1:
				den.append((str(head.value.denominator), Num(head.value.denominator)))
			rest = factors[1:]

		for f in rest:
			if _is_zero_reciprocal(f):
				num.append(self._pow(f))
				continue
			if isinstance(f, Pow) and _is_negative_number(f.exponent):
				flipped = -f.exponent.value
				if flipped == 1:
					d = f.base
				else:
					d = Pow(f.base, Num(flipped))
				den.append((self._wrap(d, self.prec(d) < PREC_POW), d))
			else:
				num.append(self._wrap(f, self.prec(f) < PREC_POW))

		if num:
			top = self._juxtapose(num)
		else:
			top = "1"
		if not den:
			return top
		if len(den) == 1:
			return f"{top}/{den[0][0]}"
		pieces = []
		for s, _d in den:
			pieces.append(s)
		return f"{top}/({self._juxtapose(pieces)})"

	def _pow(self, e: Pow) -> str:
		if _is_half(e.exponent):
			return f"sqrt({self.print(e.base)})"
		if _is_zero_reciprocal(e):
			return f"0^({self.print(e.exponent)})"
		if _is_negative_number(e.exponent):
			return self._mul((e,))
		base = self._wrap(e.base, self.prec(e.base) < PREC_ATOM)
		exp = self._wrap(e.exponent, self.prec(e.exponent) < PREC_ATOM)
		return f"{base}^{exp}"

	def _lex(self, s: str) -> List[Tuple[TokenKind, object]]:
		out = []
		for t in self._tok.tokenize(s):
			out.append((t.kind, t.value))
		return out

	def _joins_cleanly(self, left: str, right: str) -> bool:
		"""True iff left+right tokenizes as left's tokens followed by right's."""
		try:
			joined = self._lex(left + right)
			return joined == self._lex(left)[:-1] + self._lex(right)
		except LexError:
			return False

	def _juxtapose(self, pieces: List[str]) -> str:
		out = pieces[0]
		for p in pieces[1:]:
			if self._joins_cleanly(out, p):
				out += p
			else:
				out += "*" + p
		return out
