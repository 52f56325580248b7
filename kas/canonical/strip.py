"""
Sign-class stripping: merge the sign/parenthesization variants that plain
normalization keeps apart, so (6x+1)(x-1), (-6x-1)(1-x) and -(6x+1)(1-x) share
one representative.

Every node is reduced to (sign, body) with value = sign * body:
  • numbers contribute their sign and keep their magnitude
  • products multiply their factors' signs into one flag
  • sums keep whichever of (sum, -sum) sorts first under orientation_key
  • integer powers absorb an even base sign and pass an odd one through
  • function arguments are stripped and have their sign reapplied
The top-level sign is reapplied as a single outer negation, so the value is
preserved.
"""

from __future__ import annotations
from typing import List, Optional, Tuple

from kas.config import DEFAULT_CONFIG, EngineConfig
from kas.canonical.normalize import Normalizer
from kas.canonical.order import orientation_key
from kas.syntax.nodes import Add, Expr, Func, MINUS_ONE, Mul, Neg, Num, Pow, Var

Signed = Tuple[int, Expr]


class Stripper:
	"""Stateless sign canonicalizer built on the Normalizer."""

	def __init__(self, config: Optional[EngineConfig] = None) -> None:
		self.config = config or DEFAULT_CONFIG
		self.norm = Normalizer(self.config)

	def _rebuild(self, sign: int, body: Expr) -> Expr:
		"""Reapply a sign to a stripped body."""
		if sign == 1:
			return body
		return self.norm.canonical(Mul((MINUS_ONE, body)))

	def _strip_add(self, e: Add) -> Signed:
		parts: List[Expr] = []
		for t in e.terms:
			s, b = self._strip(t)
			parts.append(self._rebuild(s, b))
		a = self.norm.canonical(Add(tuple(parts)))
		if not isinstance(a, Add):
			return self._strip(a)
		flipped = self.norm.canonical(Mul((MINUS_ONE, a)))
		if orientation_key(flipped) < orientation_key(a):
			return -1, flipped
		return 1, a

	def _strip_mul(self, e: Mul) -> Signed:
		sign = 1
		bodies: List[Expr] = []
		for f in e.factors:
			s, b = self._strip(f)
			sign = sign * s
			bodies.append(b)
		return sign, self.norm.canonical(Mul(tuple(bodies)))

	def _strip_pow(self, e: Pow) -> Signed:
		sb, bb = self._strip(e.base)
		exp = self._rebuild(*self._strip(e.exponent))
		if sb == -1:
			if isinstance(exp, Num) and exp.is_integer():
				p = self.norm.canonical(Pow(bb, exp))
				if int(exp.value) % 2 == 0:
					return 1, p
				return -1, p
			return 1, self.norm.canonical(Pow(self._rebuild(sb, bb), exp))
		return 1, self.norm.canonical(Pow(bb, exp))

	def _strip(self, e: Expr) -> Signed:
		"""Reduce a canonical expression to (sign, body)."""
		if isinstance(e, Num):
			if e.value < 0:
				return -1, Num(-e.value)
			return 1, e
		if isinstance(e, Var):
			return 1, e
		if isinstance(e, Add):
			return self._strip_add(e)
		if isinstance(e, Mul):
			return self._strip_mul(e)
		if isinstance(e, Pow):
			return self._strip_pow(e)
		if isinstance(e, Func):
			args_list = []
			for a in e.args:
				args_list.append(self._rebuild(*self._strip(a)))
			return 1, self.norm.canonical(Func(e.name, tuple(args_list)))
		if isinstance(e, Neg):
			s, b = self._strip(e.operand)
			return -s, b
		raise TypeError(f"strip: unsupported node type {type(e).__name__}")

	def strip(self, e: Expr) -> Expr:
		"""Return the normalized sign-class representative of e."""
		s, b = self._strip(self.norm.canonical(e))
		return self.norm.canonical(self._rebuild(s, b))


def strip(e: Expr, config: Optional[EngineConfig] = None) -> Expr:
	"""Proxy to Stripper.strip."""
	return Stripper(config).strip(e)
