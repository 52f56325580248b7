"""
Canonical normalization for KAS expression trees (finite, terminating transform set).

Transforms, applied bottom-up and iterated to a fixpoint:
  • Flatten nested Add and Mul
  • Combine like terms (x + x -> 2x) and like bases (x*x -> x^2)
  • Order children by the canonical total order (see order.py)
  • Eliminate neutral elements (0 in Add, 1 in Mul), short-circuit zero in Mul
  • Fold numeric literals exactly with Fractions; fold integer powers of rationals
  • Neg(e) -> -1*e, with -1 distributed over a lone sum
  • (b^m)^n and (ab)^n distribute for integer n; sqrt(a) -> a^(1/2)

The normal form is unique for a given class under commutativity, associativity
and sign distribution.
"""

from __future__ import annotations
from fractions import Fraction
from typing import Dict, List, Optional
import math

from kas.config import DEFAULT_CONFIG, EngineConfig
from kas.canonical.order import factor_key, split_coefficient, split_power, term_key
from kas.syntax.nodes import Add, Expr, Func, MINUS_ONE, Mul, Neg, Num, ONE, Pow, Var, ZERO

_HALF = Fraction(1, 2)


class Normalizer:
	"""Stateless canonicalizer; the config bounds folding and the fixpoint loop."""

	def __init__(self, config: Optional[EngineConfig] = None) -> None:
		self.config = config or DEFAULT_CONFIG

	def _canon_num(self, n: Num) -> Expr:
		"""
		Normalize numeric atoms:
		  • Fraction: return as-is
		  • float: integer-valued -> Fraction; small dyadic rational (den in {2,4,8,16})
				   -> exact Fraction; otherwise leave as float.
		"""
		if isinstance(n.value, Fraction):
			return n
		f = float(n.value)
		if not math.isfinite(f):
			return n
		if f.is_integer():
			return Num(Fraction(int(f)))
		num, den = f.as_integer_ratio()
		if den in (2, 4, 8, 16):
			return Num(Fraction(num, den))
		return n

	def _negate(self, c: Expr) -> Expr:
		"""Negate an already-canonical expression."""
		if isinstance(c, Num):
			return Num(-c.value)
		return self._build_mul([MINUS_ONE, c])

	def _scale(self, coef, body: Expr) -> Expr:
		"""Rebuild a term from its coefficient and body."""
		if coef == 1:
			return body
		if isinstance(body, Mul):
			return Mul((Num(coef),) + body.factors)
		return Mul((Num(coef), body))

	def _canon_add(self, e: Add) -> Expr:
		"""Canonicalize an Add: recurse, then rebuild."""
		childs_list = []
		for t in e.terms:
			childs_list.append(self._canon_once(t))
		return self._build_add(childs_list)

	def _build_add(self, childs: List[Expr]) -> Expr:
		"""Flatten canonical terms, combine like terms, drop zeros, and sort."""
		flat: List[Expr] = []
		for c in childs:
			if isinstance(c, Add):
				flat.extend(c.terms)
			else:
				flat.append(c)

		const = Fraction(0)
		groups: Dict[Expr, object] = {}
		for t in flat:
			coef, body = split_coefficient(t)
			if body is None:
				const = const + coef
			else:
				groups[body] = groups.get(body, Fraction(0)) + coef

		keyed = []
		for body, coef in groups.items():
			if coef == 0:
				continue
			keyed.append((term_key(body, coef), self._scale(coef, body)))
		keyed.sort(key=lambda item: item[0])

		out: List[Expr] = []
		if const != 0:
			out.append(Num(const))
		for _k, t in keyed:
			out.append(t)
		if not out:
			return ZERO
		if len(out) == 1:
			return out[0]
		return Add(tuple(out))

	def _canon_mul(self, e: Mul) -> Expr:
		"""Canonicalize a Mul: recurse, then rebuild."""
		childs_list = []
		for f in e.factors:
			childs_list.append(self._canon_once(f))
		return self._build_mul(childs_list)

	def _build_mul(self, childs: List[Expr]) -> Expr:
		"""Flatten canonical factors, collect numeric factor and like bases, zero short-circuit, sort."""
		flat: List[Expr] = []
		for c in childs:
			if isinstance(c, Mul):
				flat.extend(c.factors)
			else:
				flat.append(c)

		coef = Fraction(1)
		bases: Dict[Expr, List[Expr]] = {}
		for f in flat:
			if isinstance(f, Num):
				coef = coef * f.value
			else:
				base, exp = split_power(f)
				bases.setdefault(base, []).append(exp)
		if coef == 0:
			return ZERO

		factors: List[Expr] = []
		for base, exps in bases.items():
			if len(exps) == 1:
				exp = exps[0]
			else:
				exp = self._build_add(exps)
			p = self._build_pow(base, exp)
			if isinstance(p, Mul):
				pieces = p.factors
			else:
				pieces = (p,)
			for q in pieces:
				if isinstance(q, Num):
					coef = coef * q.value
				else:
					factors.append(q)
		if coef == 0:
			return ZERO

		factors.sort(key=factor_key)
		if not factors:
			return Num(coef)
		if coef == -1 and len(factors) == 1 and isinstance(factors[0], Add):
			negated = []
			for t in factors[0].terms:
				negated.append(self._build_mul([MINUS_ONE, t]))
			return self._build_add(negated)
		if coef == 1:
			if len(factors) == 1:
				return factors[0]
			return Mul(tuple(factors))
		return Mul((Num(coef),) + tuple(factors))

	def _fold_root(self, b: Fraction, p: Fraction) -> Optional[Fraction]:
		"""Exact b^p for p = 1/2 when b is a perfect square; else None."""
		if p != _HALF or b < 0:
			return None
		rn = math.isqrt(b.numerator)
		rd = math.isqrt(b.denominator)
		if rn * rn == b.numerator and rd * rd == b.denominator:
			return Fraction(rn, rd)
		return None

	def _canon_pow(self, e: Pow) -> Expr:
		"""Canonicalize a Pow: recurse on base and exponent, then rebuild."""
		return self._build_pow(self._canon_once(e.base), self._canon_once(e.exponent))

	def _build_pow(self, b: Expr, p: Expr) -> Expr:
		"""Rebuild a power from canonical parts with exact-number short-circuits."""
		if isinstance(p, Num):
			if p.value == 0:
				if isinstance(b, Num) and b.value == 0:
					return Pow(b, p)
				return ONE
			if p.value == 1:
				return b
		if isinstance(b, Num):
			if b.value == 1:
				return ONE
			if b.value == 0 and isinstance(p, Num) and p.value > 0:
				return ZERO
			if isinstance(p, Num) and isinstance(b.value, Fraction) and isinstance(p.value, Fraction):
				if p.is_integer():
					k = int(p.value)
					if abs(k) <= self.config.max_fold_exponent and not (b.value == 0 and k < 0):
						return Num(b.value ** k)
				root = self._fold_root(b.value, p.value)
				if root is not None:
					return Num(root)
		if isinstance(p, Num) and p.is_integer():
			if isinstance(b, Pow):
				exp = self._build_mul([b.exponent, p])
				return self._build_pow(b.base, exp)
			if isinstance(b, Mul):
				parts = []
				for f in b.factors:
					parts.append(self._build_pow(f, p))
				return self._build_mul(parts)
		return Pow(b, p)

	def _canon_func(self, e: Func) -> Expr:
		"""Canonicalize a Func: recurse on args; sqrt becomes a half power."""
		args_list = []
		for a in e.args:
			args_list.append(self._canon_once(a))
		if e.name == "sqrt" and len(args_list) == 1:
			return self._build_pow(args_list[0], Num(_HALF))
		return Func(e.name, tuple(args_list))

	def _canon_once(self, e: Expr) -> Expr:
		"""Apply one pass of canonical transforms by dispatch on node type."""
		if isinstance(e, Num):
			return self._canon_num(e)
		if isinstance(e, Var):
			return e
		if isinstance(e, Neg):
			return self._negate(self._canon_once(e.operand))
		if isinstance(e, Add):
			return self._canon_add(e)
		if isinstance(e, Mul):
			return self._canon_mul(e)
		if isinstance(e, Pow):
			return self._canon_pow(e)
		if isinstance(e, Func):
			return self._canon_func(e)
		raise TypeError(f"normalize: unsupported node type {type(e).__name__}")

	def canonical(self, e: Expr) -> Expr:
		"""
		Return the unique canonical normal form of `e`.
		"""
		cur = e
		for _ in range(self.config.max_passes):
			nxt = self._canon_once(cur)
			if nxt == cur:
				return nxt
			cur = nxt
		raise RuntimeError(f"normalize: no fixpoint after {self.config.max_passes} passes")


def normalize(e: Expr, config: Optional[EngineConfig] = None) -> Expr:
	"""Proxy to Normalizer.canonical."""
	return Normalizer(config).canonical(e)
