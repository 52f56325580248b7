"""Answer checking over expression texts (class-based).

Provides:
  • EqualityChecks.canonical_key(text, strip=False) -> printed canonical form or None
  • EqualityChecks.numeric_fingerprint(expr, variables=None) -> BLAKE2b digest
  • EqualityChecks.symbolic_equal(f, g) -> simplify(f - g) == 0
  • EqualityChecks.compare(a, b) -> CompareResult

compare() runs three stages: canonical form (plain, then stripped), numeric
fingerprint refutation on a fixed grid, and a SymPy certificate.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Tuple
import hashlib
import numpy as np
import sympy as sp

from kas.config import DEFAULT_CONFIG, EngineConfig
from kas.canonical.normalize import Normalizer
from kas.canonical.strip import Stripper
from kas.numeric.evaluate import Evaluator
from kas.printing.printer import Printer
from kas.syntax.nodes import Expr
from kas.syntax.parser import parse


@dataclass(frozen=True)
class CompareResult:
	"""Outcome of an answer check and the stage that decided it."""
	equal: bool
	stage: str
	message: str


class EqualityChecks:
	"""Encapsulates canonical-form, numeric and symbolic equality checks."""

	def __init__(self, config: Optional[EngineConfig] = None) -> None:
		self.config = config or DEFAULT_CONFIG
		self._norm = Normalizer(self.config)
		self._strip = Stripper(self.config)
		self._eval = Evaluator(self.config)
		self._printer = Printer()

	def canonical_form(self, e: Expr, strip: bool = False) -> str:
		"""Printed canonical form of an expression."""
		if strip:
			return self._printer.print(self._strip.strip(e))
		return self._printer.print(self._norm.canonical(e))

	def canonical_key(self, text: str, strip: bool = False) -> Optional[str]:
		"""Printed canonical form of text, or None if it does not parse."""
		p = parse(text, self.config)
		if not p.ok:
			return None
		return self.canonical_form(p.expr, strip)

	def _free_names(self, e: Expr) -> Tuple[str, ...]:
		names = []
		for n in e.get_vars():
			if n not in self.config.constants:
				names.append(n)
		return tuple(names)

	def numeric_fingerprint(self, e: Expr, variables: Optional[Tuple[str, ...]] = None) -> str:
		"""
		Deterministic numeric fingerprint by evaluating on a fixed nonzero grid.
		"""
		if variables is None:
			syms = self._free_names(e)
		else:
			syms = tuple(variables)
		vals = np.array(self.config.fingerprint_grid, dtype=np.float64)
		digits = self.config.fingerprint_digits
		out_codes: List[str] = []
		n_eval = max(1, int(self.config.fingerprint_points))

		for t in range(n_eval):
			assigns = {}
			for k, s in enumerate(syms):
				assigns[s] = float(vals[(2 * t + k) % len(vals)])
			v = self._eval.eval(e, assigns)
			if not np.isfinite(v):
				print(f"numeric_fingerprint: non-finite value at point {t}; emitting 'nan'")
				out_codes.append("nan")
			else:
				if abs(v) < 0.5 * 10.0 ** (-digits):
					v = 0.0
				out_codes.append(f"{v:.{digits}f}")

		blob = "|".join(out_codes).encode("utf-8")
		h = hashlib.blake2b(blob, digest_size=8)
		return h.hexdigest()

	def symbolic_equal(self, f: Expr, g: Expr) -> bool:
		"""
		Return True iff simplify(f - g) is exactly zero (symbolic certificate).
		"""
		d = sp.simplify(f.to_sympy() - g.to_sympy())
		if d == 0:
			return True
		else:
			return False

	def compare(self, a: str, b: str) -> CompareResult:
		"""Decide whether two answer texts are equivalent."""
		pa = parse(a, self.config)
		if not pa.ok:
			return CompareResult(False, "parse", f"first input: {pa.message}")
		pb = parse(b, self.config)
		if not pb.ok:
			return CompareResult(False, "parse", f"second input: {pb.message}")
		fa = pa.expr
		fb = pb.expr

		if self.canonical_form(fa) == self.canonical_form(fb):
			return CompareResult(True, "form", "canonical forms match")
		if self.canonical_form(fa, strip=True) == self.canonical_form(fb, strip=True):
			return CompareResult(True, "strip", "canonical forms match after stripping signs")

		names = sorted(set(self._free_names(fa)) | set(self._free_names(fb)))
		if self.numeric_fingerprint(fa, tuple(names)) != self.numeric_fingerprint(fb, tuple(names)):
			return CompareResult(False, "fingerprint", "values differ on the sample grid")

		if self.symbolic_equal(fa, fb):
			return CompareResult(True, "symbolic", "simplify(f-g)==0")
		return CompareResult(False, "symbolic", "no symbolic certificate")
