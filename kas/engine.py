"""
parse -> strip? -> normalize -> print, plus answer comparison.
"""

from __future__ import annotations
from typing import Optional, Union

from kas.acceptance.equality import CompareResult, EqualityChecks
from kas.canonical.normalize import Normalizer
from kas.canonical.strip import Stripper
from kas.config import DEFAULT_CONFIG, EngineConfig
from kas.printing.printer import Printer
from kas.syntax.nodes import Expr
from kas.syntax.parser import ParseResult, parse

ExprLike = Union[Expr, str]


class Engine:
	"""Public facade binding one configuration to the whole pipeline."""

	def __init__(self, config: Optional[EngineConfig] = None) -> None:
		"""Initialize the normalizer, stripper, printer and equality checks."""
		self.config = config or DEFAULT_CONFIG
		self.norm = Normalizer(self.config)
		self.stripper = Stripper(self.config)
		self.printer = Printer()
		self.checks = EqualityChecks(self.config)

	def parse(self, text: str) -> ParseResult:
		"""Parse text; malformed input yields a failed ParseResult."""
		return parse(text, self.config)

	def _expr(self, e: ExprLike) -> Optional[Expr]:
		if isinstance(e, str):
			return self.parse(e).expr
		return e

	def canonical(self, e: Expr, strip: bool = False) -> Expr:
		"""Return the canonical tree, optionally stripping sign variants first."""
		if strip:
			return self.stripper.strip(e)
		return self.norm.canonical(e)

	def canonical_form(self, e: ExprLike, strip: bool = False) -> Optional[str]:
		"""Printed canonical form, or None when text does not parse."""
		ex = self._expr(e)
		if ex is None:
			return None
		return self.printer.print(self.canonical(ex, strip))

	def same_form(self, a: ExprLike, b: ExprLike, strip: bool = False) -> bool:
		"""True iff both inputs parse and share a printed canonical form."""
		fa = self.canonical_form(a, strip)
		fb = self.canonical_form(b, strip)
		if fa is None or fb is None:
			return False
		return fa == fb

	def compare(self, a: str, b: str) -> CompareResult:
		"""Full answer check: form, stripped form, fingerprint, symbolic certificate."""
		return self.checks.compare(a, b)
