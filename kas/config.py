"""
Engine configuration and typed defaults.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Tuple
import math


FUNCTION_NAMES: Tuple[str, ...] = (
	"sin", "cos", "tan", "sec", "csc", "cot",
	"sinh", "cosh", "tanh",
	"arcsin", "arccos", "arctan", "asin", "acos", "atan",
	"ln", "log", "sqrt", "abs", "exp",
)

SYMBOL_NAMES: Tuple[str, ...] = (
	"pi", "theta", "alpha", "beta", "gamma", "delta", "phi",
	"tau", "omega", "lambda", "sigma", "rho", "epsilon",
)


@dataclass(frozen=True)
class EngineConfig:
	"""
	Reserved words, folding bounds and answer-checking parameters.
	"""
	function_names: Tuple[str, ...] = FUNCTION_NAMES
	symbol_names: Tuple[str, ...] = SYMBOL_NAMES
	max_fold_exponent: int = 64
	max_passes: int = 32
	fingerprint_points: int = 8
	fingerprint_grid: Tuple[float, ...] = (-2.0, -1.0, -0.5, 0.5, 1.0, 2.0)
	fingerprint_digits: int = 6
	constants: Dict[str, float] = field(default_factory=lambda: {"pi": math.pi, "e": math.e})

	def reserved_words(self) -> Tuple[str, ...]:
		"""Return function and symbol names, longest first, for longest-match lexing."""
		words = set(self.function_names) | set(self.symbol_names)
		return tuple(sorted(words, key=lambda w: (-len(w), w)))


DEFAULT_CONFIG = EngineConfig()
