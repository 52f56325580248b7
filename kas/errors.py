"""
Error taxonomy for malformed input.

  • ParseError: base; carries message, source offset, expected token
  • LexError: unrecognized character or malformed number
  • ExpressionSyntaxError: token sequence does not match the grammar
"""

from __future__ import annotations
from typing import Optional


class ParseError(ValueError):
	"""Malformed expression text; the first error terminates parsing."""

	def __init__(self, message: str, offset: int, expected: Optional[str] = None) -> None:
		super().__init__(message)
		self.message = message
		self.offset = offset
		self.expected = expected

	def __str__(self) -> str:
		if self.expected is not None:
			return f"{self.message} at offset {self.offset} (expected {self.expected})"
		return f"{self.message} at offset {self.offset}"


class LexError(ParseError):
	pass


class ExpressionSyntaxError(ParseError):
	pass
