"""
Tokenizer: raw expression text -> flat list of tokens.

Recognizes:
  • decimal literals (stored as exact Fractions)
  • reserved function names and named symbols by longest match
  • single-letter identifiers with optional subscript (x_1, x_{12})
  • operators + - * / ^ (and ** as ^), parentheses, comma
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from typing import List, Optional
import re

from kas.config import DEFAULT_CONFIG, EngineConfig
from kas.errors import LexError


class TokenKind(Enum):
	NUMBER = "number"
	IDENTIFIER = "identifier"
	OPERATOR = "operator"
	LPAREN = "("
	RPAREN = ")"
	COMMA = ","
	FUNCTION = "function"
	EOF = "end of input"


@dataclass(frozen=True)
class Token:
	"""Immutable lexical token with its source offset."""
	kind: TokenKind
	text: str
	offset: int
	value: object = None

	def describe(self) -> str:
		"""Human-readable token description for error messages."""
		if self.kind is TokenKind.EOF:
			return "end of input"
		return f"'{self.text}'"


_NUM_RE = re.compile(r"\d+(?:\.\d+)?|\.\d+")
_SUBSCRIPT_RE = re.compile(r"_(?:\{([A-Za-z0-9]+)\}|([A-Za-z0-9]+))")

_ALIASES = {
	"−": "-",
	"×": "*",
	"·": "*",
	"⋅": "*",
	"÷": "/",
}
_SYMBOL_ALIASES = {
	"π": "pi",
	"θ": "theta",
}
_OPERATORS = {"+", "-", "*", "/", "^"}


class Tokenizer:
	"""Stateless scanner; the config supplies reserved words."""

	def __init__(self, config: Optional[EngineConfig] = None) -> None:
		self.config = config or DEFAULT_CONFIG
		self._reserved = self.config.reserved_words()
		self._functions = set(self.config.function_names)

	def _match_reserved(self, text: str, pos: int) -> Optional[str]:
		"""Return the longest reserved word starting at pos, or None."""
		for word in self._reserved:
			if text.startswith(word, pos):
				return word
		return None

	def _scan_number(self, text: str, pos: int) -> Token:
		m = _NUM_RE.match(text, pos)
		lit = m.group(0)
		end = m.end()
		if end < len(text) and text[end] == ".":
			raise LexError(f"malformed number '{lit}.'", end)
		return Token(TokenKind.NUMBER, lit, pos, Fraction(lit))

	def _scan_word(self, text: str, pos: int) -> Token:
		word = self._match_reserved(text, pos)
		if word is not None:
			if word in self._functions:
				return Token(TokenKind.FUNCTION, word, pos, word)
			return Token(TokenKind.IDENTIFIER, word, pos, word)
		name = text[pos]
		m = _SUBSCRIPT_RE.match(text, pos + 1)
		if m:
			sub = m.group(1) or m.group(2)
			return Token(TokenKind.IDENTIFIER, text[pos:m.end()], pos, f"{name}_{sub}")
		return Token(TokenKind.IDENTIFIER, name, pos, name)

	def tokenize(self, text: str) -> List[Token]:
		"""Scan text into tokens terminated by an EOF token; raise LexError on bad input."""
		out: List[Token] = []
		n = len(text)
		i = 0
		while i < n:
			ch = _ALIASES.get(text[i], text[i])
			if ch.isspace():
				i += 1
				continue
			if ch.isdigit() or (ch == "." and i + 1 < n and text[i + 1].isdigit()):
				tok = self._scan_number(text, i)
				out.append(tok)
				i += len(tok.text)
				continue
			if text[i] in _SYMBOL_ALIASES:
				name = _SYMBOL_ALIASES[text[i]]
				out.append(Token(TokenKind.IDENTIFIER, text[i], i, name))
				i += 1
				continue
			if ch.isascii() and ch.isalpha():
				tok = self._scan_word(text, i)
				out.append(tok)
				i += len(tok.text)
				continue
			if ch == "*" and text.startswith("**", i):
				out.append(Token(TokenKind.OPERATOR, "**", i, "^"))
				i += 2
				continue
			if ch in _OPERATORS:
				out.append(Token(TokenKind.OPERATOR, text[i], i, ch))
				i += 1
				continue
			if ch == "(":
				out.append(Token(TokenKind.LPAREN, ch, i))
			elif ch == ")":
				out.append(Token(TokenKind.RPAREN, ch, i))
			elif ch == ",":
				out.append(Token(TokenKind.COMMA, ch, i))
			else:
				raise LexError(f"unrecognized character '{text[i]}'", i)
			i += 1
		out.append(Token(TokenKind.EOF, "", n))
		return out


def tokenize(text: str, config: Optional[EngineConfig] = None) -> List[Token]:
	"""Proxy to Tokenizer.tokenize."""
	return Tokenizer(config).tokenize(text)
