"""
Recursive-descent parser producing raw (non-canonical) expression trees.

Grammar, lowest to highest precedence:

	expr   := term (("+" | "-") term)*
	term   := unary (("*" | "/") unary | <juxtaposed> power)*
	unary  := ("-" | "+") unary | power
	power  := atom ("^" unary)?
	atom   := NUMBER | IDENTIFIER | "(" expr ")" | FUNCTION "(" expr ("," expr)* ")"

Subtraction folds into Add with Neg-wrapped terms; division folds into Mul
with Pow(divisor, -1).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional

from kas.config import EngineConfig
from kas.errors import ExpressionSyntaxError, ParseError
from kas.syntax.nodes import Add, Expr, Func, MINUS_ONE, Mul, Neg, Num, Pow, Var
from kas.syntax.tokens import Token, TokenKind, Tokenizer

_ATOM_START = (TokenKind.NUMBER, TokenKind.IDENTIFIER, TokenKind.FUNCTION, TokenKind.LPAREN)


@dataclass(frozen=True)
class ParseResult:
	ok: bool
	expr: Optional[Expr]
	error: Optional[ParseError] = None

	@property
	def message(self) -> str:
		if self.ok:
			return "ok"
		return str(self.error)


class Parser:
	"""Single-use parser over a token list; the first error terminates the parse."""

	def __init__(self, tokens: List[Token]) -> None:
		self._tokens = tokens
		self._pos = 0
		self._open: List[Token] = []

	def _peek(self) -> Token:
		return self._tokens[self._pos]

	def _advance(self) -> Token:
		tok = self._tokens[self._pos]
		if tok.kind is not TokenKind.EOF:
			self._pos += 1
		return tok

	def _is_op(self, tok: Token, *ops: str) -> bool:
		return tok.kind is TokenKind.OPERATOR and tok.value in ops

	def _unexpected(self, tok: Token, expected: Optional[str] = None) -> ExpressionSyntaxError:
		"""Build the error for tok, preferring an unmatched '(' report at end of input."""
		if tok.kind is TokenKind.EOF and self._open:
			return ExpressionSyntaxError("unmatched '('", self._open[-1].offset, "')'")
		if tok.kind is TokenKind.EOF:
			return ExpressionSyntaxError("unexpected end of input", tok.offset, expected)
		if tok.kind is TokenKind.RPAREN and not self._open:
			return ExpressionSyntaxError("unmatched ')'", tok.offset)
		return ExpressionSyntaxError(f"unexpected token {tok.describe()}", tok.offset, expected)

	def parse(self) -> Expr:
		"""Parse the whole token list into one expression."""
		first = self._peek()
		if first.kind is TokenKind.EOF:
			raise ExpressionSyntaxError("empty expression", first.offset, "expression")
		e = self._expr()
		tok = self._peek()
		if tok.kind is not TokenKind.EOF:
			raise self._unexpected(tok, "end of input")
		return e

	def _expr(self) -> Expr:
		terms = [self._term()]
		while self._is_op(self._peek(), "+", "-"):
			op = self._advance()
			t = self._term()
			if op.value == "-":
				terms.append(Neg(t))
			else:
				terms.append(t)
		if len(terms) == 1:
			return terms[0]
		return Add(tuple(terms))

	def _term(self) -> Expr:
		factors = [self._unary()]
		while True:
			tok = self._peek()
			if self._is_op(tok, "*"):
				self._advance()
				factors.append(self._unary())
			elif self._is_op(tok, "/"):
				self._advance()
				factors.append(Pow(self._unary(), MINUS_ONE))
			elif tok.kind in _ATOM_START:
				factors.append(self._power())
			else:
				break
		if len(factors) == 1:
			return factors[0]
		return Mul(tuple(factors))

	def _unary(self) -> Expr:
		tok = self._peek()
		if self._is_op(tok, "-"):
			self._advance()
			return Neg(self._unary())
		if self._is_op(tok, "+"):
			self._advance()
			return self._unary()
		return self._power()

	def _power(self) -> Expr:
		base = self._atom()
		if self._is_op(self._peek(), "^"):
			self._advance()
			return Pow(base, self._unary())
		return base

	def _atom(self) -> Expr:
		tok = self._peek()
		if tok.kind is TokenKind.NUMBER:
			self._advance()
			return Num(tok.value)
		if tok.kind is TokenKind.IDENTIFIER:
			self._advance()
			return Var(tok.value)
		if tok.kind is TokenKind.LPAREN:
			return self._group()
		if tok.kind is TokenKind.FUNCTION:
			return self._call()
		raise self._unexpected(tok, "number, variable, function or '('")

	def _group(self) -> Expr:
		self._open.append(self._advance())
		e = self._expr()
		tok = self._peek()
		if tok.kind is not TokenKind.RPAREN:
			raise self._unexpected(tok, "')'")
		self._advance()
		self._open.pop()
		return e

	def _call(self) -> Expr:
		name_tok = self._advance()
		tok = self._peek()
		if tok.kind is not TokenKind.LPAREN:
			raise ExpressionSyntaxError(
				f"missing '(' after function {name_tok.describe()}", tok.offset, "'('"
			)
		self._open.append(self._advance())
		if self._peek().kind is TokenKind.RPAREN:
			raise ExpressionSyntaxError(
				f"empty argument list for {name_tok.describe()}", self._peek().offset, "expression"
			)
		args = [self._expr()]
		while self._peek().kind is TokenKind.COMMA:
			self._advance()
			args.append(self._expr())
		tok = self._peek()
		if tok.kind is not TokenKind.RPAREN:
			raise self._unexpected(tok, "')' or ','")
		self._advance()
		self._open.pop()
		return Func(name_tok.value, tuple(args))


def parse_expr(text: str, config: Optional[EngineConfig] = None) -> Expr:
	"""Tokenize and parse text, raising ParseError on malformed input."""
	tokens = Tokenizer(config).tokenize(text)
	return Parser(tokens).parse()


def parse(text: str, config: Optional[EngineConfig] = None) -> ParseResult:
	"""
	Parse text into a ParseResult. Malformed input never raises; the error is
	carried on the result.
	"""
	if not isinstance(text, str):
		print(f"parse: input is not a string (type={type(text).__name__})")
		return ParseResult(False, None, ExpressionSyntaxError("input is not a string", 0))
	try:
		e = parse_expr(text, config)
	except ParseError as err:
		print(f"parse: {err}; returning failed result")
		return ParseResult(False, None, err)
	return ParseResult(True, e)
