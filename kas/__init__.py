"""
KAS: parse, canonicalize and print algebraic expressions so that equivalent
answers compare as identical strings.

Public API re-export:
	parse       : text -> ParseResult(ok, expr, error)
	Expr        : tree nodes with normalize(), strip(), print()
	Engine      : facade bundling config, canonical forms and answer checks
"""

from .config import EngineConfig, DEFAULT_CONFIG
from .errors import ParseError, LexError, ExpressionSyntaxError
from .syntax import (
	Token, TokenKind, Tokenizer, tokenize,
	Parser, ParseResult, parse, parse_expr,
	Expr, Num, Var, Add, Mul, Pow, Neg, Func,
)
from .canonical import Normalizer, Stripper, normalize, strip
from .printing import Printer, print_expr
from .acceptance import EqualityChecks, CompareResult
from .engine import Engine

__all__ = [
	"EngineConfig", "DEFAULT_CONFIG",
	"ParseError", "LexError", "ExpressionSyntaxError",
	"Token", "TokenKind", "Tokenizer", "tokenize",
	"Parser", "ParseResult", "parse", "parse_expr",
	"Expr", "Num", "Var", "Add", "Mul", "Pow", "Neg", "Func",
	"Normalizer", "Stripper", "normalize", "strip",
	"Printer", "print_expr",
	"EqualityChecks", "CompareResult",
	"Engine",
]
