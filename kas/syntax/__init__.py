from .tokens import Token, TokenKind, Tokenizer, tokenize
from .nodes import Expr, Num, Var, Add, Mul, Pow, Neg, Func
from .parser import Parser, ParseResult, parse, parse_expr

__all__ = [
	"Token", "TokenKind", "Tokenizer", "tokenize",
	"Expr", "Num", "Var", "Add", "Mul", "Pow", "Neg", "Func",
	"Parser", "ParseResult", "parse", "parse_expr",
]
