from .printer import Printer
from kas.syntax.nodes import Expr


def print_expr(e: Expr) -> str:
	"""Proxy to Printer.print."""
	return Printer().print(e)


__all__ = ["Printer", "print_expr"]
