from .sympy_bridge import SympyBridge, to_sympy

__all__ = ["SympyBridge", "to_sympy"]
