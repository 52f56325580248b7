from .equality import EqualityChecks, CompareResult

__all__ = ["EqualityChecks", "CompareResult"]
