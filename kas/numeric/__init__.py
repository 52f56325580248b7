from .evaluate import Evaluator

__all__ = ["Evaluator"]
