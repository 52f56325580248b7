from .normalize import Normalizer, normalize
from .strip import Stripper, strip

__all__ = ["Normalizer", "normalize", "Stripper", "strip"]
