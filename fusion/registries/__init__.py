from .base import Registry
from .combiners import CombinationMethod, method_spec, resolve_method

__all__ = ["Registry", "CombinationMethod", "method_spec", "resolve_method"]
