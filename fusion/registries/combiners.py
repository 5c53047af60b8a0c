from __future__ import annotations

"""Static registry of combination methods.

Each method maps to the record fields it requires, the field used as a vote
weight by the categorical combiner, and the numeric combiner used when the
vote turns out to be a regression. The table is built once at import time and
frozen.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, Optional, Tuple

from fusion.core.errors import VoteValidationError
from fusion.core.records import CONFIDENCE, COUNT, DISTRIBUTION, PROBABILITY, WEIGHT
from fusion.registries.base import Registry

NumericCombinerName = Literal["average", "error_weighted"]


class CombinationMethod(str, Enum):
    PLURALITY = "plurality"
    CONFIDENCE = "confidence weighted"
    PROBABILITY = "probability weighted"
    THRESHOLD = "threshold"
    BOOSTING = "boosting"


DEFAULT_METHOD = CombinationMethod.PLURALITY


@dataclass(frozen=True)
class MethodSpec:
    method: CombinationMethod
    code: int
    required_fields: Tuple[str, ...]
    weight_field: Optional[str]
    numeric_combiner: NumericCombinerName


_METHODS: Registry[CombinationMethod, MethodSpec] = Registry(_name="combination methods")

for _spec in (
    MethodSpec(CombinationMethod.PLURALITY, 0, (), None, "average"),
    MethodSpec(CombinationMethod.CONFIDENCE, 1, (CONFIDENCE,), CONFIDENCE, "error_weighted"),
    MethodSpec(CombinationMethod.PROBABILITY, 2, (DISTRIBUTION, COUNT), PROBABILITY, "average"),
    MethodSpec(CombinationMethod.THRESHOLD, 3, (), None, "average"),
    MethodSpec(CombinationMethod.BOOSTING, -1, (WEIGHT,), WEIGHT, "average"),
):
    _METHODS.add(_spec.method, _spec)
_METHODS.freeze()

_BY_CODE = {spec.code: spec.method for spec in _METHODS.values()}

# Weight fields the categorical combiner accepts.
WEIGHT_FIELDS = frozenset(spec.weight_field for spec in _METHODS.values() if spec.weight_field is not None)


def method_spec(method: CombinationMethod) -> MethodSpec:
    return _METHODS.get(method)


def resolve_method(method: Any = None) -> CombinationMethod:
    """Map an enum member, a method name or a numeric code to a method.

    ``None`` and unknown numeric codes fall back to plurality; unknown names
    raise.
    """
    if method is None:
        return DEFAULT_METHOD
    if isinstance(method, CombinationMethod):
        return method
    if isinstance(method, bool):
        raise VoteValidationError(f"Unknown combination method: {method!r}")
    if isinstance(method, int):
        return _BY_CODE.get(method, DEFAULT_METHOD)
    if isinstance(method, str):
        name = method.strip().lower()
        try:
            return CombinationMethod(name)
        except ValueError:
            raise VoteValidationError(
                f"Unknown combination method: {method!r}. "
                f"Expected one of {list_method_names()} or a numeric code."
            ) from None
    raise VoteValidationError(f"Unknown combination method: {method!r}")


def list_method_names() -> list[str]:
    return [m.value for m in _METHODS.keys()]


__all__ = [
    "CombinationMethod",
    "DEFAULT_METHOD",
    "MethodSpec",
    "WEIGHT_FIELDS",
    "method_spec",
    "resolve_method",
    "list_method_names",
]
