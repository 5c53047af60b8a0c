from __future__ import annotations

"""Prediction record typing and field helpers.

A prediction record is one submodel's output for a single input. Records are
plain mappings (JSON-like dicts) so callers can hand over whatever their
scoring layer produced; this module only names the fields and centralizes the
presence checks every combiner relies on.

Conventions
-----------
- ``prediction`` is the only compulsory field.
- A field that is present with a ``None`` value counts as present. Combiners
  that tolerate missing values (regression confidence, boosting weight) read
  ``None`` as 0 without writing it back.
"""

import numbers
from typing import Any, Iterable, Mapping, Sequence, Tuple, TypedDict

from fusion.contracts.results.common import Label

from .errors import VoteValidationError

PREDICTION = "prediction"
CONFIDENCE = "confidence"
PROBABILITY = "probability"
DISTRIBUTION = "distribution"
COUNT = "count"
ORDER = "order"
MEDIAN = "median"
MIN = "min"
MAX = "max"
WEIGHT = "weight"
BOOSTING_CLASS = "class"

DEFAULT_PREDICTION_HEADERS: Tuple[str, ...] = (PREDICTION, CONFIDENCE, ORDER, DISTRIBUTION, COUNT)

# Decimal places kept for confidences and probabilities in combined outputs.
PRECISION = 5

NOT_ENOUGH_DATA = "Not enough data to use the selected prediction method. Try creating your model anew."


PredictionRecord = TypedDict(
    "PredictionRecord",
    {
        "prediction": Label,
        "confidence": float,
        "probability": float,
        "distribution": Sequence[Sequence[Any]],
        "count": int,
        "order": int,
        "median": float,
        "min": float,
        "max": float,
        "weight": float,
        "class": Label,
    },
    total=False,
)


def is_number(value: Any) -> bool:
    """True for real numbers (bools excluded)."""
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def value_sort_key(value: Any) -> Tuple[int, Any]:
    """Sort key placing numbers before labels so mixed keys still sort."""
    if is_number(value):
        return (0, value)
    return (1, str(value))


def has_all(records: Iterable[Mapping[str, Any]], field: str) -> bool:
    return all(field in r for r in records)


def require_fields(records: Sequence[Mapping[str, Any]], fields: Iterable[str]) -> None:
    """Raise unless every record carries every field in ``fields``."""
    for field in fields:
        for r in records:
            if field not in r:
                raise VoteValidationError(f"{NOT_ENOUGH_DATA} Lacks {field!r} information.")


def value_or_zero(record: Mapping[str, Any], field: str) -> float:
    v = record.get(field)
    return 0 if v is None else v


__all__ = [
    "Label",
    "PredictionRecord",
    "PREDICTION",
    "CONFIDENCE",
    "PROBABILITY",
    "DISTRIBUTION",
    "COUNT",
    "ORDER",
    "MEDIAN",
    "MIN",
    "MAX",
    "WEIGHT",
    "BOOSTING_CLASS",
    "DEFAULT_PREDICTION_HEADERS",
    "PRECISION",
    "NOT_ENOUGH_DATA",
    "is_number",
    "value_sort_key",
    "has_all",
    "require_fields",
    "value_or_zero",
]
