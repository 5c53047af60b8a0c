from __future__ import annotations

"""Categorical (classification) combiners.

The combiners work on ordered record lists. The ``order`` of a category's
first-seen record breaks ties in the vote count, so callers must keep the
list in arrival order.

weight_field can be set as:
  - None:          plurality (1 vote per prediction)
  - "confidence":  confidence weighted (confidence as a vote value)
  - "probability": probability weighted (probability as a vote value)
  - "weight":      boosting weight as a vote value
"""

import numbers
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from fusion.core.errors import VoteValidationError
from fusion.core.records import (
    CONFIDENCE,
    COUNT,
    DISTRIBUTION,
    NOT_ENOUGH_DATA,
    ORDER,
    PREDICTION,
    PROBABILITY,
    has_all,
    is_number,
    require_fields,
    value_or_zero,
    value_sort_key,
)
from fusion.components.distributions import grouped_distribution
from fusion.components.statistics import DEFAULT_WS_Z, ws_confidence
from fusion.registries.combiners import WEIGHT_FIELDS
from fusion.reporting.common.json_safety import round_precision


def _check_weight_field(weight_field: Optional[str]) -> None:
    if weight_field is not None and weight_field not in WEIGHT_FIELDS:
        raise VoteValidationError(f"Wrong weight_field value: {weight_field!r}")


def combine_categorical(
    records: Sequence[Mapping[str, Any]],
    weight_field: Optional[str] = None,
    full: bool = False,
) -> Any:
    """Return the category with the largest accumulated weight.

    Ties are broken by the lowest first-seen ``order`` and then by the
    category label ascending. With ``full`` a dict is returned with the
    combined confidence, the winner's probability, the grouped distribution
    and the total count.
    """
    _check_weight_field(weight_field)
    if not records:
        raise VoteValidationError("No predictions to be combined.")
    if weight_field is not None:
        for r in records:
            if r.get(weight_field) is None:
                raise VoteValidationError(f"{NOT_ENOUGH_DATA} Lacks {weight_field!r} information.")

    mode: Dict[Any, Dict[str, Any]] = {}
    instances = 0
    for i, r in enumerate(records):
        weight = 1 if weight_field is None else r[weight_field]
        category = r[PREDICTION]
        if full:
            instances += value_or_zero(r, COUNT)
        if category in mode:
            mode[category]["count"] += weight
        else:
            mode[category] = {"count": weight, "order": r.get(ORDER, i)}

    prediction = min(
        mode.items(),
        key=lambda kv: (-kv[1]["count"], kv[1]["order"], value_sort_key(kv[0])),
    )[0]

    if not full:
        return prediction

    output: Dict[str, Any] = {"prediction": prediction}
    if has_all(records, CONFIDENCE):
        confidence = weighted_confidence(records, prediction, weight_field)
        output["confidence"] = round_precision(confidence)
    elif has_all(records, PROBABILITY):
        distribution, total = combine_distribution(records)
        if not total:
            raise VoteValidationError(f"{NOT_ENOUGH_DATA} Lacks {COUNT!r} information.")
        output["confidence"] = ws_confidence(prediction, distribution, DEFAULT_WS_Z, total)

    if has_all(records, PROBABILITY):
        for r in records:
            if r[PREDICTION] == prediction:
                output["probability"] = r[PROBABILITY]

    if any(r.get(DISTRIBUTION) for r in records):
        output.update(grouped_distribution(records))

    output["count"] = instances
    return output


def weighted_confidence(
    records: Sequence[Mapping[str, Any]],
    combined_prediction: Any,
    weight_field: Optional[str] = None,
) -> float:
    """Weighted mean of the confidences of the records naming the winner.

    Returns +inf when the total weight is 0.
    """
    _check_weight_field(weight_field)
    matching = [r for r in records if r[PREDICTION] == combined_prediction]

    fields = (CONFIDENCE,) if weight_field is None else (CONFIDENCE, weight_field)
    for r in matching:
        for field in fields:
            if r.get(field) is None:
                raise VoteValidationError(f"{NOT_ENOUGH_DATA} Lacks {field!r} information.")

    final_confidence = 0.0
    total_weight = 0.0
    for r in matching:
        weight = 1 if weight_field is None else r[weight_field]
        final_confidence += weight * r[CONFIDENCE]
        total_weight += weight

    if total_weight > 0:
        return final_confidence / total_weight
    return float("inf")


def combine_distribution(
    records: Sequence[Mapping[str, Any]],
    weight_field: str = PROBABILITY,
) -> Tuple[List[List[Any]], float]:
    """Sum ``weight_field`` per category and ``count`` over all records.

    Returns ``(distribution pairs, total count)``; the pairs are empty when the
    total count is not positive.
    """
    require_fields(records, (weight_field,))

    distribution: Dict[Any, float] = {}
    total = 0
    for r in records:
        category = r[PREDICTION]
        distribution[category] = distribution.get(category, 0.0) + r[weight_field]
        total += value_or_zero(r, COUNT)

    if total > 0:
        return [[k, v] for k, v in distribution.items()], total
    return [], total


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool) and value >= 1


def probability_weight(records: Sequence[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """Expand each record into one record per bucket of its distribution.

    Every expanded record carries ``probability = instances / count`` and
    keeps the source record's ``order``.
    """
    for r in records:
        if DISTRIBUTION not in r or COUNT not in r:
            raise VoteValidationError(
                "Probability weighting is not available because distribution information is missing."
            )
        if not _is_positive_int(r[COUNT]):
            raise VoteValidationError(
                "Probability weighting is not available because distribution seems to have "
                f"{r[COUNT]!r} as number of instances in a node."
            )

    expanded: List[Dict[str, Any]] = []
    for i, r in enumerate(records):
        total = r[COUNT]
        for category, instances in r[DISTRIBUTION]:
            expanded.append(
                {
                    PREDICTION: category,
                    PROBABILITY: round_precision(float(instances) / total),
                    COUNT: instances,
                    ORDER: r.get(ORDER, i),
                }
            )
    return expanded


def single_out_category(
    records: Sequence[Mapping[str, Any]],
    options: Optional[Mapping[str, Any]],
) -> List[Mapping[str, Any]]:
    """Keep only the votes for ``options["category"]`` if they reach the threshold.

    Otherwise the votes for every other category are kept, so plurality
    proceeds among the remainder.
    """
    if not options or "threshold" not in options or "category" not in options:
        raise VoteValidationError(
            "No category and threshold information was found. Add threshold and category info. "
            'E.g. {"threshold": 6, "category": "Iris-virginica"}.'
        )

    threshold = options["threshold"]
    length = len(records)
    if not is_number(threshold):
        raise VoteValidationError(f"The threshold must be a number; got {threshold!r}")
    if threshold > length:
        raise VoteValidationError(
            f"You cannot set a threshold value larger than {length}. "
            "The ensemble has not enough models to use this threshold value."
        )
    if threshold < 1:
        raise VoteValidationError("The threshold must be a positive value")

    category = options["category"]
    category_records = [r for r in records if r[PREDICTION] == category]
    rest = [r for r in records if r[PREDICTION] != category]

    if len(category_records) >= threshold:
        return category_records
    return rest


__all__ = [
    "combine_categorical",
    "weighted_confidence",
    "combine_distribution",
    "probability_weight",
    "single_out_category",
]
