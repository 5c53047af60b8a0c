from __future__ import annotations

"""Combiners for boosted ensembles.

Boosted regressors add up their weighted gradients plus the base offset.
Boosted classifiers do the same per class and turn the per-class scores into
probabilities with a softmax. Ties between classes are broken by the position
of the class in the ensemble's ``categories`` list.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence

from fusion.core.errors import VoteValidationError
from fusion.core.records import BOOSTING_CLASS, WEIGHT
from fusion.components.statistics import softmax, weighted_sum
from fusion.reporting.common.json_safety import round_precision


def regression_boosting_combiner(
    records: Sequence[Mapping[str, Any]],
    offset: Any = None,
    full: bool = False,
) -> Any:
    """Σ prediction · weight + offset."""
    if isinstance(offset, Mapping):
        if offset:
            raise VoteValidationError(
                "Boosted regressions expect a single numeric offset, not a per-class mapping."
            )
        offset = None
    prediction = weighted_sum(records, WEIGHT) + (0 if offset is None else offset)
    if full:
        return {"prediction": prediction}
    return prediction


def classification_boosting_combiner(
    records: Sequence[Mapping[str, Any]],
    offsets: Optional[Mapping[Any, float]] = None,
    options: Optional[Mapping[str, Any]] = None,
    full: bool = False,
) -> Any:
    """Softmax over per-class weighted sums plus per-class offsets.

    Records without a ``class`` are ignored. Classes missing from
    ``options["categories"]`` rank after the listed ones, in first-seen order.
    A zero softmax total yields NaN as the prediction.
    """
    if offsets is not None and not isinstance(offsets, Mapping):
        raise VoteValidationError("Boosted classifications expect per-class offsets as a mapping.")
    offsets = offsets or {}
    categories: List[Any] = list((options or {}).get("categories") or [])

    grouped: Dict[Any, List[Mapping[str, Any]]] = {}
    for r in records:
        objective_class = r.get(BOOSTING_CLASS)
        if objective_class is not None:
            grouped.setdefault(objective_class, []).append(r)

    scores: Dict[Any, Dict[str, Any]] = {}
    for k, (objective_class, group) in enumerate(grouped.items()):
        if objective_class in categories:
            order = categories.index(objective_class)
        else:
            order = len(categories) + k
        scores[objective_class] = {
            "probability": weighted_sum(group, WEIGHT) + offsets.get(objective_class, 0),
            "order": order,
        }

    probabilities = softmax(scores)
    if not isinstance(probabilities, dict):
        if full:
            return {"prediction": probabilities, "probability": probabilities, "probabilities": []}
        return probabilities

    ranked = sorted(probabilities.items(), key=lambda kv: (-kv[1]["probability"], kv[1]["order"]))
    prediction, info = ranked[0]

    if not full:
        return prediction

    return {
        "prediction": prediction,
        "probability": round_precision(info["probability"]),
        "probabilities": [
            {"category": category, "probability": round_precision(cat_info["probability"])}
            for category, cat_info in ranked
        ],
    }


__all__ = ["regression_boosting_combiner", "classification_boosting_combiner"]
