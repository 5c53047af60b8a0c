from __future__ import annotations

"""Numeric (regression) combiners: plain mean and error-weighted mean.

For regression votes the ``confidence`` field holds an error measure; a
missing (``None``) value is read as 0. Per-record error weights are computed
into an array indexed by record position and never written back to the
records.
"""

from typing import Any, Dict, List, Mapping, Sequence, Tuple

import numpy as np

from fusion.core.records import CONFIDENCE, COUNT, MAX, MEDIAN, MIN, PREDICTION, value_or_zero
from fusion.components.distributions import grouped_distribution
from fusion.reporting.common.json_safety import round_precision

# Errors are rescaled to [0, TOP_RANGE] before exponentiation.
TOP_RANGE = 10


def _predictions(records: Sequence[Mapping[str, Any]]) -> np.ndarray:
    return np.asarray([float(r[PREDICTION]) for r in records], dtype=float)


def _count_and_range(records: Sequence[Mapping[str, Any]]) -> Dict[str, Any]:
    """Total count and the min/max extras reported by any record."""
    instances = 0
    mins: List[float] = [r[MIN] for r in records if r.get(MIN) is not None]
    maxs: List[float] = [r[MAX] for r in records if r.get(MAX) is not None]
    for r in records:
        instances += value_or_zero(r, COUNT)

    out: Dict[str, Any] = {"count": instances}
    if mins:
        out["min"] = min(mins)
    if maxs:
        out["max"] = max(maxs)
    return out


def _full_output(
    records: Sequence[Mapping[str, Any]],
    *,
    prediction: float,
    confidence: float,
    median: float | None,
) -> Dict[str, Any]:
    output: Dict[str, Any] = {
        "prediction": prediction,
        "confidence": round_precision(confidence),
    }
    output.update(grouped_distribution(records))
    extras = _count_and_range(records)
    output["count"] = extras.pop("count")
    if median is not None:
        output["median"] = median
    output.update(extras)
    return output


def average(records: Sequence[Mapping[str, Any]], full: bool = False) -> Any:
    """Arithmetic mean of the predictions.

    With ``full``, the confidence is the mean over the records reporting a
    positive one (0 if none does), ``median`` is the sum of reported medians
    over the number of records, and the grouped distribution, total count and
    min/max extras are attached. An empty list yields +inf.
    """
    total = len(records)
    if total == 0:
        return {"prediction": float("inf")} if full else float("inf")

    result = float(np.sum(_predictions(records))) / total
    if not full:
        return result

    confidences = [r[CONFIDENCE] for r in records if r.get(CONFIDENCE) is not None and r[CONFIDENCE] > 0]
    confidence = float(np.sum(confidences)) / len(confidences) if confidences else 0.0

    median = None
    medians = [r[MEDIAN] for r in records if r.get(MEDIAN) is not None]
    if medians:
        median = float(np.sum(medians)) / total

    return _full_output(records, prediction=result, confidence=confidence, median=median)


def normalize_error(
    records: Sequence[Mapping[str, Any]],
    top_range: float = TOP_RANGE,
) -> Tuple[np.ndarray, float]:
    """Turn per-record errors into weights.

    Errors are shifted and scaled to ``[0, top_range]`` and mapped through
    ``exp(-scaled)``, so the lowest error weighs 1 and the highest
    ``exp(-top_range)``. Without error spread every weight is 1. Returns
    ``(weights, normalization factor)``.
    """
    errors = np.asarray([float(value_or_zero(r, CONFIDENCE)) for r in records], dtype=float)
    if errors.size == 0:
        return errors, 0.0

    min_error = float(np.min(errors))
    max_error = float(np.max(errors))
    error_range = max_error - min_error
    if error_range > 0:
        weights = np.exp((min_error - errors) / error_range * top_range)
        return weights, float(np.sum(weights))

    return np.ones(errors.size, dtype=float), float(errors.size)


def error_weighted(records: Sequence[Mapping[str, Any]], full: bool = False) -> Any:
    """Mean of the predictions weighted by their normalized errors.

    With ``full``, confidence and median become error-weighted averages; the
    grouped distribution, total count and min/max extras are attached as in
    ``average``. A zero normalization factor yields +inf.
    """
    weights, normalization_factor = normalize_error(records)
    if normalization_factor == 0:
        return {"prediction": float("inf"), "confidence": 0.0} if full else float("inf")

    result = float(np.sum(_predictions(records) * weights)) / normalization_factor
    if not full:
        return result

    combined_error = 0.0
    median_sum = 0.0
    has_median = False
    for r, w in zip(records, weights.tolist()):
        if r.get(CONFIDENCE) is not None:
            combined_error += r[CONFIDENCE] * w
        if r.get(MEDIAN) is not None:
            has_median = True
            median_sum += r[MEDIAN] * w

    median = median_sum / normalization_factor if has_median else None
    return _full_output(
        records,
        prediction=result,
        confidence=combined_error / normalization_factor,
        median=median,
    )


__all__ = ["TOP_RANGE", "average", "normalize_error", "error_weighted"]
