from __future__ import annotations

"""Statistical primitives used by the combiners.

- ``weighted_sum``: Σ prediction · weight over a list of records.
- ``softmax``: per-category normalization of boosting scores.
- ``ws_confidence``: Wilson score lower bound, used as the confidence of a
  categorical prediction derived from a distribution.
"""

from typing import Any, Dict, Mapping, Optional, Sequence, Union

import numpy as np

from fusion.core.errors import VoteValidationError
from fusion.core.records import PREDICTION, value_or_zero
from fusion.reporting.common.json_safety import as_python_scalar, round_precision

# Percentile of the standard normal distribution used by default (95%).
DEFAULT_WS_Z = 1.96


def weighted_sum(records: Sequence[Mapping[str, Any]], weight_field: str) -> float:
    """Σ prediction · record[weight_field]; a ``None`` weight counts as 0."""
    total = 0.0
    for r in records:
        total += r[PREDICTION] * value_or_zero(r, weight_field)
    return total


def softmax(scores: Mapping[Any, Mapping[str, Any]]) -> Union[Dict[Any, Dict[str, Any]], float]:
    """Softmax over ``{category: {"probability": score, "order": k}}``.

    Scores are shifted by their maximum before exponentiation so large scores
    do not overflow. Returns the same shape with normalized probabilities, or
    NaN when no finite normalization exists (no scores, a NaN score, or every
    score at -inf).
    """
    categories = list(scores.keys())
    raw = np.asarray([float(scores[c]["probability"]) for c in categories], dtype=float)
    if raw.size == 0 or np.isnan(raw).any() or np.all(np.isneginf(raw)):
        return float("nan")

    top = float(np.max(raw))
    if np.isposinf(top):
        # infinite scores share the whole mass
        exps = (raw == top).astype(float)
    else:
        with np.errstate(under="ignore"):
            exps = np.exp(raw - top)
    total = float(np.sum(exps))
    if total == 0:
        return float("nan")

    probs = exps / total
    return {
        c: {"probability": float(p), "order": scores[c]["order"]}
        for c, p in zip(categories, probs.tolist())
    }


def _as_mapping(distribution: Union[Mapping[Any, float], Sequence[Sequence[Any]]]) -> Dict[Any, float]:
    if isinstance(distribution, Mapping):
        return dict(distribution)
    return {pair[0]: pair[1] for pair in distribution}


def ws_confidence(
    prediction: Any,
    distribution: Union[Mapping[Any, float], Sequence[Sequence[Any]]],
    ws_z: float = DEFAULT_WS_Z,
    ws_n: Optional[float] = None,
) -> float:
    """Wilson score interval lower bound for ``prediction`` in ``distribution``.

    ``distribution`` is either a mapping ``{value: weight}`` or a list of
    ``[value, weight]`` pairs. ``ws_n`` is the number of instances behind the
    distribution; when absent, the sum of the weights is used. The weight of
    ``prediction`` is normalized by that sum unless the sum is exactly 1.
    """
    dist = _as_mapping(distribution)

    ws_p = float(dist.get(prediction, 0.0))
    if ws_p < 0:
        raise VoteValidationError("The distribution weight must be a positive value")
    if any(float(w) < 0 for w in dist.values()):
        raise VoteValidationError("The distribution weight must be a positive value")

    ws_norm = float(sum(float(w) for w in dist.values()))
    if ws_norm != 1.0 and ws_norm > 0:
        ws_p = ws_p / ws_norm

    n = ws_norm if ws_n is None else float(ws_n)
    if n < 1:
        raise VoteValidationError("The total of instances in the distribution must be a positive integer")

    z = float(ws_z)
    z2 = z * z
    factor = z2 / n
    root = np.sqrt((ws_p * (1 - ws_p) + factor / 4) / n)
    result = (ws_p + factor / 2 - z * root) / (1 + factor)
    return round_precision(as_python_scalar(result))


__all__ = ["DEFAULT_WS_Z", "weighted_sum", "softmax", "ws_confidence"]
