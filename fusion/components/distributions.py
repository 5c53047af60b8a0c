from __future__ import annotations

"""Distribution merging and bin compaction.

Distributions travel as value-ascending lists of ``[value, count]`` pairs
(regression) or as category -> weight mappings while being accumulated.
"""

from typing import Any, Dict, List, Mapping, MutableMapping, Sequence

import numpy as np

from fusion.core.records import DISTRIBUTION, is_number, value_sort_key

# Maximum number of bins kept in a merged regression distribution.
BINS_LIMIT = 32


def merge_distributions(base: MutableMapping[Any, float], addition: Mapping[Any, float]) -> MutableMapping[Any, float]:
    """Add ``addition`` into ``base`` pointwise (mutates and returns ``base``)."""
    for value, instances in addition.items():
        base[value] = base.get(value, 0) + instances
    return base


def merge_bins(distribution: Sequence[Sequence[Any]], limit: int) -> List[List[Any]]:
    """Merge the closest adjacent bins until at most ``limit`` remain.

    Bins are ``[value, count]`` pairs sorted by value. Each step merges the
    pair with the smallest value gap (leftmost on ties) into one bin at their
    count-weighted mean. Total count is unchanged.
    """
    bins = [[b[0], b[1]] for b in distribution]
    if limit < 1:
        return bins

    while len(bins) > limit and len(bins) > 1:
        values = np.asarray([b[0] for b in bins], dtype=float)
        # argmin returns the first occurrence, i.e. the leftmost closest pair
        i = int(np.argmin(np.diff(values)))
        left, right = bins[i], bins[i + 1]
        count = left[1] + right[1]
        if count:
            value = (left[0] * left[1] + right[0] * right[1]) / count
        else:
            # empty bins collapse to their midpoint
            value = (left[0] + right[0]) / 2
        bins[i : i + 2] = [[value, count]]

    return bins


def grouped_distribution(records: Sequence[Mapping[str, Any]]) -> Dict[str, Any]:
    """Join the first bucket of every record's distribution.

    Each step merges the record's leading ``(value, count)`` pair into the
    running distribution, re-sorts it by value and compacts it to
    ``BINS_LIMIT`` bins (numeric values only; category labels are never
    merged). The unit switches from ``"counts"`` to ``"bins"`` the first time
    the running size exceeds the limit and never switches back.
    """
    joined: Dict[Any, float] = {}
    distribution: List[List[Any]] = []
    unit = "counts"

    for r in records:
        buckets = r.get(DISTRIBUTION)
        if not buckets:
            continue
        value, instances = buckets[0][0], buckets[0][1]
        merge_distributions(joined, {value: instances})
        distribution = [[k, v] for k, v in sorted(joined.items(), key=lambda kv: value_sort_key(kv[0]))]
        if unit == "counts" and len(distribution) > BINS_LIMIT:
            unit = "bins"
        if all(is_number(k) for k in joined):
            distribution = merge_bins(distribution, BINS_LIMIT)

    return {"distribution": distribution, "distribution_unit": unit}


__all__ = ["BINS_LIMIT", "merge_distributions", "merge_bins", "grouped_distribution"]
