"""Combiners (compute layer).

Public API:
- combine_vote
- average, error_weighted, normalize_error
- combine_categorical, weighted_confidence, combine_distribution,
  probability_weight, single_out_category
- regression_boosting_combiner, classification_boosting_combiner
"""

from .boosting import classification_boosting_combiner, regression_boosting_combiner
from .categorical import (
    combine_categorical,
    combine_distribution,
    probability_weight,
    single_out_category,
    weighted_confidence,
)
from .dispatch import combine_vote
from .numeric import average, error_weighted, normalize_error

__all__ = [
    "combine_vote",
    "average",
    "error_weighted",
    "normalize_error",
    "combine_categorical",
    "weighted_confidence",
    "combine_distribution",
    "probability_weight",
    "single_out_category",
    "regression_boosting_combiner",
    "classification_boosting_combiner",
]
