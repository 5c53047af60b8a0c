from __future__ import annotations

"""Select and run the combiner that applies to a vote.

Order of decisions:
  1. an empty vote cannot be combined;
  2. every record must carry the fields the method requires;
  3. boosted votes go to the boosting combiners;
  4. numeric votes go to the mean / error-weighted mean;
  5. everything else is a categorical vote, optionally reduced by the
     threshold rule or expanded by probability weighting first.

All validation happens before any aggregation.
"""

import logging
from typing import TYPE_CHECKING, Any, Mapping, Optional

from fusion.core.errors import VoteValidationError
from fusion.core.records import PREDICTION, require_fields
from fusion.registries.combiners import CombinationMethod, method_spec, resolve_method

from .boosting import classification_boosting_combiner, regression_boosting_combiner
from .categorical import combine_categorical, probability_weight, single_out_category
from .numeric import average, error_weighted

if TYPE_CHECKING:
    from fusion.components.vote import Vote

logger = logging.getLogger(__name__)


def combine_vote(
    vote: "Vote",
    method: Any = None,
    options: Optional[Mapping[str, Any]] = None,
    full: bool = False,
) -> Any:
    """Reduce the vote to one prediction (or a full result dict)."""
    records = vote.predictions
    if not records:
        raise VoteValidationError("No predictions to be combined.")

    resolved = resolve_method(method)
    spec = method_spec(resolved)
    require_fields(records, (PREDICTION,) + spec.required_fields)

    if vote.boosting:
        if vote.is_regression():
            logger.debug("Combining %d boosted regression predictions", len(records))
            return regression_boosting_combiner(records, vote.boosting_offsets, full)
        logger.debug("Combining %d boosted classification predictions", len(records))
        return classification_boosting_combiner(records, vote.boosting_offsets, options, full)

    if vote.is_regression():
        logger.debug("Combining %d regression predictions with %s", len(records), spec.numeric_combiner)
        match spec.numeric_combiner:
            case "error_weighted":
                return error_weighted(records, full)
            case _:
                return average(records, full)

    logger.debug("Combining %d categorical predictions with %r", len(records), resolved.value)
    match resolved:
        case CombinationMethod.THRESHOLD:
            records = single_out_category(records, options)
        case CombinationMethod.PROBABILITY:
            records = probability_weight(records)
        case _:
            pass

    return combine_categorical(records, spec.weight_field, full)


__all__ = ["combine_vote"]
