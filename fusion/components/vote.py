from __future__ import annotations

"""Vote container: the ordered predictions of an ensemble for one input.

Predictions are ordered in arrival sequence when added through the
constructor or the append/extend methods; that order breaks ties in the
categorical combiners. Records are stored as shallow copies, so ordering and
combination never touch the caller's dicts.

Malformed records handed to ``append``/``append_row``/``extend``/
``extend_rows`` are rejected with a warning (see ``vote.warnings``) instead of
raising, to tolerate best-effort batch ingestion. ``combine`` raises on the
same defects.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Union

from fusion.core.errors import VoteValidationError
from fusion.core.records import (
    BOOSTING_CLASS,
    DEFAULT_PREDICTION_HEADERS,
    ORDER,
    PREDICTION,
    is_number,
)
from fusion.components.combiners import (
    combine_categorical,
    combine_distribution,
    combine_vote,
    probability_weight,
    single_out_category,
    weighted_confidence,
)
from fusion.reporting.common.report_errors import IngestionWarning, record_warning

BoostingOffsets = Union[Mapping[Any, float], float, int]


def _is_row(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


@dataclass(init=False)
class Vote:
    """A multiple vote prediction built from a list of prediction records.

    ``boosting_offsets`` marks the vote as coming from a boosted ensemble: a
    per-class mapping for classifications, a single number for regressions.
    """

    predictions: List[Dict[str, Any]]
    boosting_offsets: Optional[BoostingOffsets]
    warnings: List[IngestionWarning] = field(default_factory=list)

    def __init__(
        self,
        predictions: Union[Sequence[Mapping[str, Any]], Mapping[str, Any], None] = None,
        boosting_offsets: Optional[BoostingOffsets] = None,
    ) -> None:
        if predictions is None:
            predictions = []
        elif isinstance(predictions, Mapping):
            predictions = [predictions]

        records: List[Dict[str, Any]] = []
        for p in predictions:
            if not isinstance(p, Mapping):
                raise VoteValidationError(f"Predictions must be dict-like records; got {type(p).__name__}")
            records.append(dict(p))

        if not all(ORDER in r for r in records):
            for i, r in enumerate(records):
                r[ORDER] = i

        self.predictions = records
        self.boosting_offsets = boosting_offsets
        self.warnings = []

    @property
    def boosting(self) -> bool:
        return self.boosting_offsets is not None

    def __len__(self) -> int:
        return len(self.predictions)

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        return iter(self.predictions)

    # -----------------------------
    # Bookkeeping
    # -----------------------------

    def next_order(self) -> int:
        """Order to assign to the next appended prediction."""
        if self.predictions:
            return self.predictions[-1][ORDER] + 1
        return 0

    def is_regression(self) -> bool:
        """True if the predictions are numeric.

        For boosted votes, true when no prediction names a target ``class``.
        """
        if self.boosting:
            return not any(r.get(BOOSTING_CLASS) is not None for r in self.predictions)
        return all(is_number(r.get(PREDICTION)) for r in self.predictions)

    # -----------------------------
    # Ingestion
    # -----------------------------

    def append(self, prediction_info: Mapping[str, Any]) -> bool:
        """Add one prediction record, e.g. ``{"prediction": "Iris-virginica"}``.

        The record may also carry ``confidence``, ``distribution`` and
        ``count``. Returns False (and records a warning) when the record is not
        dict-like or lacks ``prediction``.
        """
        if not isinstance(prediction_info, Mapping) or PREDICTION not in prediction_info:
            record_warning(
                self.warnings,
                where="Vote.append",
                message="Failed to add the prediction. The minimal key for the prediction is 'prediction': "
                "{'prediction': 'Iris-virginica'}",
                context={"record": repr(prediction_info)},
            )
            return False

        record = dict(prediction_info)
        record[ORDER] = self.next_order()
        self.predictions.append(record)
        return True

    def append_row(
        self,
        prediction_row: Sequence[Any],
        prediction_headers: Sequence[str] = DEFAULT_PREDICTION_HEADERS,
    ) -> bool:
        """Add one prediction given as values plus parallel header labels.

        e.g. ``append_row(["Iris-virginica", 0.7], ["prediction", "confidence"])``.
        Any ``order`` value in the row is replaced by the next order.
        """
        if not (
            _is_row(prediction_row)
            and _is_row(prediction_headers)
            and len(prediction_row) == len(prediction_headers)
            and PREDICTION in prediction_headers
        ):
            record_warning(
                self.warnings,
                where="Vote.append_row",
                message="Failed to add the prediction. The row must have label 'prediction' at least.",
                context={"row": repr(prediction_row), "headers": repr(prediction_headers)},
            )
            return False

        record = dict(zip(prediction_headers, prediction_row))
        record[ORDER] = self.next_order()
        self.predictions.append(record)
        return True

    def extend(self, predictions_info: Sequence[Mapping[str, Any]]) -> int:
        """Append a list of prediction records; returns how many were added."""
        if not _is_row(predictions_info):
            record_warning(
                self.warnings,
                where="Vote.extend",
                message="Failed to add the predictions. Only a list of dict-like predictions is expected.",
            )
            return 0
        return sum(1 for p in predictions_info if self.append(p))

    def extend_rows(
        self,
        prediction_rows: Sequence[Sequence[Any]],
        prediction_headers: Sequence[str] = DEFAULT_PREDICTION_HEADERS,
    ) -> int:
        """Append a list of rows sharing ``prediction_headers``; returns how many were added."""
        if not _is_row(prediction_rows):
            record_warning(
                self.warnings,
                where="Vote.extend_rows",
                message="Failed to add the predictions. Only a list of row-like predictions is expected.",
            )
            return 0
        return sum(1 for row in prediction_rows if self.append_row(row, prediction_headers))

    # -----------------------------
    # Combination
    # -----------------------------

    def combine(self, method: Any = None, options: Optional[Mapping[str, Any]] = None, full: bool = False) -> Any:
        """Reduce the predictions by voting (classification) or averaging (regression).

        ``method`` is a ``CombinationMethod``, its name or its numeric code
        (plurality by default). ``options`` carries ``threshold``/``category``
        for the threshold method and ``categories`` for boosted
        classifications. With ``full`` a dict with confidence, distribution and
        count information is returned.
        """
        return combine_vote(self, method, options, full)

    def combine_categorical(self, weight_field: Optional[str] = None, full: bool = False) -> Any:
        return combine_categorical(self.predictions, weight_field, full)

    def weighted_confidence(self, combined_prediction: Any, weight_field: Optional[str] = None) -> float:
        return weighted_confidence(self.predictions, combined_prediction, weight_field)

    def combine_distribution(self, weight_field: str = "probability"):
        return combine_distribution(self.predictions, weight_field)

    def probability_weight(self) -> List[Dict[str, Any]]:
        return probability_weight(self.predictions)

    def single_out_category(self, options: Optional[Mapping[str, Any]]) -> "Vote":
        """New vote with the chosen category's votes if they reach the threshold, else the rest."""
        return Vote(single_out_category(self.predictions, options))


__all__ = ["Vote", "BoostingOffsets"]
