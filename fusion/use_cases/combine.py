from __future__ import annotations

"""Use-case entry points: raw per-submodel records in, combined prediction out.

The orchestration layer that scored every submodel hands over the
materialized records (dicts or header/value rows) plus the combination
config. These functions validate the config, build the vote, run the
dispatcher and wrap full outputs in the ``CombinedPrediction`` contract.
"""

import logging
from typing import Any, Mapping, Optional, Sequence, Union

from fusion.components.vote import BoostingOffsets, Vote
from fusion.contracts.combine_configs import CombineConfig
from fusion.contracts.results.combined import CombinedPrediction
from fusion.core.records import DEFAULT_PREDICTION_HEADERS

logger = logging.getLogger(__name__)

ConfigLike = Union[CombineConfig, Mapping[str, Any], None]


def _coerce_config(config: ConfigLike) -> CombineConfig:
    if config is None:
        return CombineConfig()
    if isinstance(config, CombineConfig):
        return config
    return CombineConfig.model_validate(dict(config))


def _run(vote: Vote, cfg: CombineConfig) -> Union[Any, CombinedPrediction]:
    method = cfg.resolved_method()
    logger.debug("Combining %d predictions (method=%r, full=%s)", len(vote), method.value, cfg.full)
    result = vote.combine(method, cfg.to_options(), full=cfg.full)
    if not cfg.full:
        return result
    return CombinedPrediction.model_validate(result)


def combine_predictions(
    records: Sequence[Mapping[str, Any]],
    config: ConfigLike = None,
    *,
    boosting_offsets: Optional[BoostingOffsets] = None,
) -> Union[Any, CombinedPrediction]:
    """Combine one record per ensemble member.

    Returns the bare prediction, or a ``CombinedPrediction`` when
    ``config.full`` is set.
    """
    cfg = _coerce_config(config)
    return _run(Vote(records, boosting_offsets=boosting_offsets), cfg)


def combine_rows(
    rows: Sequence[Sequence[Any]],
    headers: Sequence[str] = DEFAULT_PREDICTION_HEADERS,
    config: ConfigLike = None,
    *,
    boosting_offsets: Optional[BoostingOffsets] = None,
) -> Union[Any, CombinedPrediction]:
    """Same as ``combine_predictions`` for rows of values labelled by ``headers``.

    Malformed rows are skipped with a warning.
    """
    cfg = _coerce_config(config)
    vote = Vote(boosting_offsets=boosting_offsets)
    vote.extend_rows(rows, headers)
    return _run(vote, cfg)


__all__ = ["combine_predictions", "combine_rows"]
