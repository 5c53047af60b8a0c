from __future__ import annotations

from typing import Any, List, Optional, Union

from fusion.contracts.choices import DistributionUnit

from .common import Label, ResultModel

Number = Union[int, float]


class CategoryProbability(ResultModel):
    category: Label
    probability: float


class CombinedPrediction(ResultModel):
    """Full output of a combination.

    Which fields are set depends on the method and the task: regressions
    report distribution/count/median/min/max, categorical votes report
    confidence/probability/distribution/count, boosted classifications report
    probability and the ranked per-class probabilities.
    """

    prediction: Any
    confidence: Optional[float] = None
    probability: Optional[float] = None
    probabilities: Optional[List[CategoryProbability]] = None
    distribution: Optional[List[List[Any]]] = None
    distribution_unit: Optional[DistributionUnit] = None
    count: Optional[Number] = None
    median: Optional[Number] = None
    min: Optional[Number] = None
    max: Optional[Number] = None


__all__ = ["CategoryProbability", "CombinedPrediction"]
