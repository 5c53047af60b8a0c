from .combined import CategoryProbability, CombinedPrediction
from .common import Label, ResultModel

__all__ = ["CategoryProbability", "CombinedPrediction", "Label", "ResultModel"]
