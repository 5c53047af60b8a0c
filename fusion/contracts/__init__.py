"""Configuration and result contracts.

Keep module imports explicit in most of the codebase:
    from fusion.contracts.combine_configs import CombineConfig
The names re-exported here are a small set of convenience imports.
"""

from .choices import CombinationMethodCode, CombinationMethodName, DistributionUnit
from .combine_configs import BoostingOptions, CombineConfig, ThresholdOptions
from .results import CategoryProbability, CombinedPrediction

__all__ = [
    "CombinationMethodCode",
    "CombinationMethodName",
    "DistributionUnit",
    "BoostingOptions",
    "CombineConfig",
    "ThresholdOptions",
    "CategoryProbability",
    "CombinedPrediction",
]
