"""Combine the predictions of ensemble members into one prediction.

Public API:
- Vote
- CombinationMethod
- combine_predictions, combine_rows
- VoteValidationError
"""

from .components.vote import Vote
from .core.errors import VoteValidationError
from .registries.combiners import CombinationMethod
from .use_cases.combine import combine_predictions, combine_rows

__version__ = "0.1.0"

__all__ = [
    "Vote",
    "CombinationMethod",
    "combine_predictions",
    "combine_rows",
    "VoteValidationError",
]
