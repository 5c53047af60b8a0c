"""Record typing, field names and exceptions shared by the compute layer."""

from .errors import VoteValidationError
from .records import PredictionRecord

__all__ = ["PredictionRecord", "VoteValidationError"]
