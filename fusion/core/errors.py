"""Combination-specific exceptions.

These are intentionally lightweight so they can be raised from compute paths
without importing contracts or reporting modules.
"""


class VoteValidationError(ValueError):
    """Raised when a vote cannot be combined with the requested method."""
