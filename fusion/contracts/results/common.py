from __future__ import annotations

"""Result contracts for combined predictions.

Design goals:
- JSON-friendly field types (lists, dicts, scalars) at the contract boundary.
- Strict top-level validation (extra fields forbidden) to prevent silent drift.

Note: contracts should only depend on stdlib + pydantic.
"""

from typing import Union

from pydantic import BaseModel, ConfigDict

# Labels are allowed to be numbers or strings.
Label = Union[int, float, str]


class ResultModel(BaseModel):
    """Base class for result contracts (strict by default)."""

    model_config = ConfigDict(extra="forbid")


__all__ = ["Label", "ResultModel"]
