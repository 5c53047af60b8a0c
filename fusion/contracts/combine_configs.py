from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .choices import CombinationMethodCode, CombinationMethodName
from .results.common import Label

if TYPE_CHECKING:
    from fusion.registries.combiners import CombinationMethod


# -----------------------------
# Method options
# -----------------------------

class ThresholdOptions(BaseModel):
    """
    Options for the threshold method.

    Notes:
      - `category` wins outright when at least `threshold` submodels named it.
      - `threshold` is also checked against the number of predictions when
        combining; it cannot exceed the ensemble size.
    """
    threshold: int = Field(ge=1)
    category: Label


class BoostingOptions(BaseModel):
    # class order used to break ties between equally probable classes
    categories: list[Label] = Field(default_factory=list)


# -----------------------------
# Combination config
# -----------------------------

class CombineConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    method: Union[CombinationMethodName, CombinationMethodCode, int] = "plurality"
    full: bool = False

    threshold: Optional[ThresholdOptions] = None
    boosting: Optional[BoostingOptions] = None

    @field_validator("method", mode="before")
    @classmethod
    def _normalize_method_name(cls, v: Any) -> Any:
        # names match case-insensitively, as in resolve_method
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @model_validator(mode="after")
    def _check_method_options(self) -> "CombineConfig":
        from fusion.registries.combiners import CombinationMethod

        if self.resolved_method() is CombinationMethod.THRESHOLD and self.threshold is None:
            raise ValueError("The threshold method needs threshold options (threshold and category).")
        return self

    def resolved_method(self) -> "CombinationMethod":
        from fusion.registries.combiners import resolve_method

        return resolve_method(self.method)

    def to_options(self) -> Dict[str, Any]:
        """Plain options mapping consumed by the combiners."""
        options: Dict[str, Any] = {}
        if self.threshold is not None:
            options.update(self.threshold.model_dump())
        if self.boosting is not None:
            options.update(self.boosting.model_dump())
        return options


__all__ = ["ThresholdOptions", "BoostingOptions", "CombineConfig"]
