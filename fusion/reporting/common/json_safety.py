from __future__ import annotations

"""Rounding and scalar helpers for combined-prediction payloads.

Combiners compute with numpy but hand back plain Python scalars so results
compare and serialize like the records they came from.

Policy
------
* Sentinels are preserved: NaN and +/-inf pass through rounding unchanged.
* numpy scalars are unwrapped to ``float``/``int``.
"""

from typing import Any
import math

import numpy as np

from fusion.core.records import PRECISION


def as_python_scalar(x: Any) -> Any:
    """Unwrap numpy scalars; leave anything else untouched."""
    if isinstance(x, np.generic):
        return x.item()
    return x


def round_precision(x: Any, digits: int = PRECISION) -> float:
    """Round to ``digits`` decimal places, keeping NaN/inf sentinels."""
    f = float(x)
    if not math.isfinite(f):
        return f
    return round(f, digits)
