from __future__ import annotations

"""Literal-based "choice" types used across contracts.

Keep this file dependency-free (stdlib + typing only).
"""

from typing import Literal, TypeAlias

# Names accepted for the combination method (codes 0, 1, 2, 3, -1 are also allowed).
CombinationMethodName: TypeAlias = Literal[
    "plurality",
    "confidence weighted",
    "probability weighted",
    "threshold",
    "boosting",
]

# Code-facing aliases of the same methods.
CombinationMethodCode: TypeAlias = Literal[0, 1, 2, 3, -1]

# Unit attached to merged regression distributions.
DistributionUnit: TypeAlias = Literal["counts", "bins"]
