from __future__ import annotations

"""Helpers for best-effort warning recording during record ingestion.

Appending malformed records to a vote must not raise, but silent drops make
regressions hard to debug. ``record_warning`` keeps a structured marker on
the owner's list, emits a ``UserWarning`` and logs it.
"""

import logging
import warnings
from typing import Any, Dict, List, Optional, TypedDict

logger = logging.getLogger(__name__)


class IngestionWarning(TypedDict, total=False):
    """Lightweight, JSON-friendly marker for a rejected record."""

    where: str
    message: str
    context: Dict[str, Any]


def record_warning(
    store: List[IngestionWarning],
    *,
    where: str,
    message: str,
    context: Optional[Dict[str, Any]] = None,
) -> None:
    """Append a warning marker into ``store``, warn and log (never raises)."""
    store.append(
        {
            "where": str(where),
            "message": str(message),
            "context": dict(context) if context else {},
        }
    )
    logger.warning("%s: %s", where, message)
    warnings.warn(f"{where}: {message}", UserWarning, stacklevel=3)


__all__ = ["IngestionWarning", "record_warning"]
