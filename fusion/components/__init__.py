"""Compute layer: statistics, distributions, the vote container and the combiners."""

from .vote import Vote

__all__ = ["Vote"]
