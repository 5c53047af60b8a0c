"""Payload helpers shared by the combiners (rounding, warning markers)."""
