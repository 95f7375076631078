"""Confidence blending for parse results."""

from .aggregator import ConfidenceBreakdown, blend_confidence, clamp01, title_bonus

__all__ = [
    "ConfidenceBreakdown",
    "blend_confidence",
    "clamp01",
    "title_bonus",
]
