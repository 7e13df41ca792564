"""Common utilities shared across the press pipeline."""

from __future__ import annotations

from .units import (
    POINTS_PER_INCH,
    MM_PER_INCH,
    POINTS_PER_MM,
    REFERENCE_SCREEN_DPI,
    mm_to_pt,
    pt_to_mm,
    scale_pixels,
    round_half_up,
)

__all__ = [
    "POINTS_PER_INCH",
    "MM_PER_INCH",
    "POINTS_PER_MM",
    "REFERENCE_SCREEN_DPI",
    "mm_to_pt",
    "pt_to_mm",
    "scale_pixels",
    "round_half_up",
]
