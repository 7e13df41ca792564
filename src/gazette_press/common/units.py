"""Unit conversion helpers for print geometry.

PDF points are 1/72 inch. Millimetre page dimensions are converted with
72/25.4 points per millimetre; source pixel dimensions are assumed to come
from a 72 DPI screen baseline.
"""

from __future__ import annotations

import math

POINTS_PER_INCH = 72.0
MM_PER_INCH = 25.4
POINTS_PER_MM = POINTS_PER_INCH / MM_PER_INCH  # ≈ 2.83465
REFERENCE_SCREEN_DPI = 72


def mm_to_pt(mm: float) -> float:
    """Convert millimetres to PDF points."""
    return mm * POINTS_PER_MM


def pt_to_mm(pt: float) -> float:
    """Convert PDF points to millimetres."""
    return pt / POINTS_PER_MM


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Python's ``round`` uses banker's rounding (``round(2.5) == 2``); pixel
    targets must round 0.5 up.
    """
    return int(math.floor(value + 0.5))


def scale_pixels(source_px: int, resolution: int) -> int:
    """
    Scale a source pixel length from the screen baseline to ``resolution``.

    Example:
        >>> scale_pixels(1000, 300)
        4167
    """
    return round_half_up(source_px * resolution / REFERENCE_SCREEN_DPI)
