"""
Module: press.layout.geometry

Purpose:
    Physical page geometry in points, derived from a LayoutSpec.

    media box = trim size + bleed on every side
    trim box  = media box inset by bleed
    safe box  = trim box inset by the safe-zone margin

Key Classes:
    - PageGeometry: Immutable page geometry

Dependencies:
    - common.units: mm to point conversion

Used By:
    - press.layout.placer: Safe area and cells
    - press.output.composer: Page size and print marks
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from gazette_press.common.units import mm_to_pt
from gazette_press.core.models import LayoutSpec, PageSize, PAGE_DIMENSIONS_MM

from .models import Box


@dataclass(frozen=True)
class PageGeometry:
    """
    Page geometry for one layout (immutable).

    Attributes:
        trim_width_mm: Finished page width after cutting
        trim_height_mm: Finished page height after cutting
        bleed_mm: Bleed added beyond the trim edge on every side

    Example:
        >>> geometry = PageGeometry(210, 297, 3)
        >>> round(geometry.width_pt, 3)
        612.283
    """

    trim_width_mm: float
    trim_height_mm: float
    bleed_mm: float

    def __post_init__(self) -> None:
        """Validate geometry on construction."""
        if self.trim_width_mm <= 0 or self.trim_height_mm <= 0:
            raise ValueError(
                f"trim size must be positive: {self.trim_width_mm}x{self.trim_height_mm}"
            )
        if self.bleed_mm < 0:
            raise ValueError(f"bleed must be non-negative: {self.bleed_mm}")

    @classmethod
    def from_spec(cls, spec: LayoutSpec) -> "PageGeometry":
        """
        Geometry for a validated LayoutSpec.

        Raises:
            ValueError: If the spec names a page size with no known dimensions
        """
        try:
            width_mm, height_mm = PAGE_DIMENSIONS_MM[PageSize(spec.page_size)]
        except (KeyError, ValueError) as e:
            raise ValueError(f"Unknown page size: {spec.page_size!r}") from e
        return cls(width_mm, height_mm, float(spec.bleed))

    # ─────────────────────────────────────────────────────────────────────────
    # Sizes in points
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def width_pt(self) -> float:
        """Media width including bleed on both sides."""
        return mm_to_pt(self.trim_width_mm + self.bleed_mm * 2)

    @property
    def height_pt(self) -> float:
        """Media height including bleed on both sides."""
        return mm_to_pt(self.trim_height_mm + self.bleed_mm * 2)

    @property
    def page_size_pt(self) -> Tuple[float, float]:
        return (self.width_pt, self.height_pt)

    @property
    def bleed_pt(self) -> float:
        return mm_to_pt(self.bleed_mm)

    # ─────────────────────────────────────────────────────────────────────────
    # Boxes
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def media_box(self) -> Box:
        return Box(0.0, 0.0, self.width_pt, self.height_pt)

    @property
    def trim_box(self) -> Box:
        return self.media_box.inset(self.bleed_pt)

    def safe_box(self, safe_zone_mm: float) -> Box:
        """Area where content is guaranteed not to be cut."""
        return self.trim_box.inset(mm_to_pt(safe_zone_mm))
