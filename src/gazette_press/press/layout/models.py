"""
Module: press.layout.models

Purpose:
    Data models for page layout.
    Immutable dataclasses for rectangles and placed content.

Key Classes:
    - Box: Axis-aligned rectangle in points
    - PlacementRect: Where one content item lands on which page

Coordinate system:
    Points, origin at the top-left corner of the bleed-inclusive media
    box, y growing downward. The document writer converts to PDF's
    bottom-up coordinates.

Dependencies:
    - dataclasses (std)

Used By:
    - press.layout.geometry: Trim and safe boxes
    - press.layout.placer: Creates PlacementRects
    - press.output.composer: Draws assets at PlacementRects
"""

from __future__ import annotations

from dataclasses import dataclass

# Tolerance for float comparisons of point coordinates
EPSILON_PT = 1e-6


@dataclass(frozen=True)
class Box:
    """
    Axis-aligned rectangle in points.

    Example:
        >>> Box(10, 10, 100, 50).bottom
        60
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def inset(self, amount: float) -> "Box":
        """Shrink by ``amount`` on every side."""
        return Box(
            self.x + amount,
            self.y + amount,
            self.width - 2 * amount,
            self.height - 2 * amount,
        )

    def contains(self, other: "Box | PlacementRect") -> bool:
        """True if ``other`` lies entirely inside this box."""
        return (
            other.x >= self.x - EPSILON_PT
            and other.y >= self.y - EPSILON_PT
            and other.right <= self.right + EPSILON_PT
            and other.bottom <= self.bottom + EPSILON_PT
        )


@dataclass(frozen=True)
class PlacementRect:
    """
    Placement of one content item (immutable).

    Attributes:
        x: Left edge in points
        y: Top edge in points
        width: Width in points
        height: Height in points
        safe_zone: True if the rect lies inside the page's safe area
        page: Page index (0-based) the rect belongs to

    Example:
        >>> rect = PlacementRect(x=22.7, y=22.7, width=200, height=150, safe_zone=True)
        >>> rect.right
        222.7
    """

    x: float
    y: float
    width: float
    height: float
    safe_zone: bool
    page: int = 0

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def overlaps(self, other: "PlacementRect") -> bool:
        """
        Check if this rect overlaps another on the same page.

        Rects that only touch along an edge do NOT overlap.
        """
        if self.page != other.page:
            return False
        return not (
            self.right <= other.x + EPSILON_PT
            or other.right <= self.x + EPSILON_PT
            or self.bottom <= other.y + EPSILON_PT
            or other.bottom <= self.y + EPSILON_PT
        )
