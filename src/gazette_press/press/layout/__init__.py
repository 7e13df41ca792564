"""
Module: press.layout

Purpose:
    Page geometry and content placement.
    Converts content items into positioned rects on print pages.

Key Classes:
    - PageGeometry: Media, trim and safe boxes in points
    - ContentPlacer: Grid placement inside the safe area
    - Box: Axis-aligned rectangle
    - PlacementRect: Placed content item

Dependencies:
    - gazette_press.core.models: LayoutSpec, ContentItem
    - press.config: PlacementConfig

Used By:
    - press.output.composer: Draws at placements
    - press.service: Place stage
"""

from .models import Box, PlacementRect
from .geometry import PageGeometry
from .placer import ContentPlacer

__all__ = [
    # Models
    "Box",
    "PlacementRect",
    # Geometry
    "PageGeometry",
    # Placement
    "ContentPlacer",
]
