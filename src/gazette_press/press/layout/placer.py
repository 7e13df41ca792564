"""
Module: press.layout.placer

Purpose:
    Compute non-overlapping placement rects for a sequence of content
    items inside the page's safe area.

Key Classes:
    - ContentPlacer: Deterministic grid placement

Algorithm:
    Simple grid, single pass:
    1. Split the safe area into columns x rows cells separated by a gutter
    2. Item i goes to cell (i mod per_page), filling rows left to right
    3. The rect keeps the item's aspect ratio, scaled to fit and centred
       in its cell
    4. When a page's cells are used up, continue on the next page

    Cells are disjoint and inside the safe area, so rects never overlap
    and within a row each rect starts to the right of the previous one.

Dependencies:
    - press.layout.geometry: PageGeometry
    - press.config: PlacementConfig

Used By:
    - press.service: Place stage
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from gazette_press.common.units import mm_to_pt
from gazette_press.core.models import ContentItem

from ..config import PlacementConfig
from .geometry import PageGeometry
from .models import Box, PlacementRect

logger = logging.getLogger(__name__)


class ContentPlacer:
    """
    Places content items on a grid inside the safe area.

    Attributes:
        geometry: Page geometry in points
        config: Grid and safe-zone settings

    Example:
        >>> placer = ContentPlacer(PageGeometry(210, 297, 3))
        >>> rects = placer.place(items)
        >>> all(r.safe_zone for r in rects)
        True
    """

    def __init__(self, geometry: PageGeometry, config: Optional[PlacementConfig] = None):
        self.geometry = geometry
        self.config = config or PlacementConfig()
        self.safe_area = geometry.safe_box(self.config.safe_zone_mm)
        self.cells = _grid_cells(
            self.safe_area,
            self.config.columns,
            self.config.rows,
            mm_to_pt(self.config.gutter_mm),
        )

    @property
    def capacity_per_page(self) -> int:
        return len(self.cells)

    def place(self, items: Sequence[ContentItem]) -> List[PlacementRect]:
        """
        Compute one rect per item, in input order.

        Args:
            items: Items with positive width and height (pixels)

        Returns:
            PlacementRects in points, same order as ``items``
        """
        rects: List[PlacementRect] = []
        per_page = self.capacity_per_page

        for index, item in enumerate(items):
            page, slot = divmod(index, per_page)
            cell = self.cells[slot]

            width, height = _fit_aspect(item.width, item.height, cell.width, cell.height)
            x = cell.x + (cell.width - width) / 2
            y = cell.y + (cell.height - height) / 2

            candidate = Box(x, y, width, height)
            rect = PlacementRect(
                x=x,
                y=y,
                width=width,
                height=height,
                safe_zone=self.safe_area.contains(candidate),
                page=page,
            )
            if not rect.safe_zone:
                logger.warning(f"Placement for {item.id} falls outside the safe area")
            rects.append(rect)

        pages = (len(rects) + per_page - 1) // per_page if rects else 0
        logger.info(f"Placed {len(rects)} items on {pages} page(s)")
        return rects


def _grid_cells(area: Box, columns: int, rows: int, gutter: float) -> List[Box]:
    """
    Split ``area`` into row-major cells.

    Raises:
        ValueError: If the gutters leave no room for cells
    """
    cell_w = (area.width - gutter * (columns - 1)) / columns
    cell_h = (area.height - gutter * (rows - 1)) / rows
    if cell_w <= 0 or cell_h <= 0:
        raise ValueError(
            f"Safe area {area.width:.1f}x{area.height:.1f}pt too small for "
            f"{columns}x{rows} grid with {gutter:.1f}pt gutter"
        )

    cells = []
    for row in range(rows):
        for col in range(columns):
            cells.append(Box(
                area.x + col * (cell_w + gutter),
                area.y + row * (cell_h + gutter),
                cell_w,
                cell_h,
            ))
    return cells


def _fit_aspect(
    width: float,
    height: float,
    box_w: float,
    box_h: float,
) -> Tuple[float, float]:
    scale = min(box_w / width, box_h / height)
    return min(box_w, width * scale), min(box_h, height * scale)
