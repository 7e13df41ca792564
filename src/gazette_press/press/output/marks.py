"""
Module: press.output.marks

Purpose:
    Printer's marks drawn on every page: crop marks at the trim corners
    and CMYK colour bars in the top bleed strip.

Both kinds of mark live entirely in the bleed, so they are cut away
when the sheet is trimmed. Crop marks run along the trim lines from the
media edge; each stroke is clipped to the bleed width.

Key Functions:
    - draw_crop_marks(): Eight strokes marking the trim corners
    - draw_color_bars(): Cyan, magenta, yellow and black patches
    - draw_print_marks(): Both, as enabled by MarksConfig

Dependencies:
    - press.output.writer: DocumentWriter, DrawStyle
    - press.layout.geometry: PageGeometry

Used By:
    - press.output.composer: Once per page after content
"""

from __future__ import annotations

import logging

from gazette_press.common.units import mm_to_pt

from ..config import MarksConfig
from ..layout.geometry import PageGeometry
from .writer import DocumentWriter, DrawStyle

logger = logging.getLogger(__name__)

# Registration colour: 100% of every ink, so the mark shows on every plate
REGISTRATION = (1.0, 1.0, 1.0, 1.0)

COLOR_BAR_PATCHES = (
    (1.0, 0.0, 0.0, 0.0),  # cyan
    (0.0, 1.0, 0.0, 0.0),  # magenta
    (0.0, 0.0, 1.0, 0.0),  # yellow
    (0.0, 0.0, 0.0, 1.0),  # black
)


def draw_crop_marks(writer: DocumentWriter, geometry: PageGeometry, config: MarksConfig) -> int:
    """
    Draw crop marks at the four trim corners.

    Returns:
        Number of strokes drawn (0 when the page has no bleed)
    """
    length = min(mm_to_pt(config.mark_length_mm), geometry.bleed_pt)
    if length <= 0:
        return 0

    style = DrawStyle(stroke=REGISTRATION, line_width=config.mark_width_pt)
    trim = geometry.trim_box
    width, height = geometry.width_pt, geometry.height_pt

    strokes = 0
    for y in (trim.y, trim.bottom):
        writer.draw_line(0.0, y, length, y, style)
        writer.draw_line(width - length, y, width, y, style)
        strokes += 2
    for x in (trim.x, trim.right):
        writer.draw_line(x, 0.0, x, length, style)
        writer.draw_line(x, height - length, x, height, style)
        strokes += 2
    return strokes


def draw_color_bars(writer: DocumentWriter, geometry: PageGeometry, config: MarksConfig) -> int:
    """
    Draw CMYK colour patches in the top bleed strip.

    Patches start one bar width inside the left trim line and stop
    before the right one.

    Returns:
        Number of patches drawn
    """
    strip = geometry.bleed_pt
    if strip <= 0:
        return 0

    bar_width = mm_to_pt(config.bar_width_mm)
    trim = geometry.trim_box
    x = trim.x + bar_width

    patches = 0
    for patch in COLOR_BAR_PATCHES:
        if x + bar_width > trim.right:
            break
        writer.draw_rect(x, 0.0, bar_width, strip, DrawStyle(stroke=None, fill=patch))
        x += bar_width
        patches += 1
    return patches


def draw_print_marks(writer: DocumentWriter, geometry: PageGeometry, config: MarksConfig) -> None:
    """Draw whichever marks ``config`` enables on the current page."""
    strokes = draw_crop_marks(writer, geometry, config) if config.crop_marks else 0
    patches = draw_color_bars(writer, geometry, config) if config.color_bars else 0
    logger.debug(f"Print marks: {strokes} crop strokes, {patches} colour patches")
