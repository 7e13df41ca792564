"""
Module: press.output.composer

Purpose:
    Assemble optimized assets and their placements into a print-ready
    document with bleed and printer's marks.

Key Classes:
    - DocumentComposer: Builds one document per compose() call

Pages follow placement order: a page break is emitted whenever a
placement's page index advances. Marks are drawn after the content of
each page so they sit on top.

Dependencies:
    - press.output.writer: DocumentWriter, WriterError
    - press.output.marks: Crop marks and colour bars
    - press.layout: PageGeometry, PlacementRect

Used By:
    - press.service: Compose stage
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from gazette_press.common.units import pt_to_mm
from gazette_press.core.errors import CompositionError
from gazette_press.core.models import ColorSpace, LayoutSpec, OptimizedAsset

from ..config import MarksConfig
from ..layout.geometry import PageGeometry
from ..layout.models import PlacementRect
from .marks import draw_print_marks
from .writer import DocumentWriter, WriterError, WriterFactory, reportlab_writer_factory

logger = logging.getLogger(__name__)


class DocumentComposer:
    """
    Composes print documents.

    Each call to compose() asks the factory for a fresh writer, so a
    composer may be reused across requests.

    Example:
        >>> composer = DocumentComposer()
        >>> pdf = composer.compose(spec, assets, placements)
        >>> pdf[:5]
        b'%PDF-'
    """

    def __init__(
        self,
        writer_factory: Optional[WriterFactory] = None,
        marks: Optional[MarksConfig] = None,
        *,
        color_space: ColorSpace = ColorSpace.CMYK,
    ):
        self.writer_factory = writer_factory or reportlab_writer_factory()
        self.marks = marks or MarksConfig()
        self.color_space = color_space

    def compose(
        self,
        spec: LayoutSpec,
        assets: Sequence[OptimizedAsset],
        placements: Sequence[PlacementRect],
    ) -> bytes:
        """
        Produce the document bytes.

        Args:
            spec: Validated layout spec (page size and bleed)
            assets: Optimized assets, index-aligned with placements
            placements: Where each asset goes

        Returns:
            Complete document bytes

        Raises:
            CompositionError: On count mismatch, unknown page geometry or
                any writer failure. No partial output is returned.
        """
        if len(assets) != len(placements):
            raise CompositionError(
                f"Asset/placement count mismatch: {len(assets)} assets, "
                f"{len(placements)} placements"
            )

        try:
            geometry = PageGeometry.from_spec(spec)
        except ValueError as e:
            raise CompositionError(str(e)) from e

        try:
            writer = self.writer_factory(geometry.page_size_pt, self.color_space)
            pages = self._draw(writer, geometry, assets, placements)
            data = writer.finalize()
        except CompositionError:
            raise
        except WriterError as e:
            raise CompositionError(f"Document composition failed: {e}") from e
        except Exception as e:  # third-party writers raise their own types
            raise CompositionError(
                f"Document composition failed: {type(e).__name__}: {e}"
            ) from e

        if not data:
            raise CompositionError("Document writer produced no output")

        logger.info(
            f"Composed {pages} page(s) at {pt_to_mm(geometry.width_pt):.0f}x"
            f"{pt_to_mm(geometry.height_pt):.0f}mm "
            f"({len(data)} bytes)"
        )
        return data

    def _draw(
        self,
        writer: DocumentWriter,
        geometry: PageGeometry,
        assets: Sequence[OptimizedAsset],
        placements: Sequence[PlacementRect],
    ) -> int:
        """Draw every page; returns the number of pages drawn."""
        current = 0
        for asset, rect in zip(assets, placements):
            if rect.page < current:
                raise CompositionError(
                    f"Placement for {asset.item_id} is on page {rect.page} "
                    f"but page {current} is already open"
                )
            while current < rect.page:
                self._finish_page(writer, geometry)
                writer.new_page()
                current += 1

            writer.place_image(asset.data, rect.x, rect.y, rect.width, rect.height)
            logger.debug(
                f"Placed {asset.item_id} on page {rect.page} at "
                f"({rect.x:.1f}, {rect.y:.1f}) {rect.width:.1f}x{rect.height:.1f}pt"
            )

        self._finish_page(writer, geometry)
        return current + 1

    def _finish_page(self, writer: DocumentWriter, geometry: PageGeometry) -> None:
        draw_print_marks(writer, geometry, self.marks)
