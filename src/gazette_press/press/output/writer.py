"""
Module: press.output.writer

Purpose:
    Abstract document writer and the ReportLab implementation that
    produces the PDF byte stream.

Key Classes:
    - DrawStyle: Stroke/fill colours (CMYK) and line width
    - DocumentWriter: Abstract incremental document sink
    - ReportLabDocumentWriter: PDF writer on an in-memory buffer
    - WriterError: Single failure type reported by any writer

Coordinates passed to a writer are points from the top-left of the
media box (y downward). ReportLab's origin is bottom-left, so the
ReportLab writer flips y the same way the page renderer always has.

A writer accumulates state across calls and must be finalised exactly
once. It is not safe to share between threads; every document gets
its own writer.

Dependencies:
    - reportlab: PDF generation
    - gazette_press.core.models: ColorSpace

Used By:
    - press.output.composer: Document assembly
    - press.output.marks: Crop marks and colour bars
"""

from __future__ import annotations

import io
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from gazette_press.core.models import ColorSpace

logger = logging.getLogger(__name__)

CMYK = Tuple[float, float, float, float]

# Colorspace names accepted by reportlab's enforceColorSpace
_ENFORCED_SPACES = {
    ColorSpace.CMYK: "cmyk",
    ColorSpace.RGB: "rgb",
}


class WriterError(Exception):
    """Document writer failed to draw or finalise."""
    pass


@dataclass(frozen=True)
class DrawStyle:
    """
    Vector drawing style.

    Attributes:
        stroke: Stroke colour as CMYK fractions, or None for no stroke
        fill: Fill colour as CMYK fractions, or None for no fill
        line_width: Stroke width in points
    """

    stroke: Optional[CMYK] = (0.0, 0.0, 0.0, 1.0)
    fill: Optional[CMYK] = None
    line_width: float = 0.25


class DocumentWriter(ABC):
    """
    Abstract incremental document sink.

    Implementations are constructed with the page size in points and the
    document colorspace.
    """

    page_size: Tuple[float, float]
    color_space: ColorSpace

    @abstractmethod
    def place_image(self, data: bytes, x: float, y: float, width: float, height: float) -> None:
        """Draw an encoded image into the given rect."""

    @abstractmethod
    def draw_line(self, x1: float, y1: float, x2: float, y2: float, style: DrawStyle) -> None:
        """Stroke a straight line."""

    @abstractmethod
    def draw_rect(self, x: float, y: float, width: float, height: float, style: DrawStyle) -> None:
        """Stroke and/or fill a rectangle."""

    @abstractmethod
    def new_page(self) -> None:
        """Close the current page and start another of the same size."""

    @abstractmethod
    def finalize(self) -> bytes:
        """
        Complete the document and return its bytes.

        Raises:
            WriterError: If called more than once or output cannot be produced
        """


WriterFactory = Callable[[Tuple[float, float], ColorSpace], DocumentWriter]


class ReportLabDocumentWriter(DocumentWriter):
    """
    PDF writer backed by a ReportLab canvas.

    With a CMYK document the canvas enforces CMYK for every vector colour.

    Example:
        >>> writer = ReportLabDocumentWriter((612.28, 858.9), ColorSpace.CMYK)
        >>> writer.place_image(jpeg, 22.7, 22.7, 200, 150)
        >>> pdf = writer.finalize()
    """

    def __init__(
        self,
        page_size: Tuple[float, float],
        color_space: ColorSpace = ColorSpace.CMYK,
        *,
        title: Optional[str] = None,
        subject: Optional[str] = None,
    ):
        self.page_size = page_size
        self.color_space = color_space
        self._buffer = io.BytesIO()
        self._finalized = False
        self._canvas = canvas.Canvas(
            self._buffer,
            pagesize=page_size,
            enforceColorSpace=_ENFORCED_SPACES.get(color_space),
            pageCompression=1,
        )
        self._canvas.setCreator(_creator())
        if title:
            self._canvas.setTitle(title)
        if subject:
            self._canvas.setSubject(subject)

    def place_image(self, data: bytes, x: float, y: float, width: float, height: float) -> None:
        self._check_open()
        try:
            reader = ImageReader(io.BytesIO(data))
            self._canvas.drawImage(
                reader,
                x,
                self._flip_y(y, height),
                width=width,
                height=height,
                preserveAspectRatio=True,
            )
        except Exception as e:  # reportlab raises untyped errors for bad image data
            raise WriterError(f"cannot place image at ({x:.1f}, {y:.1f}): {e}") from e

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, style: DrawStyle) -> None:
        self._check_open()
        c = self._canvas
        c.saveState()
        try:
            self._apply_style(style)
            c.line(x1, self._flip_y(y1), x2, self._flip_y(y2))
        except Exception as e:
            raise WriterError(f"cannot draw line: {e}") from e
        finally:
            c.restoreState()

    def draw_rect(self, x: float, y: float, width: float, height: float, style: DrawStyle) -> None:
        self._check_open()
        c = self._canvas
        c.saveState()
        try:
            self._apply_style(style)
            c.rect(
                x,
                self._flip_y(y, height),
                width,
                height,
                stroke=int(style.stroke is not None),
                fill=int(style.fill is not None),
            )
        except Exception as e:
            raise WriterError(f"cannot draw rect: {e}") from e
        finally:
            c.restoreState()

    def new_page(self) -> None:
        self._check_open()
        try:
            self._canvas.showPage()
        except Exception as e:
            raise WriterError(f"cannot start new page: {e}") from e

    def finalize(self) -> bytes:
        self._check_open()
        self._finalized = True
        try:
            self._canvas.showPage()
            self._canvas.save()
        except Exception as e:
            raise WriterError(f"cannot finalize document: {e}") from e
        data = self._buffer.getvalue()
        logger.debug(f"Finalized PDF: {len(data)} bytes")
        return data

    # ─────────────────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────────────────

    def _check_open(self) -> None:
        if self._finalized:
            raise WriterError("document already finalized")

    def _flip_y(self, y_top: float, height: float = 0.0) -> float:
        """Convert a top-down y (and element height) to PDF bottom-up y."""
        return self.page_size[1] - y_top - height

    def _apply_style(self, style: DrawStyle) -> None:
        c = self._canvas
        if style.stroke is not None:
            c.setStrokeColorCMYK(*style.stroke)
            c.setLineWidth(style.line_width)
        if style.fill is not None:
            c.setFillColorCMYK(*style.fill)


def reportlab_writer_factory(
    *,
    title: Optional[str] = None,
    subject: Optional[str] = None,
) -> WriterFactory:
    """Factory producing a fresh ReportLabDocumentWriter per document."""

    def _create(page_size: Tuple[float, float], color_space: ColorSpace) -> DocumentWriter:
        return ReportLabDocumentWriter(page_size, color_space, title=title, subject=subject)

    return _create


def _creator() -> str:
    from gazette_press import __version__
    return f"gazette_press {__version__}"
