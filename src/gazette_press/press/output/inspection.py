"""
Module: press.output.inspection

Purpose:
    Quality checks on a finished document. Re-opens the PDF bytes with
    PyMuPDF and reports what a print operator would check first: page
    count, media sizes, and the images embedded on each page with their
    colorspaces.

Key Functions:
    - inspect_pdf(): Read a document into a DocumentReport
    - verify_report(): Compare a report against the expected geometry

Dependencies:
    - fitz (PyMuPDF): PDF access

Used By:
    - press.service: Optional verification after composing
    - cli: Summary line after rendering
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import fitz

from gazette_press.core.errors import CompositionError

from ..layout.geometry import PageGeometry

logger = logging.getLogger(__name__)

# Media size tolerance in points (PDF stores sizes as decimal strings)
DEFAULT_TOLERANCE_PT = 0.5


@dataclass(frozen=True)
class PageReport:
    """
    One page of an inspected document.

    Attributes:
        index: Page number (0-based)
        width_pt: Media box width
        height_pt: Media box height
        image_colorspaces: Colorspace name of each embedded image
    """

    index: int
    width_pt: float
    height_pt: float
    image_colorspaces: Tuple[str, ...] = ()

    @property
    def image_count(self) -> int:
        return len(self.image_colorspaces)


@dataclass(frozen=True)
class DocumentReport:
    """Inspection results for a whole document."""

    byte_size: int
    pages: Tuple[PageReport, ...]

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def image_count(self) -> int:
        return sum(page.image_count for page in self.pages)

    @property
    def image_colorspaces(self) -> frozenset:
        return frozenset(cs for page in self.pages for cs in page.image_colorspaces)


def inspect_pdf(data: bytes) -> DocumentReport:
    """
    Open PDF bytes and summarise every page.

    Raises:
        CompositionError: If the bytes are empty or not a readable PDF
    """
    if not data:
        raise CompositionError("Generated document is empty")

    try:
        with fitz.open(stream=data, filetype="pdf") as doc:
            pages = tuple(
                PageReport(
                    index=index,
                    width_pt=page.rect.width,
                    height_pt=page.rect.height,
                    # get_images(full=True) entries carry the colorspace at index 5
                    image_colorspaces=tuple(img[5] for img in page.get_images(full=True)),
                )
                for index, page in enumerate(doc)
            )
    except (RuntimeError, ValueError) as e:
        raise CompositionError(f"Generated document is unreadable: {e}") from e

    report = DocumentReport(byte_size=len(data), pages=pages)
    logger.debug(
        f"Inspected PDF: {report.page_count} page(s), {report.image_count} image(s), "
        f"{report.byte_size} bytes"
    )
    return report


def verify_report(
    report: DocumentReport,
    geometry: PageGeometry,
    *,
    expected_pages: Optional[int] = None,
    expected_images: Optional[int] = None,
    color_space: Optional[str] = "DeviceCMYK",
    tolerance_pt: float = DEFAULT_TOLERANCE_PT,
) -> None:
    """
    Check a report against what the composer was asked to produce.

    Args:
        report: Result of inspect_pdf()
        geometry: Expected page geometry
        expected_pages: Page count, if known
        expected_images: Total embedded image count, if known
        color_space: Required colorspace for every image (None = any)
        tolerance_pt: Allowed media size deviation

    Raises:
        CompositionError: On the first deviation found
    """
    if report.page_count == 0:
        raise CompositionError("Generated document has no pages")
    if expected_pages is not None and report.page_count != expected_pages:
        raise CompositionError(
            f"Document has {report.page_count} page(s), expected {expected_pages}"
        )

    for page in report.pages:
        if (
            abs(page.width_pt - geometry.width_pt) > tolerance_pt
            or abs(page.height_pt - geometry.height_pt) > tolerance_pt
        ):
            raise CompositionError(
                f"Page {page.index + 1} is {page.width_pt:.2f}x{page.height_pt:.2f}pt, "
                f"expected {geometry.width_pt:.2f}x{geometry.height_pt:.2f}pt"
            )
        if color_space is not None:
            for cs in page.image_colorspaces:
                if cs != color_space:
                    raise CompositionError(
                        f"Page {page.index + 1} embeds a {cs} image, expected {color_space}"
                    )

    if expected_images is not None and report.image_count != expected_images:
        raise CompositionError(
            f"Document embeds {report.image_count} image(s), expected {expected_images}"
        )
