"""
Module: press.output

Purpose:
    Document generation: writer abstraction, ReportLab PDF writer,
    printer's marks, composition and post-render inspection.

Key Classes:
    - DocumentComposer: Assets + placements -> document bytes
    - DocumentWriter: Abstract document sink
    - ReportLabDocumentWriter: PDF implementation

Key Functions:
    - inspect_pdf(): PyMuPDF summary of a finished document
    - verify_report(): Check page sizes and image colorspaces

Dependencies:
    - reportlab: PDF writing
    - fitz (PyMuPDF): PDF inspection

Used By:
    - press.service: Compose and verify stages
"""

from .writer import (
    DocumentWriter,
    DrawStyle,
    ReportLabDocumentWriter,
    WriterError,
    WriterFactory,
    reportlab_writer_factory,
)
from .marks import draw_color_bars, draw_crop_marks, draw_print_marks
from .composer import DocumentComposer
from .inspection import DocumentReport, PageReport, inspect_pdf, verify_report

__all__ = [
    # Writer
    "DocumentWriter",
    "DrawStyle",
    "ReportLabDocumentWriter",
    "WriterError",
    "WriterFactory",
    "reportlab_writer_factory",
    # Marks
    "draw_crop_marks",
    "draw_color_bars",
    "draw_print_marks",
    # Composition
    "DocumentComposer",
    # Inspection
    "DocumentReport",
    "PageReport",
    "inspect_pdf",
    "verify_report",
]
