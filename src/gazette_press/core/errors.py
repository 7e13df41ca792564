"""
Module: core.errors

Purpose:
    Error taxonomy for gazette generation. Every failure a caller can
    observe from LayoutService is one of these classes, so callers can
    branch on the kind without parsing messages.

Key Classes:
    - GazettePressError: Base class carrying optional request context
    - GazetteNotFound / ContentNotFound: Missing store records
    - LayoutValidationError (+ 4 subclasses): Print constraint failures
    - AssetEncodingError: Image decode/resize/encode failure
    - CompositionError: PDF assembly/finalisation failure
    - FetchTimeout: Store read exceeded the caller's deadline

Dependencies:
    - None (std only)

Used By:
    - press.validation, press.images, press.output, press.service
"""

from __future__ import annotations

from typing import Optional


class GazettePressError(Exception):
    """
    Base class for all gazette generation failures.

    Attributes:
        gazette_id: Identifier of the gazette being generated, attached by
            the service once the failure leaves a pipeline stage.
    """

    def __init__(self, message: str, *, gazette_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.gazette_id = gazette_id

    def with_gazette(self, gazette_id: str) -> "GazettePressError":
        """Attach request context and return self for re-raising."""
        self.gazette_id = gazette_id
        return self

    def __str__(self) -> str:
        if self.gazette_id is None:
            return self.message
        return f"[gazette {self.gazette_id}] {self.message}"


class GazetteNotFound(GazettePressError):
    """Requested gazette id has no record."""

    def __init__(self, gazette_id: str):
        super().__init__(f"Gazette not found: {gazette_id}", gazette_id=gazette_id)


class ContentNotFound(GazettePressError):
    """A content id referenced by the gazette has no record."""

    def __init__(self, content_id: str):
        super().__init__(f"Content item not found: {content_id}")
        self.content_id = content_id


class FetchTimeout(GazettePressError):
    """Store read exceeded the caller-specified deadline."""

    def __init__(self, timeout: float, what: str = "gazette"):
        super().__init__(f"Fetching {what} exceeded {timeout:.3f}s deadline")
        self.timeout = timeout


# ─────────────────────────────────────────────────────────────────────────────
# Layout validation
# ─────────────────────────────────────────────────────────────────────────────

class LayoutValidationError(GazettePressError):
    """
    Layout specification fails a print-production constraint.

    Attributes:
        value: The offending value from the LayoutSpec
        required: The required value or minimum, where applicable
    """

    def __init__(self, message: str, value: object, required: object = None):
        super().__init__(message)
        self.value = value
        self.required = required


class UnsupportedPageSize(LayoutValidationError):
    """Page size is not the single supported standard format."""

    def __init__(self, value: object, required: object):
        super().__init__(
            f"Only {_label(required)} format is supported for print production "
            f"(got {_label(value)})",
            value,
            required,
        )


class UnsupportedColorSpace(LayoutValidationError):
    """Colorspace is not the production colorspace."""

    def __init__(self, value: object, required: object):
        super().__init__(
            f"{_label(required)} color space is required for print production "
            f"(got {_label(value)})",
            value,
            required,
        )


class InsufficientResolution(LayoutValidationError):
    """Resolution is below the configured minimum DPI."""

    def __init__(self, value: int, required: int):
        super().__init__(
            f"Minimum resolution of {required} DPI required (got {value})",
            value,
            required,
        )


class InsufficientBleed(LayoutValidationError):
    """Bleed is below the configured minimum in millimetres."""

    def __init__(self, value: float, required: float):
        super().__init__(
            f"Minimum bleed of {_mm(required)}mm required (got {_mm(value)}mm)",
            value,
            required,
        )


# ─────────────────────────────────────────────────────────────────────────────
# Processing
# ─────────────────────────────────────────────────────────────────────────────

class AssetEncodingError(GazettePressError):
    """Image decode/resize/encode failed for one content item."""

    def __init__(self, item_id: str, reason: str):
        super().__init__(f"Could not optimize content item {item_id}: {reason}")
        self.item_id = item_id


class CompositionError(GazettePressError):
    """Document assembly or finalisation failed."""
    pass


def _label(value: object) -> str:
    return str(getattr(value, "value", value))


def _mm(value: object) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return f"{value:g}"
    return repr(value)
