"""
Layout Validation

Enforces print-production constraints on a LayoutSpec.

Checks run in a fixed order and stop at the first failure:

1. page size must be the standard format      -> UnsupportedPageSize
2. colorspace must be the production space    -> UnsupportedColorSpace
3. resolution must reach the minimum DPI      -> InsufficientResolution
4. bleed must reach the minimum millimetres   -> InsufficientBleed

Callers observe exactly one failure per invalid spec: the first field out
of compliance in this order. Validation is pure and never touches I/O.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from gazette_press.core.errors import (
    InsufficientBleed,
    InsufficientResolution,
    LayoutValidationError,
    UnsupportedColorSpace,
    UnsupportedPageSize,
)
from gazette_press.core.models import LayoutSpec

from ..config import PrintConstraints

logger = logging.getLogger(__name__)


class LayoutValidator:
    """
    Validates LayoutSpecs against configured print constraints.

    Example:
        >>> validator = LayoutValidator()
        >>> validator.validate(LayoutSpec(PageSize.A4, ColorSpace.CMYK, 300, 3.0))
        >>> validator.validate(LayoutSpec(PageSize.A4, ColorSpace.CMYK, 200, 3.0))
        Traceback (most recent call last):
        ...
        InsufficientResolution: Minimum resolution of 300 DPI required (got 200)
    """

    def __init__(self, constraints: Optional[PrintConstraints] = None):
        self.constraints = constraints or PrintConstraints()

    def validate(self, spec: LayoutSpec) -> None:
        """
        Validate a layout spec.

        Args:
            spec: Layout specification to check

        Raises:
            UnsupportedPageSize: If the page size is not the standard format
            UnsupportedColorSpace: If the colorspace is not the production one
            InsufficientResolution: If resolution is below the minimum
            InsufficientBleed: If bleed is below the minimum
        """
        c = self.constraints

        if spec.page_size != c.page_size:
            raise UnsupportedPageSize(spec.page_size, c.page_size)

        if spec.color_space != c.color_space:
            raise UnsupportedColorSpace(spec.color_space, c.color_space)

        if not _is_number(spec.resolution) or spec.resolution < c.min_resolution:
            raise InsufficientResolution(spec.resolution, c.min_resolution)

        if not _is_number(spec.bleed) or spec.bleed < c.min_bleed_mm:
            raise InsufficientBleed(spec.bleed, c.min_bleed_mm)

        logger.debug(
            f"Layout valid: {c.page_size.value} {c.color_space.value} "
            f"{spec.resolution}dpi bleed={spec.bleed:g}mm"
        )

    def is_print_valid(self, spec: LayoutSpec) -> bool:
        """Return True if ``spec`` passes every constraint."""
        try:
            self.validate(spec)
        except LayoutValidationError:
            return False
        return True


def _is_number(value: object) -> bool:
    # NaN and inf compare False against any threshold, so reject them here
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)
