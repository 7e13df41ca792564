"""
Unit tests for LayoutValidator.

Checks run in a fixed order (page size, colorspace, resolution, bleed)
and the first failure is reported.
"""

import pytest

from gazette_press.core.errors import (
    InsufficientBleed,
    InsufficientResolution,
    UnsupportedColorSpace,
    UnsupportedPageSize,
)
from gazette_press.core.models import ColorSpace, LayoutSpec, PageSize
from gazette_press.press.config import PrintConstraints
from gazette_press.press.validation import LayoutValidator


@pytest.fixture
def validator():
    return LayoutValidator()


class TestAcceptance:
    def test_when_spec_meets_all_constraints_then_passes(self, validator, valid_spec):
        validator.validate(valid_spec)
        assert validator.is_print_valid(valid_spec)

    def test_when_values_exceed_minimums_then_passes(self, validator):
        validator.validate(LayoutSpec(PageSize.A4, ColorSpace.CMYK, 600, 5.0))

    def test_raw_string_values_compare_equal_to_enums(self, validator):
        validator.validate(LayoutSpec("A4", "CMYK", 300, 3.0))

    def test_validation_is_pure(self, validator, valid_spec):
        before = valid_spec.to_dict()
        validator.validate(valid_spec)
        validator.validate(valid_spec)
        assert valid_spec.to_dict() == before


class TestRejection:
    def test_when_page_size_not_a4_then_unsupported_page_size(self, validator):
        with pytest.raises(UnsupportedPageSize) as exc_info:
            validator.validate(LayoutSpec(PageSize.A3, ColorSpace.CMYK, 300, 3.0))
        assert str(exc_info.value) == "Only A4 format is supported for print production (got A3)"

    def test_when_page_size_unknown_then_unsupported_page_size(self, validator):
        with pytest.raises(UnsupportedPageSize):
            validator.validate(LayoutSpec("Legal", ColorSpace.CMYK, 300, 3.0))

    def test_when_rgb_then_unsupported_color_space(self, validator):
        with pytest.raises(UnsupportedColorSpace):
            validator.validate(LayoutSpec(PageSize.A4, ColorSpace.RGB, 300, 3.0))

    def test_when_resolution_200_then_insufficient_resolution(self, validator):
        with pytest.raises(InsufficientResolution) as exc_info:
            validator.validate(LayoutSpec(PageSize.A4, ColorSpace.CMYK, 200, 3.0))
        assert exc_info.value.value == 200
        assert exc_info.value.required == 300
        assert str(exc_info.value) == "Minimum resolution of 300 DPI required (got 200)"

    def test_when_resolution_just_below_minimum_then_rejected(self, validator):
        with pytest.raises(InsufficientResolution):
            validator.validate(LayoutSpec(PageSize.A4, ColorSpace.CMYK, 299, 3.0))

    def test_when_bleed_2mm_then_insufficient_bleed(self, validator):
        with pytest.raises(InsufficientBleed) as exc_info:
            validator.validate(LayoutSpec(PageSize.A4, ColorSpace.CMYK, 300, 2.0))
        assert exc_info.value.value == 2.0
        assert exc_info.value.required == 3.0

    def test_when_bleed_not_numeric_then_insufficient_bleed(self, validator):
        with pytest.raises(InsufficientBleed):
            validator.validate(LayoutSpec(PageSize.A4, ColorSpace.CMYK, 300, None))

    def test_when_resolution_not_numeric_then_insufficient_resolution(self, validator):
        with pytest.raises(InsufficientResolution):
            validator.validate(LayoutSpec(PageSize.A4, ColorSpace.CMYK, "high", 3.0))

    @pytest.mark.parametrize("bleed", [float("nan"), float("inf"), float("-inf")])
    def test_when_bleed_not_finite_then_insufficient_bleed(self, validator, bleed):
        with pytest.raises(InsufficientBleed):
            validator.validate(LayoutSpec(PageSize.A4, ColorSpace.CMYK, 300, bleed))

    @pytest.mark.parametrize("resolution", [float("nan"), float("inf")])
    def test_when_resolution_not_finite_then_insufficient_resolution(self, validator, resolution):
        with pytest.raises(InsufficientResolution):
            validator.validate(LayoutSpec(PageSize.A4, ColorSpace.CMYK, resolution, 3.0))

    def test_when_record_bleed_is_nan_string_then_rejected(self, validator):
        spec = LayoutSpec.from_dict(
            {"page_size": "A4", "color_space": "CMYK", "resolution": 300, "bleed": "nan"}
        )
        with pytest.raises(InsufficientBleed):
            validator.validate(spec)

    def test_is_print_valid_false_on_failure(self, validator):
        assert not validator.is_print_valid(LayoutSpec(PageSize.A4, ColorSpace.CMYK, 72, 3.0))


class TestOrdering:
    """With several failures, the earliest check in the order wins."""

    def test_page_size_reported_before_everything(self, validator):
        with pytest.raises(UnsupportedPageSize):
            validator.validate(LayoutSpec(PageSize.A5, ColorSpace.RGB, 72, 0.0))

    def test_color_space_reported_before_resolution_and_bleed(self, validator):
        with pytest.raises(UnsupportedColorSpace):
            validator.validate(LayoutSpec(PageSize.A4, ColorSpace.GRAY, 72, 0.0))

    def test_resolution_reported_before_bleed(self, validator):
        with pytest.raises(InsufficientResolution):
            validator.validate(LayoutSpec(PageSize.A4, ColorSpace.CMYK, 150, 1.0))


class TestConfiguredConstraints:
    def test_custom_minimums_apply(self):
        validator = LayoutValidator(PrintConstraints(min_resolution=600, min_bleed_mm=5.0))

        with pytest.raises(InsufficientResolution) as exc_info:
            validator.validate(LayoutSpec(PageSize.A4, ColorSpace.CMYK, 300, 5.0))
        assert exc_info.value.required == 600

        with pytest.raises(InsufficientBleed):
            validator.validate(LayoutSpec(PageSize.A4, ColorSpace.CMYK, 600, 3.0))

    def test_invalid_constraints_rejected(self):
        with pytest.raises(ValueError):
            PrintConstraints(min_resolution=0)
