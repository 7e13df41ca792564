"""
Unit tests for the gazette error taxonomy.
"""

import pytest

from gazette_press.core.errors import (
    AssetEncodingError,
    CompositionError,
    ContentNotFound,
    FetchTimeout,
    GazetteNotFound,
    GazettePressError,
    InsufficientBleed,
    InsufficientResolution,
    LayoutValidationError,
    UnsupportedColorSpace,
    UnsupportedPageSize,
)
from gazette_press.core.models import ColorSpace, PageSize


class TestMessages:
    """Messages name the requirement and the offending value."""

    def test_page_size_message(self):
        err = UnsupportedPageSize("Legal", PageSize.A4)
        assert str(err) == "Only A4 format is supported for print production (got Legal)"
        assert err.value == "Legal"
        assert err.required == PageSize.A4

    def test_color_space_message(self):
        err = UnsupportedColorSpace(ColorSpace.RGB, ColorSpace.CMYK)
        assert str(err) == "CMYK color space is required for print production (got RGB)"

    def test_resolution_message(self):
        err = InsufficientResolution(200, 300)
        assert str(err) == "Minimum resolution of 300 DPI required (got 200)"
        assert (err.value, err.required) == (200, 300)

    def test_bleed_message_formats_millimetres(self):
        err = InsufficientBleed(2.0, 3.0)
        assert str(err) == "Minimum bleed of 3mm required (got 2mm)"

    def test_bleed_message_keeps_non_numeric_value(self):
        err = InsufficientBleed("wide", 3.0)
        assert "got 'wide'mm" in str(err)

    def test_asset_encoding_error_carries_item_id(self):
        err = AssetEncodingError("c7", "cannot decode image")
        assert err.item_id == "c7"
        assert "c7" in str(err)

    def test_content_not_found_carries_content_id(self):
        assert ContentNotFound("c9").content_id == "c9"

    def test_fetch_timeout_carries_timeout(self):
        err = FetchTimeout(0.25, "content")
        assert err.timeout == 0.25
        assert "content" in str(err)


class TestGazetteContext:
    """The gazette id is attached without changing the error class."""

    def test_when_context_attached_then_class_and_message_preserved(self):
        err = InsufficientResolution(200, 300)

        returned = err.with_gazette("g-42")

        assert returned is err
        assert isinstance(err, InsufficientResolution)
        assert err.gazette_id == "g-42"
        assert str(err) == "[gazette g-42] Minimum resolution of 300 DPI required (got 200)"
        assert err.message == "Minimum resolution of 300 DPI required (got 200)"

    def test_gazette_not_found_sets_its_own_id(self):
        err = GazetteNotFound("missing")
        assert err.gazette_id == "missing"

    @pytest.mark.parametrize("err", [
        GazetteNotFound("g"),
        ContentNotFound("c"),
        FetchTimeout(1.0),
        UnsupportedPageSize("A3", "A4"),
        AssetEncodingError("c", "x"),
        CompositionError("x"),
    ])
    def test_all_errors_share_base_class(self, err):
        assert isinstance(err, GazettePressError)

    def test_validation_errors_share_subclass(self):
        for err in (
            UnsupportedPageSize("A3", "A4"),
            UnsupportedColorSpace("RGB", "CMYK"),
            InsufficientResolution(72, 300),
            InsufficientBleed(0, 3),
        ):
            assert isinstance(err, LayoutValidationError)
