"""
Unit tests for configuration dataclasses.
"""

import pytest

from gazette_press.core.models import ColorSpace, PageSize
from gazette_press.press.config import (
    MarksConfig,
    OptimizerConfig,
    PlacementConfig,
    PressConfig,
    PrintConstraints,
)


def test_print_defaults():
    constraints = PrintConstraints()
    assert constraints.page_size == PageSize.A4
    assert constraints.color_space == ColorSpace.CMYK
    assert constraints.min_resolution == 300
    assert constraints.min_bleed_mm == 3.0


def test_optimizer_defaults_are_maximum_fidelity():
    config = OptimizerConfig()
    assert (config.image_format, config.quality, config.subsampling) == ("JPEG", 100, "4:4:4")


def test_placement_capacity():
    assert PlacementConfig().items_per_page == 6
    assert PlacementConfig(columns=3, rows=4).items_per_page == 12


@pytest.mark.parametrize("factory", [
    lambda: PrintConstraints(min_bleed_mm=-1),
    lambda: OptimizerConfig(quality=0),
    lambda: OptimizerConfig(quality=101),
    lambda: OptimizerConfig(max_workers=0),
    lambda: PlacementConfig(gutter_mm=-1),
    lambda: PlacementConfig(rows=0),
    lambda: MarksConfig(mark_length_mm=0),
    lambda: MarksConfig(bar_width_mm=-2),
    lambda: PressConfig(fetch_timeout=0),
])
def test_invalid_values_rejected(factory):
    with pytest.raises(ValueError):
        factory()


def test_configs_are_immutable():
    with pytest.raises(AttributeError):
        PressConfig().verify_output = False
