"""
Module: press.config

Purpose:
    Configuration dataclasses for the gazette press pipeline. Immutable
    settings with validation on construction.

Key Classes:
    - PrintConstraints: Production constraints enforced by the validator
    - OptimizerConfig: Image encoding and worker pool settings
    - PlacementConfig: Safe zone, gutter and grid settings
    - MarksConfig: Crop marks and colour bars
    - PressConfig: Aggregate configuration for LayoutService

Dependencies:
    - dataclasses (std)

Used By:
    - press.validation.validator: PrintConstraints
    - press.images.optimizer: OptimizerConfig
    - press.layout.placer: PlacementConfig
    - press.output.composer: MarksConfig
    - press.service: PressConfig
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from gazette_press.core.models import ColorSpace, PageSize

# Print production defaults
DEFAULT_MIN_RESOLUTION = 300  # DPI
DEFAULT_MIN_BLEED_MM = 3.0
DEFAULT_SAFE_ZONE_MM = 5.0
DEFAULT_COLOR_PROFILE = "Fogra39"


@dataclass(frozen=True)
class PrintConstraints:
    """
    Production constraints a LayoutSpec must satisfy (immutable).

    Passed to LayoutValidator so boundary tests can exercise other
    thresholds without touching module constants.

    Attributes:
        page_size: The single supported paper format
        color_space: The single production colorspace
        min_resolution: Minimum resolution in DPI
        min_bleed_mm: Minimum bleed in millimetres
        color_profile: ICC output profile name recorded in the document
    """

    page_size: PageSize = PageSize.A4
    color_space: ColorSpace = ColorSpace.CMYK
    min_resolution: int = DEFAULT_MIN_RESOLUTION
    min_bleed_mm: float = DEFAULT_MIN_BLEED_MM
    color_profile: str = DEFAULT_COLOR_PROFILE

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.min_resolution <= 0:
            raise ValueError(f"min_resolution must be positive: {self.min_resolution}")
        if self.min_bleed_mm < 0:
            raise ValueError(f"min_bleed_mm must be non-negative: {self.min_bleed_mm}")


@dataclass(frozen=True)
class OptimizerConfig:
    """
    Image optimisation settings (immutable).

    Print output always uses maximum fidelity: quality 100 with 4:4:4
    chroma. The fields exist so tests can observe what the codec is asked
    to do, not to trade quality away.

    Attributes:
        image_format: Encoder format name
        quality: Encoder quality factor (1-100)
        subsampling: Chroma subsampling mode
        max_workers: Worker threads for per-item optimisation (1 = inline)
    """

    image_format: str = "JPEG"
    quality: int = 100
    subsampling: str = "4:4:4"
    max_workers: int = 4

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not 1 <= self.quality <= 100:
            raise ValueError(f"quality must be within 1..100: {self.quality}")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1: {self.max_workers}")


@dataclass(frozen=True)
class PlacementConfig:
    """
    Content placement settings (immutable).

    Attributes:
        safe_zone_mm: Inset from the trim edge that content must stay inside
        gutter_mm: Spacing between neighbouring cells
        columns: Cells per row
        rows: Rows per page; items beyond columns*rows wrap to a new page
    """

    safe_zone_mm: float = DEFAULT_SAFE_ZONE_MM
    gutter_mm: float = 5.0
    columns: int = 2
    rows: int = 3

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.safe_zone_mm < 0:
            raise ValueError(f"safe_zone_mm must be non-negative: {self.safe_zone_mm}")
        if self.gutter_mm < 0:
            raise ValueError(f"gutter_mm must be non-negative: {self.gutter_mm}")
        if self.columns < 1:
            raise ValueError(f"columns must be >= 1: {self.columns}")
        if self.rows < 1:
            raise ValueError(f"rows must be >= 1: {self.rows}")

    @property
    def items_per_page(self) -> int:
        return self.columns * self.rows


@dataclass(frozen=True)
class MarksConfig:
    """
    Print mark settings (immutable).

    Attributes:
        crop_marks: Draw trim marks at the four page corners
        color_bars: Draw CMYK calibration patches in the top bleed strip
        mark_length_mm: Length of each crop mark stroke
        mark_width_pt: Stroke width of crop marks
        bar_width_mm: Width of each colour bar patch
    """

    crop_marks: bool = True
    color_bars: bool = True
    mark_length_mm: float = 10.0
    mark_width_pt: float = 0.25
    bar_width_mm: float = 10.0

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.mark_length_mm <= 0:
            raise ValueError(f"mark_length_mm must be positive: {self.mark_length_mm}")
        if self.mark_width_pt <= 0:
            raise ValueError(f"mark_width_pt must be positive: {self.mark_width_pt}")
        if self.bar_width_mm <= 0:
            raise ValueError(f"bar_width_mm must be positive: {self.bar_width_mm}")


@dataclass(frozen=True)
class PressConfig:
    """
    Configuration for generating gazettes (immutable).

    Attributes:
        constraints: Print production constraints
        optimizer: Image optimisation settings
        placement: Placement grid settings
        marks: Print mark settings
        fetch_timeout: Default seconds allowed for store reads (None = no limit)
        verify_output: Inspect the finished PDF before returning it

    Example:
        >>> config = PressConfig(fetch_timeout=5.0)
        >>> config.constraints.min_resolution
        300
    """

    constraints: PrintConstraints = field(default_factory=PrintConstraints)
    optimizer: OptimizerConfig = field(default_factory=OptimizerConfig)
    placement: PlacementConfig = field(default_factory=PlacementConfig)
    marks: MarksConfig = field(default_factory=MarksConfig)
    fetch_timeout: Optional[float] = None
    verify_output: bool = True

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.fetch_timeout is not None and self.fetch_timeout <= 0:
            raise ValueError(f"fetch_timeout must be positive: {self.fetch_timeout}")
