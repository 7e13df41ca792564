"""
Module: layout

Purpose:
    Provides the LayoutSpec dataclass and its enumerations - the physical
    print parameters embedded in every gazette record.

Key Classes:
    - PageSize / ColorSpace / BindingType: Enumerated print parameters
    - LayoutSpec: Paper size, colorspace, resolution, bleed, binding

Key Functions:
    - LayoutSpec.from_dict(data): Deserialize from a JSON record
    - LayoutSpec.to_dict(): Serialize for JSON

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - core.models.gazette.Gazette
    - press.validation.validator
    - press.layout.geometry
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple, Union


class PageSize(str, Enum):
    """ISO 216 / ANSI paper formats a record may name."""

    A4 = "A4"
    A3 = "A3"
    A5 = "A5"
    LETTER = "LETTER"


class ColorSpace(str, Enum):
    """Colorspaces a record may name. Only CMYK is printable."""

    CMYK = "CMYK"
    RGB = "RGB"
    GRAY = "GRAY"


class BindingType(str, Enum):
    """Binding style. Has no effect on page geometry."""

    PERFECT = "PERFECT"
    SADDLE_STITCH = "SADDLE_STITCH"
    SPIRAL = "SPIRAL"


# Trim dimensions (width, height) in millimetres
PAGE_DIMENSIONS_MM: Dict[PageSize, Tuple[float, float]] = {
    PageSize.A4: (210.0, 297.0),
    PageSize.A3: (297.0, 420.0),
    PageSize.A5: (148.0, 210.0),
    PageSize.LETTER: (215.9, 279.4),
}


@dataclass(frozen=True)
class LayoutSpec:
    """
    Print layout parameters for one gazette (immutable).

    Validity is decided by LayoutValidator, not here: a spec naming an
    unsupported page size must still be representable so the validator
    can report it. Unknown enum names are kept as raw strings.

    Attributes:
        page_size: Paper format
        color_space: Output colorspace
        resolution: Image resolution in dots per inch
        bleed: Bleed margin in millimetres
        binding: Binding style

    Example:
        >>> spec = LayoutSpec(PageSize.A4, ColorSpace.CMYK, 300, 3.0)
        >>> spec.bleed
        3.0
    """

    page_size: Union[PageSize, str]
    color_space: Union[ColorSpace, str]
    resolution: int
    bleed: float
    binding: Union[BindingType, str] = BindingType.PERFECT

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dictionary."""
        return {
            "page_size": _enum_value(self.page_size),
            "color_space": _enum_value(self.color_space),
            "resolution": self.resolution,
            "bleed": self.bleed,
            "binding": _enum_value(self.binding),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LayoutSpec":
        """
        Deserialize from a dictionary.

        Accepts both snake_case and camelCase keys so records written by
        other services load unchanged.

        Raises:
            KeyError: If a required field is missing
            ValueError: If resolution or bleed is not numeric
        """
        return cls(
            page_size=_coerce(PageSize, _pick(data, "page_size", "pageSize")),
            color_space=_coerce(ColorSpace, _pick(data, "color_space", "colorSpace")),
            resolution=int(data["resolution"]),
            bleed=float(data["bleed"]),
            binding=_coerce(BindingType, data.get("binding", BindingType.PERFECT.value)),
        )


def _pick(data: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    raise KeyError(keys[0])


def _coerce(enum_cls, raw: Any):
    if isinstance(raw, enum_cls):
        return raw
    text = str(raw).strip().upper().replace("-", "_").replace(" ", "_")
    try:
        return enum_cls(text)
    except ValueError:
        return str(raw)


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value
