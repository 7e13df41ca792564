"""
Module: press.images.codec

Purpose:
    Abstract interface over image decoding, resizing, colorspace conversion
    and encoding, plus the Pillow-backed implementation used in production.

Key Classes:
    - ImageCodec: Abstract base class for codec operations
    - PillowImageCodec: Standard Pillow implementation
    - CodecError: Single failure type reported by any codec

Dependencies:
    - PIL: Image manipulation
    - gazette_press.core.models: ColorSpace

Used By:
    - press.images.optimizer: Per-item optimisation
"""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from typing import Any, Tuple

from PIL import Image

from gazette_press.common.units import round_half_up
from gazette_press.core.models import ColorSpace

# Pillow JPEG subsampling codes
_SUBSAMPLING = {
    "4:4:4": 0,
    "4:2:2": 1,
    "4:2:0": 2,
}

_PIL_MODES = {
    ColorSpace.CMYK: "CMYK",
    ColorSpace.RGB: "RGB",
    ColorSpace.GRAY: "L",
}


class CodecError(Exception):
    """Image could not be decoded, transformed or encoded."""
    pass


class ImageCodec(ABC):
    """
    Abstract interface for image processing.

    Images are opaque handles owned by the codec; callers only pass them
    back into the same codec.
    """

    @abstractmethod
    def decode(self, data: bytes) -> Any:
        """
        Decode an encoded image buffer.

        Raises:
            CodecError: If the buffer is not a readable image
        """

    @abstractmethod
    def size(self, image: Any) -> Tuple[int, int]:
        """Return (width, height) in pixels."""

    @abstractmethod
    def resize_to_fit(self, image: Any, width: int, height: int) -> Any:
        """
        Resize preserving aspect ratio so the result fits inside width x height.

        Raises:
            CodecError: If resampling fails
        """

    @abstractmethod
    def to_colorspace(self, image: Any, color_space: ColorSpace) -> Any:
        """
        Convert pixel data to ``color_space``.

        Raises:
            CodecError: If the conversion is not possible
        """

    @abstractmethod
    def encode(
        self,
        image: Any,
        image_format: str,
        *,
        quality: int,
        subsampling: str,
        dpi: int,
    ) -> bytes:
        """
        Encode the image.

        Raises:
            CodecError: If encoding fails
        """


class PillowImageCodec(ImageCodec):
    """
    Codec backed by Pillow.

    Example:
        >>> codec = PillowImageCodec()
        >>> img = codec.decode(png_bytes)
        >>> img = codec.resize_to_fit(img, 4167, 4167)
        >>> jpeg = codec.encode(codec.to_colorspace(img, ColorSpace.CMYK), "JPEG",
        ...                     quality=100, subsampling="4:4:4", dpi=300)
    """

    def decode(self, data: bytes) -> Image.Image:
        try:
            image = Image.open(io.BytesIO(data))
            image.load()
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            raise CodecError(f"cannot decode image: {e}") from e
        return image

    def size(self, image: Image.Image) -> Tuple[int, int]:
        return image.size

    def resize_to_fit(self, image: Image.Image, width: int, height: int) -> Image.Image:
        if width <= 0 or height <= 0:
            raise CodecError(f"invalid target size {width}x{height}")

        new_size = fit_inside(image.size, (width, height))
        if new_size == image.size:
            return image.copy()

        try:
            return image.resize(new_size, Image.Resampling.LANCZOS)
        except (OSError, ValueError) as e:
            raise CodecError(f"cannot resize to {new_size}: {e}") from e

    def to_colorspace(self, image: Image.Image, color_space: ColorSpace) -> Image.Image:
        mode = _PIL_MODES[color_space]
        if image.mode == mode:
            return image

        try:
            if _has_alpha(image):
                image = _flatten_on_white(image)
            if mode == "CMYK" and image.mode != "RGB":
                image = image.convert("RGB")
            return image.convert(mode)
        except (OSError, ValueError) as e:
            raise CodecError(f"cannot convert {image.mode} to {mode}: {e}") from e

    def encode(
        self,
        image: Image.Image,
        image_format: str,
        *,
        quality: int,
        subsampling: str,
        dpi: int,
    ) -> bytes:
        fmt = image_format.upper()
        params: dict = {"dpi": (dpi, dpi)}
        if fmt in ("JPEG", "JPG"):
            fmt = "JPEG"
            if subsampling not in _SUBSAMPLING:
                raise CodecError(f"unsupported chroma subsampling: {subsampling}")
            params["quality"] = quality
            params["subsampling"] = _SUBSAMPLING[subsampling]

        buf = io.BytesIO()
        try:
            image.save(buf, format=fmt, **params)
        except (OSError, ValueError, KeyError) as e:
            raise CodecError(f"cannot encode {fmt}: {e}") from e
        return buf.getvalue()


def fit_inside(size: Tuple[int, int], box: Tuple[int, int]) -> Tuple[int, int]:
    """
    Largest size with the same aspect ratio as ``size`` that fits in ``box``.

    Scales up as well as down.

    Example:
        >>> fit_inside((1000, 500), (4167, 4167))
        (4167, 2084)
    """
    width, height = size
    box_w, box_h = box
    scale = min(box_w / width, box_h / height)
    new_w = min(box_w, max(1, round_half_up(width * scale)))
    new_h = min(box_h, max(1, round_half_up(height * scale)))
    return new_w, new_h


def _has_alpha(image: Image.Image) -> bool:
    return image.mode in ("RGBA", "LA", "PA") or (
        image.mode == "P" and "transparency" in image.info
    )


def _flatten_on_white(image: Image.Image) -> Image.Image:
    rgba = image.convert("RGBA")
    background = Image.new("RGB", rgba.size, (255, 255, 255))
    background.paste(rgba, mask=rgba.getchannel("A"))
    return background
