"""
Module: content

Purpose:
    Content items fetched for a gazette and the print-grade assets derived
    from them.

Key Classes:
    - MediaKind: Kind of content (image or text)
    - ContentItem: Raw content as stored (immutable)
    - OptimizedAsset: Processed image ready for placement in the PDF

Dependencies:
    - dataclasses (std)

Used By:
    - press.images.optimizer: Produces OptimizedAsset from ContentItem
    - press.layout.placer: Reads natural dimensions for aspect ratio
    - press.output.composer: Draws OptimizedAsset data
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .layout import ColorSpace


class MediaKind(str, Enum):
    IMAGE = "image"
    TEXT = "text"


@dataclass(frozen=True)
class ContentItem:
    """
    One piece of gazette content as fetched from the store.

    Attributes:
        id: Content identifier
        kind: Media kind
        data: Raw encoded buffer (image file bytes for IMAGE items)
        width: Natural width in pixels
        height: Natural height in pixels

    Invariants:
        - width > 0 and height > 0
    """

    id: str
    kind: MediaKind
    data: bytes
    width: int
    height: int

    def __post_init__(self) -> None:
        """Validate dimensions on construction."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Content {self.id} must have positive dimensions: "
                f"{self.width}x{self.height}"
            )

    @property
    def is_image(self) -> bool:
        return self.kind == MediaKind.IMAGE

    def __repr__(self) -> str:
        # Keep raw buffers out of logs
        return (
            f"ContentItem(id={self.id!r}, kind={self.kind.value}, "
            f"size={self.width}x{self.height}, bytes={len(self.data)})"
        )


@dataclass(frozen=True)
class OptimizedAsset:
    """
    Print-grade image derived from a ContentItem (immutable).

    Attributes:
        item_id: Identifier of the source ContentItem
        data: Encoded image buffer
        width: Pixel width after resizing
        height: Pixel height after resizing
        color_space: Colorspace of the encoded pixels
        dpi: Resolution written into the image metadata
        quality: Encoder quality factor
        subsampling: Chroma subsampling mode, e.g. "4:4:4"
    """

    item_id: str
    data: bytes
    width: int
    height: int
    color_space: ColorSpace
    dpi: int
    quality: int
    subsampling: str

    def __repr__(self) -> str:
        return (
            f"OptimizedAsset(item_id={self.item_id!r}, size={self.width}x{self.height}, "
            f"color_space={self.color_space.value}, dpi={self.dpi}, bytes={len(self.data)})"
        )
