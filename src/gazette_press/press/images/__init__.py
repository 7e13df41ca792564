"""
Module: press.images

Purpose:
    Image processing for print output. Provides the codec abstraction
    and the batch optimiser that produces CMYK print assets.

Key Classes:
    - ImageCodec: Abstract interface for image processing
    - PillowImageCodec: Standard Pillow codec
    - ImageOptimizer: Order-preserving batch optimisation

Key Functions:
    - target_dimensions(): Pixel target at a print resolution
    - fit_inside(): Aspect-preserving fit of one size inside another

Dependencies:
    - PIL: Image manipulation
    - gazette_press.core.models: ContentItem, OptimizedAsset

Used By:
    - press.service: Optimise stage
"""

from .codec import ImageCodec, PillowImageCodec, CodecError, fit_inside
from .optimizer import ImageOptimizer, target_dimensions

__all__ = [
    "ImageCodec",
    "PillowImageCodec",
    "CodecError",
    "fit_inside",
    "ImageOptimizer",
    "target_dimensions",
]
