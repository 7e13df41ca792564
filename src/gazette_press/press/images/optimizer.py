"""
Module: press.images.optimizer

Purpose:
    Transform raw content images into print-grade assets: resampled to the
    print resolution, converted to CMYK and encoded at maximum quality.

Key Classes:
    - ImageOptimizer: Order-preserving batch optimisation on a thread pool

Key Functions:
    - target_dimensions(): Pixel target for a source size at a resolution

Algorithm:
    For each item:
    1. target = round(source * resolution / 72) on both axes
    2. resize to fit inside target (aspect preserved)
    3. convert to the production colorspace
    4. encode JPEG quality 100, 4:4:4 chroma, DPI metadata = resolution

Dependencies:
    - concurrent.futures: Thread pool execution
    - press.images.codec: ImageCodec

Used By:
    - press.service: Optimise stage
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple

from gazette_press.common.units import scale_pixels
from gazette_press.core.errors import AssetEncodingError
from gazette_press.core.models import ColorSpace, ContentItem, OptimizedAsset

from ..config import OptimizerConfig
from .codec import CodecError, ImageCodec, PillowImageCodec

logger = logging.getLogger(__name__)


def target_dimensions(width: int, height: int, resolution: int) -> Tuple[int, int]:
    """
    Pixel target for a source image at ``resolution``.

    Source pixels are assumed to derive from a 72 DPI baseline.

    Example:
        >>> target_dimensions(1000, 1000, 300)
        (4167, 4167)
    """
    return scale_pixels(width, resolution), scale_pixels(height, resolution)


class ImageOptimizer:
    """
    Optimises content images for print.

    Items have no shared state, so they are processed on a thread pool.
    Results are returned in input order. The first failing item (in input
    order) fails the whole batch; nothing is retried or skipped.

    Attributes:
        codec: Image codec used for every operation
        config: Encoding and worker settings
        color_space: Production colorspace assets are converted to

    Example:
        >>> optimizer = ImageOptimizer(PillowImageCodec())
        >>> assets = optimizer.optimize(items, resolution=300)
        >>> assets[0].color_space
        <ColorSpace.CMYK: 'CMYK'>
    """

    def __init__(
        self,
        codec: Optional[ImageCodec] = None,
        config: Optional[OptimizerConfig] = None,
        *,
        color_space: ColorSpace = ColorSpace.CMYK,
    ):
        self.codec = codec or PillowImageCodec()
        self.config = config or OptimizerConfig()
        self.color_space = color_space

    def optimize(
        self,
        items: Sequence[ContentItem],
        resolution: int,
    ) -> List[OptimizedAsset]:
        """
        Optimise a batch of content items.

        Args:
            items: Content items in document order
            resolution: Print resolution in DPI

        Returns:
            One OptimizedAsset per item, same order as ``items``

        Raises:
            AssetEncodingError: If any item cannot be processed
        """
        items = list(items)
        if not items:
            return []

        workers = min(self.config.max_workers, len(items))
        if workers == 1:
            assets = [self._optimize_one(item, resolution) for item in items]
        else:
            assets = self._optimize_parallel(items, resolution, workers)

        logger.info(f"Optimized {len(assets)} assets at {resolution} DPI")
        return assets

    def _optimize_parallel(
        self,
        items: List[ContentItem],
        resolution: int,
        workers: int,
    ) -> List[OptimizedAsset]:
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="optimize") as executor:
            futures: List[Future] = [
                executor.submit(self._optimize_one, item, resolution) for item in items
            ]
            try:
                # Collect in submission order so output order matches input
                return [future.result() for future in futures]
            except AssetEncodingError:
                for future in futures:
                    future.cancel()
                raise

    def _optimize_one(self, item: ContentItem, resolution: int) -> OptimizedAsset:
        if not item.is_image:
            raise AssetEncodingError(item.id, f"unsupported media kind: {item.kind.value}")

        target_w, target_h = target_dimensions(item.width, item.height, resolution)
        cfg = self.config

        try:
            image = self.codec.decode(item.data)
            image = self.codec.resize_to_fit(image, target_w, target_h)
            image = self.codec.to_colorspace(image, self.color_space)
            data = self.codec.encode(
                image,
                cfg.image_format,
                quality=cfg.quality,
                subsampling=cfg.subsampling,
                dpi=resolution,
            )
            width, height = self.codec.size(image)
        except CodecError as e:
            raise AssetEncodingError(item.id, str(e)) from e

        logger.debug(
            f"Optimized {item.id}: {item.width}x{item.height} -> {width}x{height} "
            f"({len(data)} bytes)"
        )

        return OptimizedAsset(
            item_id=item.id,
            data=data,
            width=width,
            height=height,
            color_space=self.color_space,
            dpi=resolution,
            quality=cfg.quality,
            subsampling=cfg.subsampling,
        )
