"""
Unit tests for ImageOptimizer.

Most tests use a fake codec whose "images" are plain dicts, so the
arithmetic and ordering can be checked without real pixel work.
"""

import io
import threading
import time

import pytest
from PIL import Image

from gazette_press.core.errors import AssetEncodingError
from gazette_press.core.models import ColorSpace, ContentItem, MediaKind
from gazette_press.press.config import OptimizerConfig
from gazette_press.press.images import (
    CodecError,
    ImageCodec,
    ImageOptimizer,
    PillowImageCodec,
    fit_inside,
    target_dimensions,
)


class FakeCodec(ImageCodec):
    """
    Codec over dict "images".

    Item data is ``b"<w>x<h>"`` optionally followed by ``b";delay=<s>"``;
    data starting with ``b"bad"`` fails to decode.
    """

    def __init__(self):
        self.encode_calls = []
        self.threads = set()
        self._lock = threading.Lock()

    def decode(self, data):
        with self._lock:
            self.threads.add(threading.current_thread().name)
        size_part, _, delay_part = data.decode().partition(";delay=")
        if delay_part:
            time.sleep(float(delay_part))
        if size_part == "bad":
            raise CodecError("cannot decode image: bad header")
        width, height = (int(v) for v in size_part.split("x"))
        return {"size": (width, height), "mode": "RGB"}

    def size(self, image):
        return image["size"]

    def resize_to_fit(self, image, width, height):
        return dict(image, size=fit_inside(image["size"], (width, height)))

    def to_colorspace(self, image, color_space):
        return dict(image, mode=color_space.value)

    def encode(self, image, image_format, *, quality, subsampling, dpi):
        with self._lock:
            self.encode_calls.append((image_format, quality, subsampling, dpi, image["mode"]))
        w, h = image["size"]
        return f"{image_format}:{w}x{h}:{image['mode']}".encode()


def fake_item(item_id, width, height, delay=None, bad=False):
    data = b"bad" if bad else f"{width}x{height}".encode()
    if delay is not None:
        data += f";delay={delay}".encode()
    return ContentItem(item_id, MediaKind.IMAGE, data, width, height)


class TestTargetDimensions:
    def test_1000_square_at_300_dpi(self):
        assert target_dimensions(1000, 1000, 300) == (4167, 4167)

    def test_scales_each_axis(self):
        assert target_dimensions(72, 144, 300) == (300, 600)


class TestOptimize:
    def test_when_1000_square_at_300_then_4167_square(self):
        codec = FakeCodec()
        optimizer = ImageOptimizer(codec)

        assets = optimizer.optimize([fake_item("c1", 1000, 1000)], resolution=300)

        assert len(assets) == 1
        asset = assets[0]
        assert asset.item_id == "c1"
        assert (asset.width, asset.height) == (4167, 4167)
        assert asset.color_space == ColorSpace.CMYK
        assert asset.dpi == 300
        assert asset.quality == 100
        assert asset.subsampling == "4:4:4"
        assert codec.encode_calls == [("JPEG", 100, "4:4:4", 300, "CMYK")]

    def test_aspect_preserved_within_target(self):
        assets = ImageOptimizer(FakeCodec()).optimize([fake_item("c1", 1000, 500)], 300)
        assert (assets[0].width, assets[0].height) == (4167, 2084)

    def test_empty_batch_returns_empty_list(self):
        assert ImageOptimizer(FakeCodec()).optimize([], 300) == []

    def test_when_workers_finish_out_of_order_then_input_order_kept(self):
        codec = FakeCodec()
        optimizer = ImageOptimizer(codec, OptimizerConfig(max_workers=4))
        # Earlier items sleep longer, so they complete last
        items = [fake_item(f"c{i}", 10 + i, 10, delay=(5 - i) * 0.02) for i in range(6)]

        assets = optimizer.optimize(items, 300)

        assert [a.item_id for a in assets] == [f"c{i}" for i in range(6)]
        assert any(name.startswith("optimize") for name in codec.threads)

    def test_single_worker_runs_inline(self):
        codec = FakeCodec()
        optimizer = ImageOptimizer(codec, OptimizerConfig(max_workers=1))

        optimizer.optimize([fake_item("c1", 10, 10), fake_item("c2", 10, 10)], 300)

        assert codec.threads == {threading.current_thread().name}


class TestFailures:
    @pytest.mark.parametrize("workers", [1, 4])
    def test_when_one_item_fails_then_batch_fails(self, workers):
        optimizer = ImageOptimizer(FakeCodec(), OptimizerConfig(max_workers=workers))
        items = [fake_item("c1", 10, 10), fake_item("c2", 10, 10, bad=True), fake_item("c3", 10, 10)]

        with pytest.raises(AssetEncodingError) as exc_info:
            optimizer.optimize(items, 300)

        assert exc_info.value.item_id == "c2"
        assert isinstance(exc_info.value.__cause__, CodecError)

    def test_first_failure_in_input_order_is_reported(self):
        optimizer = ImageOptimizer(FakeCodec(), OptimizerConfig(max_workers=4))
        items = [
            fake_item("c1", 10, 10),
            ContentItem("c2", MediaKind.IMAGE, b"bad;delay=0.05", 10, 10),
            fake_item("c3", 10, 10, bad=True),
        ]

        with pytest.raises(AssetEncodingError) as exc_info:
            optimizer.optimize(items, 300)

        assert exc_info.value.item_id == "c2"

    def test_text_item_cannot_be_optimized(self):
        item = ContentItem("t1", MediaKind.TEXT, b"hello", 1, 1)
        with pytest.raises(AssetEncodingError, match="unsupported media kind"):
            ImageOptimizer(FakeCodec()).optimize([item], 300)


class TestWithPillow:
    def test_real_png_becomes_cmyk_jpeg(self, make_item):
        optimizer = ImageOptimizer(PillowImageCodec(), OptimizerConfig(max_workers=2))

        assets = optimizer.optimize([make_item("c1", (100, 80)), make_item("c2", (80, 100))], 300)

        assert [(a.width, a.height) for a in assets] == [(416, 333), (333, 416)]
        for asset in assets:
            with Image.open(io.BytesIO(asset.data)) as img:
                assert img.format == "JPEG"
                assert img.mode == "CMYK"
                assert img.size == (asset.width, asset.height)

    def test_undecodable_data_reports_item(self, make_item):
        item = make_item("broken", (10, 10), data=b"\x89PNG not really")
        with pytest.raises(AssetEncodingError) as exc_info:
            ImageOptimizer(PillowImageCodec()).optimize([item], 300)
        assert exc_info.value.item_id == "broken"

    def test_rerunning_same_items_gives_identical_targets(self, make_item):
        items = [make_item("c1", (100, 80)), make_item("c2", (333, 101)), make_item("c3", (7, 7))]
        optimizer = ImageOptimizer(PillowImageCodec(), OptimizerConfig(max_workers=3))

        first = optimizer.optimize(items, 300)
        second = optimizer.optimize(items, 300)

        def summary(assets):
            return [(a.item_id, a.width, a.height, a.color_space, a.dpi) for a in assets]

        assert summary(first) == summary(second)
        assert [(a.width, a.height) for a in first] == [(416, 333), (1388, 421), (29, 29)]
        assert all(a.color_space == ColorSpace.CMYK for a in first)
