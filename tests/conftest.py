import io
import sys
from pathlib import Path

import pytest
from PIL import Image

# Add src to sys.path so we can import gazette_press
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from gazette_press.core.models import (  # noqa: E402
    ColorSpace,
    ContentItem,
    LayoutSpec,
    MediaKind,
    PageSize,
)
from gazette_press.press.output.writer import DocumentWriter, WriterError  # noqa: E402


def encode_image(
    size=(100, 80),
    mode: str = "RGB",
    fmt: str = "PNG",
    color=None,
) -> bytes:
    """Encode a solid-colour image to bytes."""
    if color is None:
        color = {"RGB": (200, 30, 30), "RGBA": (200, 30, 30, 128), "L": 128, "CMYK": (0, 200, 200, 0)}[mode]
    img = Image.new(mode, size, color=color)
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


class RecordingWriter(DocumentWriter):
    """DocumentWriter that records every call instead of drawing."""

    def __init__(self, page_size, color_space, fail_on=None):
        self.page_size = page_size
        self.color_space = color_space
        self.calls = []
        self.finalized = False
        self._fail_on = fail_on

    def _record(self, name, *args):
        if self._fail_on == name:
            raise WriterError(f"{name} failed")
        self.calls.append((name,) + args)

    def place_image(self, data, x, y, width, height):
        self._record("place_image", data, x, y, width, height)

    def draw_line(self, x1, y1, x2, y2, style):
        self._record("draw_line", x1, y1, x2, y2, style)

    def draw_rect(self, x, y, width, height, style):
        self._record("draw_rect", x, y, width, height, style)

    def new_page(self):
        self._record("new_page")

    def finalize(self):
        if self.finalized:
            raise WriterError("document already finalized")
        self._record("finalize")
        self.finalized = True
        return b"%PDF-recorded"

    def named(self, name):
        return [call for call in self.calls if call[0] == name]


# Common test fixtures
@pytest.fixture
def valid_spec() -> LayoutSpec:
    """A4, CMYK, 300 DPI, 3mm bleed."""
    return LayoutSpec(PageSize.A4, ColorSpace.CMYK, 300, 3.0)


@pytest.fixture
def image_bytes():
    """Factory for encoded test images."""
    return encode_image


@pytest.fixture
def make_item():
    """Factory for image ContentItems with real PNG data."""
    def _create(item_id: str = "c1", size=(100, 80), kind: MediaKind = MediaKind.IMAGE, data=None):
        if data is None:
            data = encode_image(size) if kind == MediaKind.IMAGE else b"some text"
        return ContentItem(id=item_id, kind=kind, data=data, width=size[0], height=size[1])
    return _create


@pytest.fixture
def recording_factory():
    """Writer factory that keeps every writer it creates."""
    class _Factory:
        def __init__(self):
            self.writers = []
            self.fail_on = None

        def __call__(self, page_size, color_space):
            writer = RecordingWriter(page_size, color_space, fail_on=self.fail_on)
            self.writers.append(writer)
            return writer

        @property
        def last(self):
            return self.writers[-1]

    return _Factory()


@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple test image file."""
    img = Image.new("RGB", (200, 100), color="white")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path
