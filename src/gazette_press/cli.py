"""
Module: cli

Purpose:
    Command-line entry point (``gazette-press``).

Commands:
    render <store-root> <gazette-id> -o out.pdf
        Generate the print document for a gazette exported to disk.
    images <image>... -o out.pdf [--bleed MM] [--resolution DPI]
        Lay out loose image files as an ad-hoc gazette.

Exit codes:
    0 on success, 1 when generation fails.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from PIL import Image, UnidentifiedImageError

from gazette_press import __version__
from gazette_press.core.errors import GazettePressError
from gazette_press.core.models import (
    ColorSpace,
    ContentItem,
    Gazette,
    LayoutSpec,
    MediaKind,
    PageSize,
)
from gazette_press.press import (
    DirectoryGazetteStore,
    InMemoryGazetteStore,
    LayoutResult,
    LayoutService,
    PressConfig,
)
from gazette_press.press.config import (
    DEFAULT_MIN_BLEED_MM,
    DEFAULT_MIN_RESOLUTION,
    MarksConfig,
    OptimizerConfig,
)

logger = logging.getLogger("gazette_press")

ADHOC_GAZETTE_ID = "adhoc"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gazette-press",
        description="Generate print-ready CMYK PDFs for family gazettes",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--no-marks", action="store_true", help="Omit crop marks and colour bars")
    parser.add_argument("--workers", type=int, default=4, help="Image optimisation threads")
    parser.add_argument("--timings", action="store_true", help="Print stage timings")

    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a gazette from an export directory")
    render.add_argument("store_root", type=Path, help="Directory holding <gazette-id>/gazette.json")
    render.add_argument("gazette_id", help="Gazette to render")
    render.add_argument("-o", "--output", type=Path, help="Output PDF (default: <gazette-id>.pdf)")
    render.add_argument("--timeout", type=float, default=None, help="Seconds allowed for store reads")

    images = sub.add_parser("images", help="Lay out image files as an ad-hoc gazette")
    images.add_argument("images", nargs="+", type=Path, help="Image files in page order")
    images.add_argument("-o", "--output", type=Path, required=True, help="Output PDF")
    images.add_argument("--bleed", type=float, default=DEFAULT_MIN_BLEED_MM, help="Bleed in mm")
    images.add_argument(
        "--resolution", type=int, default=DEFAULT_MIN_RESOLUTION, help="Print resolution in DPI"
    )

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    config = PressConfig(
        optimizer=OptimizerConfig(max_workers=max(1, args.workers)),
        marks=MarksConfig(crop_marks=not args.no_marks, color_bars=not args.no_marks),
    )

    try:
        if args.command == "render":
            result = _render(args, config)
            output = args.output or Path(f"{args.gazette_id}.pdf")
        else:
            result = _images(args, config)
            output = args.output
    except GazettePressError as e:
        logger.error(f"Error: {e}")
        return 1

    try:
        output.write_bytes(result.pdf)
    except OSError as e:
        logger.error(f"Error: cannot write {output}: {e}")
        return 1

    _print_summary(result, output)
    if args.timings:
        print(result.timings.summary())
    return 0


def _render(args: argparse.Namespace, config: PressConfig) -> LayoutResult:
    store = DirectoryGazetteStore(args.store_root)
    service = LayoutService(store, store, config=config)
    return service.generate_layout_result(args.gazette_id, timeout=args.timeout)


def _images(args: argparse.Namespace, config: PressConfig) -> LayoutResult:
    items = _load_images(args.images)
    spec = LayoutSpec(
        page_size=PageSize.A4,
        color_space=ColorSpace.CMYK,
        resolution=args.resolution,
        bleed=args.bleed,
    )
    gazette = Gazette(ADHOC_GAZETTE_ID, [item.id for item in items], spec)
    store = InMemoryGazetteStore([gazette], items)
    return LayoutService(store, config=config).generate_layout_result(gazette.id)


def _load_images(paths: Sequence[Path]) -> List[ContentItem]:
    """
    Read image files into content items.

    Raises:
        GazettePressError: If a file is missing or not an image
    """
    items = []
    for index, path in enumerate(paths, start=1):
        try:
            data = path.read_bytes()
            with Image.open(path) as img:
                width, height = img.size
        except (OSError, UnidentifiedImageError) as e:
            raise GazettePressError(f"Cannot read image {path}: {e}") from e
        items.append(ContentItem(
            id=f"{index:03d}-{path.stem}",
            kind=MediaKind.IMAGE,
            data=data,
            width=width,
            height=height,
        ))
    return items


def _print_summary(result: LayoutResult, output: Path) -> None:
    print(f"Wrote {output} ({len(result.pdf):,} bytes)")
    print(f"  pages: {result.page_count}, images: {result.asset_count}")
    for warning in result.warnings:
        print(f"  warning: {warning}")


if __name__ == "__main__":
    sys.exit(main())
