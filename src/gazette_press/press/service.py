"""
Module: press.service

Purpose:
    Orchestrate print layout generation for one gazette.
    Fetch → Validate → Optimize → Place → Compose → Verify

Key Classes:
    - LayoutService: Entry point; generate_layout(gazette_id) -> PDF bytes
    - LayoutResult: PDF bytes plus diagnostics

Every failure leaves the service as a GazettePressError subclass with
the gazette id attached. Nothing is retried and no partial document is
returned.

Dependencies:
    - press.loading: Store ports
    - press.validation: LayoutValidator
    - press.images: ImageOptimizer
    - press.layout: PageGeometry, ContentPlacer
    - press.output: DocumentComposer, inspection

Used By:
    - cli: render and images commands
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, TypeVar

from gazette_press.core.errors import (
    CompositionError,
    ContentNotFound,
    FetchTimeout,
    GazetteNotFound,
    GazettePressError,
)
from gazette_press.core.models import ContentItem, Gazette

from .config import PressConfig
from .images import ImageCodec, ImageOptimizer
from .layout import ContentPlacer, PageGeometry, PlacementRect
from .loading import ContentSource, GazetteStore
from .output import (
    DocumentComposer,
    DocumentReport,
    WriterFactory,
    inspect_pdf,
    reportlab_writer_factory,
    verify_report,
)
from .timing import StageTimings, timed_stage
from .validation import LayoutValidator

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class LayoutResult:
    """
    Complete generation result (immutable).

    Attributes:
        gazette_id: Gazette the document was generated for
        pdf: Print-ready document bytes
        page_count: Pages in the document
        asset_count: Images placed
        timings: Duration of each stage
        warnings: Non-fatal issues (e.g. skipped text items)
        report: Inspection report when output verification ran

    Example:
        >>> result = service.generate_layout_result("g-2024-05")
        >>> print(f"{result.page_count} pages, {result.asset_count} images")
    """
    gazette_id: str
    pdf: bytes
    page_count: int
    asset_count: int
    timings: StageTimings
    warnings: tuple[str, ...] = ()
    report: Optional[DocumentReport] = None


class LayoutService:
    """
    Generates print-ready documents for gazettes.

    Holds no per-request state, so one instance can serve concurrent
    requests as long as the store does.

    Attributes:
        store: Gazette lookup
        content_source: Content item lookup
        config: Pipeline configuration

    Example:
        >>> store = DirectoryGazetteStore(Path("exports"))
        >>> service = LayoutService(store, store)
        >>> pdf = service.generate_layout("g-2024-05", timeout=5.0)
    """

    def __init__(
        self,
        store: GazetteStore,
        content_source: Optional[ContentSource] = None,
        codec: Optional[ImageCodec] = None,
        writer_factory: Optional[WriterFactory] = None,
        config: Optional[PressConfig] = None,
    ):
        if content_source is None:
            if not isinstance(store, ContentSource):
                raise TypeError("content_source is required when the store cannot serve content")
            content_source = store
        self.store = store
        self.content_source = content_source
        self.config = config or PressConfig()
        self.validator = LayoutValidator(self.config.constraints)
        self.optimizer = ImageOptimizer(
            codec,
            self.config.optimizer,
            color_space=self.config.constraints.color_space,
        )
        self._writer_factory = writer_factory

    def generate_layout(self, gazette_id: str, timeout: Optional[float] = None) -> bytes:
        """
        Generate the print-ready document for a gazette.

        Args:
            gazette_id: Gazette to render
            timeout: Seconds allowed for store reads; defaults to
                config.fetch_timeout (None = no limit)

        Returns:
            PDF bytes

        Raises:
            GazetteNotFound: No gazette with this id
            ContentNotFound: A referenced content item is missing
            FetchTimeout: Store reads exceeded the timeout
            LayoutValidationError: Layout fails print constraints
            AssetEncodingError: An image could not be optimised
            CompositionError: The document could not be assembled
        """
        return self.generate_layout_result(gazette_id, timeout).pdf

    def generate_layout_result(
        self,
        gazette_id: str,
        timeout: Optional[float] = None,
    ) -> LayoutResult:
        """Same as generate_layout() but returns diagnostics alongside the bytes."""
        if timeout is None:
            timeout = self.config.fetch_timeout
        start = time.perf_counter()
        logger.info(f"Generating layout for gazette {gazette_id}")

        try:
            result = self._run(gazette_id, timeout)
        except GazettePressError as e:
            e.with_gazette(gazette_id)
            logger.error(f"Layout generation failed: {e}")
            raise

        elapsed = time.perf_counter() - start
        slowest, slowest_time = result.timings.slowest()
        logger.info(
            f"Generated {result.page_count} page(s) with {result.asset_count} image(s) "
            f"for gazette {gazette_id} in {elapsed:.2f}s (slowest: {slowest} {slowest_time:.2f}s)"
        )
        logger.debug(result.timings.summary())
        return result

    # ─────────────────────────────────────────────────────────────────────────
    # Pipeline
    # ─────────────────────────────────────────────────────────────────────────

    def _run(self, gazette_id: str, timeout: Optional[float]) -> LayoutResult:
        timings = StageTimings()
        warnings: List[str] = []
        deadline = None if timeout is None else time.monotonic() + timeout

        # 1. Fetch gazette
        with timed_stage(timings, "fetch"):
            gazette = _call_with_deadline(
                lambda: self.store.find_by_id(gazette_id), deadline, timeout, "gazette"
            )
        if gazette is None:
            raise GazetteNotFound(gazette_id)

        # 2. Validate before touching any content
        spec = gazette.layout
        with timed_stage(timings, "validate"):
            self.validator.validate(spec)

        # 3. Fetch content, keeping images only
        with timed_stage(timings, "fetch"):
            items = _call_with_deadline(
                lambda: self._fetch_content(gazette), deadline, timeout, "content"
            )
        images = []
        for item in items:
            if item.is_image:
                images.append(item)
            else:
                message = f"Skipped {item.kind.value} item {item.id}: only images are placed"
                logger.warning(message)
                warnings.append(message)

        # 4. Optimize
        with timed_stage(timings, "optimize"):
            assets = self.optimizer.optimize(images, spec.resolution)

        # 5. Place
        geometry = PageGeometry.from_spec(spec)
        with timed_stage(timings, "place"):
            try:
                placer = ContentPlacer(geometry, self.config.placement)
            except ValueError as e:
                raise CompositionError(str(e)) from e
            placements = placer.place(images)
        page_count = _page_count(placements)

        # 6. Compose
        composer = DocumentComposer(
            self._writer_factory or self._default_writer_factory(gazette),
            self.config.marks,
            color_space=self.config.constraints.color_space,
        )
        with timed_stage(timings, "compose"):
            pdf = composer.compose(spec, assets, placements)

        # 7. Verify
        report = None
        if self.config.verify_output:
            with timed_stage(timings, "verify"):
                report = inspect_pdf(pdf)
                verify_report(report, geometry, expected_pages=page_count)

        return LayoutResult(
            gazette_id=gazette.id,
            pdf=pdf,
            page_count=page_count,
            asset_count=len(assets),
            timings=timings,
            warnings=tuple(warnings),
            report=report,
        )

    def _fetch_content(self, gazette: Gazette) -> List[ContentItem]:
        items = []
        for content_id, item in self.content_source.get_many(gazette.content_ids):
            if item is None:
                raise ContentNotFound(content_id)
            items.append(item)
        logger.debug(
            f"Fetched {gazette.content_count} content item(s) "
            f"for gazette {gazette.id}"
        )
        return items

    def _default_writer_factory(self, gazette: Gazette) -> WriterFactory:
        constraints = self.config.constraints
        return reportlab_writer_factory(
            title=f"Gazette {gazette.id}",
            subject=(
                f"Print-ready gazette, {constraints.color_space.value} "
                f"({constraints.color_profile})"
            ),
        )


def _call_with_deadline(
    fn: Callable[[], T],
    deadline: Optional[float],
    timeout: Optional[float],
    what: str,
) -> T:
    """
    Run a store read, bounded by the request deadline.

    The read runs on a daemon worker thread. On expiry the worker is
    abandoned and FetchTimeout is raised; a hung read never blocks
    interpreter exit.
    """
    if deadline is None:
        return fn()

    remaining = deadline - time.monotonic()
    if remaining <= 0:
        raise FetchTimeout(timeout, what)

    outcome = {}

    def _target() -> None:
        try:
            outcome["value"] = fn()
        except Exception as e:
            outcome["error"] = e

    worker = threading.Thread(target=_target, name=f"fetch-{what}", daemon=True)
    worker.start()
    worker.join(remaining)
    if worker.is_alive():
        raise FetchTimeout(timeout, what)
    if "error" in outcome:
        raise outcome["error"]
    return outcome["value"]


def _page_count(placements: List[PlacementRect]) -> int:
    """Pages the composer emits: one per placement page, at least one."""
    if not placements:
        return 1
    return placements[-1].page + 1
