"""
Gazette Press Pipeline

Turns a stored gazette into a print-ready CMYK PDF with bleed and
printer's marks.

Pipeline:
    Fetch → Validate → Optimize → Place → Compose → Verify

Subpackages:
    - loading: Store ports and adapters
    - validation: Print constraint checks
    - images: Image codec and optimiser
    - layout: Page geometry and placement
    - output: Document writer, marks, composer, inspection

Example:
    >>> from gazette_press.press import LayoutService, DirectoryGazetteStore
    >>> store = DirectoryGazetteStore(Path("exports"))
    >>> pdf = LayoutService(store).generate_layout("g-2024-05")
"""

from .config import (
    MarksConfig,
    OptimizerConfig,
    PlacementConfig,
    PressConfig,
    PrintConstraints,
)
from .images import ImageCodec, ImageOptimizer, PillowImageCodec
from .layout import ContentPlacer, PageGeometry, PlacementRect
from .loading import (
    ContentSource,
    DirectoryGazetteStore,
    GazetteStore,
    InMemoryGazetteStore,
    StoreError,
)
from .output import DocumentComposer, DocumentWriter, ReportLabDocumentWriter
from .service import LayoutResult, LayoutService
from .timing import StageTimings
from .validation import LayoutValidator

__all__ = [
    # Config
    "PressConfig",
    "PrintConstraints",
    "OptimizerConfig",
    "PlacementConfig",
    "MarksConfig",
    # Stages
    "LayoutValidator",
    "ImageCodec",
    "PillowImageCodec",
    "ImageOptimizer",
    "PageGeometry",
    "ContentPlacer",
    "PlacementRect",
    "DocumentWriter",
    "ReportLabDocumentWriter",
    "DocumentComposer",
    # Stores
    "GazetteStore",
    "ContentSource",
    "InMemoryGazetteStore",
    "DirectoryGazetteStore",
    "StoreError",
    # Service
    "LayoutService",
    "LayoutResult",
    "StageTimings",
]
