"""
Gazette Press Core Package

Shared data models and the error taxonomy used by every pipeline stage.

**DESIGN RATIONALE:**

1. **Immutable Data Models**
   - Gazettes and content items are read from the store and never mutated
   - Optimised assets and placements are new instances created per request

2. **Typed Failures**
   - Every stage raises a subclass of `GazettePressError`
   - The service attaches the gazette id without changing the failure kind
"""

from .errors import (
    GazettePressError,
    GazetteNotFound,
    ContentNotFound,
    LayoutValidationError,
    UnsupportedPageSize,
    UnsupportedColorSpace,
    InsufficientResolution,
    InsufficientBleed,
    AssetEncodingError,
    CompositionError,
    FetchTimeout,
)
from .models import (
    PageSize,
    ColorSpace,
    BindingType,
    LayoutSpec,
    MediaKind,
    ContentItem,
    OptimizedAsset,
    GazetteStatus,
    Gazette,
)

__all__ = [
    # Errors
    "GazettePressError",
    "GazetteNotFound",
    "ContentNotFound",
    "LayoutValidationError",
    "UnsupportedPageSize",
    "UnsupportedColorSpace",
    "InsufficientResolution",
    "InsufficientBleed",
    "AssetEncodingError",
    "CompositionError",
    "FetchTimeout",
    # Models
    "PageSize",
    "ColorSpace",
    "BindingType",
    "LayoutSpec",
    "MediaKind",
    "ContentItem",
    "OptimizedAsset",
    "GazetteStatus",
    "Gazette",
]
