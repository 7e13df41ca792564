"""
Core Models Package

Immutable, validated data models that serve as the single source of truth.

All models in this package are frozen dataclasses. This ensures:
1. No accidental mutation while a generation request is in flight
2. Safe to hand to worker threads during image optimisation
3. Easier to reason about data flow between pipeline stages
"""

from .layout import (
    PageSize,
    ColorSpace,
    BindingType,
    LayoutSpec,
    PAGE_DIMENSIONS_MM,
)
from .content import MediaKind, ContentItem, OptimizedAsset
from .gazette import GazetteStatus, Gazette

__all__ = [
    "PageSize",
    "ColorSpace",
    "BindingType",
    "LayoutSpec",
    "PAGE_DIMENSIONS_MM",
    "MediaKind",
    "ContentItem",
    "OptimizedAsset",
    "GazetteStatus",
    "Gazette",
]
