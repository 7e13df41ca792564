"""Print-production validation of layout specifications."""

from .validator import LayoutValidator

__all__ = ["LayoutValidator"]
