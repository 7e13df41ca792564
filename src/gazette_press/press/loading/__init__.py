"""
Module: press.loading

Purpose:
    Store ports and adapters for gazettes and content items.

Key Classes:
    - GazetteStore, ContentSource: Abstract ports
    - InMemoryGazetteStore: Dict-backed adapter
    - DirectoryGazetteStore: Reads exported gazette directories
    - StoreError: Malformed store data

Used By:
    - press.service: Fetch stage
    - cli: render command
"""

from .store import (
    ContentSource,
    DirectoryGazetteStore,
    GazetteStore,
    InMemoryGazetteStore,
    StoreError,
    GAZETTE_FILENAME,
)

__all__ = [
    "GazetteStore",
    "ContentSource",
    "InMemoryGazetteStore",
    "DirectoryGazetteStore",
    "StoreError",
    "GAZETTE_FILENAME",
]
