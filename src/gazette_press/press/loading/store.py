"""
Module: press.loading.store

Purpose:
    Read-only access to gazettes and their content items.

    Two ports (GazetteStore, ContentSource) and two adapters:
    an in-memory store for tests and embedding, and a directory store
    that reads gazettes exported to disk.

Key Classes:
    - GazetteStore: find_by_id(gazette_id) -> Gazette | None
    - ContentSource: get(content_id) -> ContentItem | None
    - InMemoryGazetteStore: Dict-backed store implementing both
    - DirectoryGazetteStore: <root>/<gazette_id>/gazette.json + image files
    - StoreError: Malformed store data

Directory layout:
    <root>/
        <gazette_id>/
            gazette.json
            photo-1.jpg
            ...

    gazette.json:
        {
          "id": "g-2024-05",
          "layout": {"page_size": "A4", "color_space": "CMYK",
                     "resolution": 300, "bleed": 3},
          "content": [
            {"id": "c1", "kind": "image", "file": "photo-1.jpg"},
            {"id": "c2", "kind": "text", "text": "Grandma's birthday"}
          ]
        }

    Image width/height may be given in the entry; otherwise they are
    read from the image header with Pillow.

Dependencies:
    - PIL: Image header reading
    - json (std)

Used By:
    - press.service: Fetch stage
    - cli: render command
"""

from __future__ import annotations

import json
import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from PIL import Image, UnidentifiedImageError

from gazette_press.core.errors import GazettePressError
from gazette_press.core.models import ContentItem, Gazette, MediaKind

logger = logging.getLogger(__name__)

GAZETTE_FILENAME = "gazette.json"


class StoreError(GazettePressError):
    """Store data exists but cannot be read."""
    pass


class GazetteStore(ABC):
    """Read access to gazette records."""

    @abstractmethod
    def find_by_id(self, gazette_id: str) -> Optional[Gazette]:
        """Return the gazette, or None if no record exists."""


class ContentSource(ABC):
    """Read access to content items."""

    @abstractmethod
    def get(self, content_id: str) -> Optional[ContentItem]:
        """Return the content item, or None if no record exists."""

    def get_many(self, content_ids: Iterable[str]) -> List[Tuple[str, Optional[ContentItem]]]:
        """Look up several ids, preserving order."""
        return [(cid, self.get(cid)) for cid in content_ids]


class InMemoryGazetteStore(GazetteStore, ContentSource):
    """
    Dict-backed store.

    Example:
        >>> store = InMemoryGazetteStore()
        >>> store.add_item(item)
        >>> store.add_gazette(gazette)
        >>> store.find_by_id(gazette.id) is gazette
        True
    """

    def __init__(
        self,
        gazettes: Iterable[Gazette] = (),
        items: Iterable[ContentItem] = (),
    ):
        self._gazettes: Dict[str, Gazette] = {}
        self._items: Dict[str, ContentItem] = {}
        for gazette in gazettes:
            self.add_gazette(gazette)
        for item in items:
            self.add_item(item)

    def add_gazette(self, gazette: Gazette) -> None:
        self._gazettes[gazette.id] = gazette

    def add_item(self, item: ContentItem) -> None:
        self._items[item.id] = item

    def find_by_id(self, gazette_id: str) -> Optional[Gazette]:
        return self._gazettes.get(gazette_id)

    def get(self, content_id: str) -> Optional[ContentItem]:
        return self._items.get(content_id)

    def __len__(self) -> int:
        return len(self._gazettes)


class DirectoryGazetteStore(GazetteStore, ContentSource):
    """
    Store over a directory of exported gazettes.

    Content items are indexed when their gazette is loaded. A lookup for
    an id not yet indexed loads every gazette under the root once.
    """

    def __init__(self, root: Path):
        self.root = Path(root)
        self._items: Dict[str, ContentItem] = {}
        self._loaded: Dict[str, Gazette] = {}
        self._scanned = False
        self._lock = threading.Lock()

    def find_by_id(self, gazette_id: str) -> Optional[Gazette]:
        """
        Load a gazette and index its content.

        Raises:
            StoreError: If gazette.json or a referenced file is malformed
        """
        with self._lock:
            return self._load(gazette_id)

    def get(self, content_id: str) -> Optional[ContentItem]:
        with self._lock:
            item = self._items.get(content_id)
            if item is None and not self._scanned:
                self._scan()
                item = self._items.get(content_id)
            return item

    def gazette_ids(self) -> List[str]:
        """Ids of every gazette directory under the root, sorted."""
        if not self.root.is_dir():
            return []
        return sorted(
            p.name for p in self.root.iterdir()
            if (p / GAZETTE_FILENAME).is_file()
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Loading
    # ─────────────────────────────────────────────────────────────────────────

    def _scan(self) -> None:
        for gazette_id in self.gazette_ids():
            self._load(gazette_id)
        self._scanned = True

    def _load(self, gazette_id: str) -> Optional[Gazette]:
        if gazette_id in self._loaded:
            return self._loaded[gazette_id]

        gazette_dir = self.root / gazette_id
        path = gazette_dir / GAZETTE_FILENAME
        if not path.is_file():
            logger.debug(f"No gazette record at {path}")
            return None

        try:
            record = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Cannot read {path}: {e}") from e
        if not isinstance(record, dict):
            raise StoreError(f"{path} must contain a JSON object")

        entries = record.get("content", [])
        items = [self._load_item(gazette_dir, entry) for entry in entries]

        data = dict(record)
        data.setdefault("id", gazette_id)
        if "content_ids" not in data and "contentIds" not in data:
            data["content_ids"] = [item.id for item in items]

        try:
            gazette = Gazette.from_dict(data)
        except (KeyError, ValueError, TypeError) as e:
            raise StoreError(f"Malformed gazette record {path}: {e}") from e

        for item in items:
            self._items[item.id] = item
        self._loaded[gazette_id] = gazette
        logger.info(f"Loaded gazette {gazette.id} with {len(items)} content item(s)")
        return gazette

    def _load_item(self, gazette_dir: Path, entry: Dict[str, Any]) -> ContentItem:
        try:
            content_id = str(entry["id"])
            kind = MediaKind(entry.get("kind", MediaKind.IMAGE.value))
        except (KeyError, ValueError, TypeError) as e:
            raise StoreError(f"Malformed content entry in {gazette_dir.name}: {e}") from e

        if kind == MediaKind.TEXT:
            text = str(entry.get("text", ""))
            return _build_item(
                content_id, kind, text.encode("utf-8"),
                entry.get("width", 1), entry.get("height", 1),
            )

        file_name = entry.get("file")
        if not file_name:
            raise StoreError(f"Image content {content_id} has no file")
        image_path = gazette_dir / file_name
        try:
            data = image_path.read_bytes()
        except OSError as e:
            raise StoreError(f"Cannot read image for {content_id}: {e}") from e

        width, height = entry.get("width"), entry.get("height")
        if width is None or height is None:
            width, height = _image_size(image_path)
        return _build_item(content_id, kind, data, width, height)


def _build_item(content_id: str, kind: MediaKind, data: bytes, width: Any, height: Any) -> ContentItem:
    try:
        return ContentItem(id=content_id, kind=kind, data=data, width=int(width), height=int(height))
    except (ValueError, TypeError) as e:
        raise StoreError(f"Malformed size for content {content_id}: {e}") from e


def _image_size(path: Path) -> Tuple[int, int]:
    """Read pixel dimensions from the image header."""
    try:
        with Image.open(path) as img:
            return img.size
    except (OSError, UnidentifiedImageError) as e:
        raise StoreError(f"Cannot identify image {path.name}: {e}") from e
