"""
Module: gazette

Purpose:
    The Gazette record as read from the store: an ordered list of content
    ids plus one embedded LayoutSpec.

Key Classes:
    - GazetteStatus: Lifecycle states of a gazette
    - Gazette: Immutable gazette record

Key Functions:
    - Gazette.from_dict(data): Deserialize from a JSON record
    - Gazette.to_dict(): Serialize for JSON

Dependencies:
    - dataclasses (std)

Used By:
    - press.loading.store: Builds Gazette objects from records
    - press.service: Drives generation from a Gazette
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .layout import LayoutSpec


class GazetteStatus(str, Enum):
    DRAFT = "DRAFT"
    PROCESSING = "PROCESSING"
    READY_FOR_PRINT = "READY_FOR_PRINT"
    PRINTING = "PRINTING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    ERROR = "ERROR"


@dataclass(frozen=True)
class Gazette:
    """
    Gazette record (immutable).

    This core reads gazettes; it never updates status or content.

    Attributes:
        id: Gazette identifier
        content_ids: Ordered content identifiers
        layout: Embedded print layout specification
        status: Lifecycle state as stored
        family_id: Owning family, if recorded

    Example:
        >>> gazette = Gazette("g1", ("c1", "c2"), spec)
        >>> gazette.content_count
        2
    """

    id: str
    content_ids: Tuple[str, ...]
    layout: LayoutSpec
    status: GazetteStatus = GazetteStatus.DRAFT
    family_id: Optional[str] = None

    def __post_init__(self) -> None:
        # Accept lists from callers but store a tuple
        if not isinstance(self.content_ids, tuple):
            object.__setattr__(self, "content_ids", tuple(self.content_ids))

    @property
    def content_count(self) -> int:
        return len(self.content_ids)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dictionary."""
        return {
            "id": self.id,
            "content_ids": list(self.content_ids),
            "layout": self.layout.to_dict(),
            "status": self.status.value,
            "family_id": self.family_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Gazette":
        """
        Deserialize from a dictionary.

        Raises:
            KeyError: If id or layout is missing
            ValueError: If status or layout fields are malformed
        """
        content_ids = data.get("content_ids", data.get("contentIds", []))
        return cls(
            id=str(data["id"]),
            content_ids=tuple(str(cid) for cid in content_ids),
            layout=LayoutSpec.from_dict(data["layout"]),
            status=GazetteStatus(data.get("status", GazetteStatus.DRAFT.value)),
            family_id=data.get("family_id", data.get("familyId")),
        )
