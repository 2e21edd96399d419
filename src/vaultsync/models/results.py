"""Result models for a sync pass."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Optional


SyncStatus = Literal["success", "failed", "cancelled"]
ItemKind = Literal["file", "folder"]


@dataclass(slots=True)
class ItemError:
    """A per-item failure that was logged and skipped during a pass."""

    path: str
    kind: ItemKind
    error_type: str
    error_message: str
    transient: bool = False
    error_details: Optional[dict[str, Any]] = None


@dataclass(slots=True)
class SyncResult:
    """Aggregate result of one sync pass."""

    status: SyncStatus
    created: int = 0
    updated: int = 0
    skipped: int = 0
    failed: int = 0
    folders_created: int = 0
    errors: list[ItemError] = field(default_factory=list)
    watermark: Optional[int] = None
    fatal_error: Optional[str] = None

    @property
    def uploaded(self) -> int:
        return self.created + self.updated

    @property
    def message(self) -> str:
        if self.status == "cancelled":
            return "Sync cancelled"
        if self.status == "failed":
            return "Error during sync"
        if self.errors:
            return f"Sync complete with {len(self.errors)} error(s)"
        return "Sync complete"

    def summary(self) -> dict[str, int]:
        return {
            "created": self.created,
            "updated": self.updated,
            "skipped": self.skipped,
            "failed": self.failed,
            "folders_created": self.folders_created,
        }
