"""Per-pass state shared by the resolver, uploader and orchestrator."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from vaultsync.errors import RemoteError
from vaultsync.models import ItemError, ItemKind, SyncResult
from vaultsync.store import SyncSettings
from vaultsync.util.time import now_millis

from .identity_cache import IdentityCache


class SyncPhase(str, Enum):
    IDLE = "idle"
    RESOLVING_ROOT = "resolving_root"
    WALKING = "walking"
    FINALIZING = "finalizing"
    FAILED = "failed"


@dataclass(slots=True)
class SyncPass:
    """
    State owned by exactly one sync pass.

    cache.folder_ids is emptied when the pass starts; cache.file_ids and
    pending_paths come from durable storage and are written back at the end.
    started_at becomes the new watermark if the pass completes.
    """

    cache: IdentityCache
    last_sync_timestamp: Optional[int] = None
    pending_paths: set[str] = field(default_factory=set)
    started_at: int = field(default_factory=now_millis)
    root_folder_id: Optional[str] = None
    seen_paths: set[str] = field(default_factory=set)
    uploads_since_checkpoint: int = 0
    result: SyncResult = field(default_factory=lambda: SyncResult(status="success"))
    cancel_event: threading.Event = field(default_factory=threading.Event)

    @classmethod
    def start(
        cls,
        cache: IdentityCache,
        settings: SyncSettings,
        *,
        cancel_event: Optional[threading.Event] = None,
    ) -> "SyncPass":
        cache.reset_folders()
        return cls(
            cache=cache,
            last_sync_timestamp=settings.last_sync_timestamp,
            pending_paths=set(settings.pending_paths),
            cancel_event=cancel_event if cancel_event is not None else threading.Event(),
        )

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()

    def record_error(self, path: str, kind: ItemKind, exc: Exception) -> None:
        self.result.errors.append(
            ItemError(
                path=path,
                kind=kind,
                error_type=exc.__class__.__name__,
                error_message=str(exc),
                transient=isinstance(exc, RemoteError) and exc.transient,
                error_details=getattr(exc, "details", None) or None,
            )
        )
