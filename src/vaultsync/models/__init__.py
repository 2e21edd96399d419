"""Public model exports for vaultsync."""

from __future__ import annotations

from .local_node import LocalFile, LocalFolder, LocalNode
from .remote_item import RemoteItem
from .results import ItemError, ItemKind, SyncResult, SyncStatus

__all__ = [
    "LocalFile",
    "LocalFolder",
    "LocalNode",
    "RemoteItem",
    "ItemError",
    "ItemKind",
    "SyncStatus",
    "SyncResult",
]
