"""Sync engine exports for vaultsync."""

from __future__ import annotations

from .change_detector import should_upload
from .folder_resolver import FolderResolver
from .identity_cache import IdentityCache
from .options import DEFAULT_ROOT_FOLDER_NAME, SyncOptions
from .orchestrator import SyncOrchestrator
from .protocols import FileTree, PersistentStore, RemoteStore, TokenProvider
from .sync_pass import SyncPass, SyncPhase
from .uploader import FileUploader

__all__ = [
    "IdentityCache",
    "FolderResolver",
    "should_upload",
    "FileUploader",
    "SyncOrchestrator",
    "SyncOptions",
    "DEFAULT_ROOT_FOLDER_NAME",
    "SyncPass",
    "SyncPhase",
    "RemoteStore",
    "FileTree",
    "TokenProvider",
    "PersistentStore",
]
