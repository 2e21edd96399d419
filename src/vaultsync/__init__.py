"""vaultsync public API."""

from __future__ import annotations

from vaultsync.auth import AuthInfo, OAuthClient
from vaultsync.controller import GoogleDriveController
from vaultsync.errors import (
    ApiError,
    AuthError,
    ConflictError,
    HttpErrorInfo,
    InvalidArgumentError,
    InvalidStateError,
    NetworkError,
    NotFoundError,
    PermissionError,
    QuotaExceededError,
    RateLimitError,
    RemoteError,
    SyncCancelledError,
    VaultSyncError,
    map_http_error,
)
from vaultsync.local import LocalFileTree
from vaultsync.manager import VaultSyncManager
from vaultsync.models import ItemError, LocalFile, LocalFolder, RemoteItem, SyncResult
from vaultsync.store import JsonStore, SyncSettings
from vaultsync.sync import IdentityCache, SyncOptions, SyncPhase

__all__ = [
    # High-level
    "VaultSyncManager",
    "SyncOptions",
    "SyncPhase",
    # Collaborators
    "AuthInfo",
    "OAuthClient",
    "GoogleDriveController",
    "LocalFileTree",
    "JsonStore",
    "SyncSettings",
    "IdentityCache",
    # Models
    "LocalFile",
    "LocalFolder",
    "RemoteItem",
    "ItemError",
    "SyncResult",
    # Errors
    "VaultSyncError",
    "InvalidStateError",
    "AuthError",
    "SyncCancelledError",
    "RemoteError",
    "PermissionError",
    "InvalidArgumentError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "QuotaExceededError",
    "NetworkError",
    "ApiError",
    "HttpErrorInfo",
    "map_http_error",
]
