"""VaultSyncManager: wires credentials, remote store, vault and state into sync passes."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Optional, Union

from vaultsync.auth import AuthInfo, OAuthClient
from vaultsync.controller import GoogleDriveController
from vaultsync.errors import AuthError, InvalidStateError
from vaultsync.local import LocalFileTree
from vaultsync.models import SyncResult
from vaultsync.store import JsonStore, SyncSettings
from vaultsync.sync import (
    FileTree,
    IdentityCache,
    PersistentStore,
    RemoteStore,
    SyncOptions,
    SyncOrchestrator,
    SyncPass,
    SyncPhase,
    TokenProvider,
)

logger = logging.getLogger(__name__)


class VaultSyncManager:
    """High-level entry point: one vault, one remote root, sequential passes."""

    def __init__(
        self,
        vault_dir: Union[str, Path],
        *,
        state_dir: Optional[Path] = None,
        options: Optional[SyncOptions] = None,
        include_hidden: bool = False,
    ) -> None:
        self._file_tree: FileTree = LocalFileTree(vault_dir, include_hidden=include_hidden)
        self._store: PersistentStore = JsonStore(state_dir)
        self._options = options or SyncOptions()
        self._remote: Optional[RemoteStore] = None
        self._token_provider: Optional[TokenProvider] = None
        self._lock = threading.Lock()
        self._cancel_event = threading.Event()
        self._orchestrator: Optional[SyncOrchestrator] = None

    @classmethod
    def from_components(
        cls,
        remote: RemoteStore,
        file_tree: FileTree,
        store: PersistentStore,
        *,
        options: Optional[SyncOptions] = None,
        token_provider: Optional[TokenProvider] = None,
    ) -> "VaultSyncManager":
        """Create manager with injected collaborators (useful for tests)."""
        obj = cls.__new__(cls)
        obj._file_tree = file_tree
        obj._store = store
        obj._options = options or SyncOptions()
        obj._remote = remote
        obj._token_provider = token_provider
        obj._lock = threading.Lock()
        obj._cancel_event = threading.Event()
        obj._orchestrator = None
        return obj

    @property
    def running(self) -> bool:
        return self._lock.locked()

    @property
    def phase(self) -> SyncPhase:
        if self._orchestrator is None:
            return SyncPhase.IDLE
        return self._orchestrator.phase

    def cancel(self) -> None:
        """Request cancellation; the running pass stops before its next file."""
        if self.running:
            self._cancel_event.set()

    def sync(self) -> SyncResult:
        """
        Run one full sync pass.

        Returns:
            SyncResult with status "success", "failed" (auth or root
            resolution failure) or "cancelled".

        Raises:
            InvalidStateError: if a pass is already running, or the state
                files cannot be read.
        """
        if not self._lock.acquire(blocking=False):
            raise InvalidStateError("A sync pass is already running")
        try:
            settings = self._store.load_settings()
            try:
                remote = self._connect(settings)
            except AuthError as exc:
                logger.error("Error during sync: %s", exc)
                return SyncResult(status="failed", fatal_error=f"{exc.__class__.__name__}: {exc}")

            logger.info("Syncing with Google Drive...")
            cache = IdentityCache(file_ids=self._store.load_file_ids())
            sync_pass = SyncPass.start(cache, settings, cancel_event=self._cancel_event)
            self._orchestrator = SyncOrchestrator(
                remote,
                self._file_tree,
                self._store,
                settings,
                self._options,
            )
            return self._orchestrator.run(sync_pass)
        finally:
            self._cancel_event.clear()
            self._lock.release()

    def _connect(self, settings: SyncSettings) -> RemoteStore:
        if self._remote is not None:
            if self._token_provider is not None:
                self._token_provider.get_credentials(ensure_valid=True)
            return self._remote

        try:
            auth_info = AuthInfo.from_settings(settings)
        except ValueError as exc:
            raise AuthError(
                "You are not logged in. Configure client id, secret and refresh token first.",
                cause=exc,
            ) from exc
        oauth = OAuthClient(auth_info, scopes=self._options.scopes)
        return GoogleDriveController(oauth)
