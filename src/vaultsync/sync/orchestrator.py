"""SyncOrchestrator: walks the vault and drives one full upload pass."""

from __future__ import annotations

import logging

from vaultsync.errors import RemoteError, SyncCancelledError, VaultSyncError
from vaultsync.models import LocalFile, LocalFolder, SyncResult
from vaultsync.store import SyncSettings
from vaultsync.util.mime import mime_type_for_extension

from .change_detector import should_upload
from .folder_resolver import FolderResolver
from .options import SyncOptions
from .protocols import FileTree, PersistentStore, RemoteStore
from .sync_pass import SyncPass, SyncPhase
from .uploader import FileUploader

logger = logging.getLogger(__name__)


class SyncOrchestrator:
    """
    Run one sync pass: resolve root -> walk tree -> finalize.

    Policy:
        - Per-item RemoteError: logged, recorded in result.errors, the path
          is left pending for the next pass, the pass continues.
        - Root resolution failure, AuthError or any other VaultSyncError:
          the pass ends in FAILED with status "failed".
        - Cancellation is checked before each file; a cancelled pass ends
          with status "cancelled".
        - Durable file ids and pending paths are saved whatever the outcome;
          the watermark only advances when the pass completes.
    """

    def __init__(
        self,
        remote: RemoteStore,
        file_tree: FileTree,
        store: PersistentStore,
        settings: SyncSettings,
        options: SyncOptions | None = None,
    ) -> None:
        self._remote = remote
        self._file_tree = file_tree
        self._store = store
        self._settings = settings
        self._options = options or SyncOptions()
        self._phase = SyncPhase.IDLE

    @property
    def phase(self) -> SyncPhase:
        return self._phase

    def run(self, sync_pass: SyncPass) -> SyncResult:
        result = sync_pass.result
        resolver = FolderResolver(self._remote, sync_pass)
        uploader = FileUploader(self._remote, resolver, sync_pass)
        completed = False

        try:
            self._phase = SyncPhase.RESOLVING_ROOT
            resolver.resolve_root(
                self._options.root_folder_name,
                parent_id=self._options.root_parent_id,
            )

            self._phase = SyncPhase.WALKING
            self._walk(self._file_tree.root(), sync_pass, resolver, uploader)

            self._phase = SyncPhase.FINALIZING
            completed = True
        except SyncCancelledError:
            result.status = "cancelled"
            logger.info("Sync cancelled")
        except VaultSyncError as exc:
            self._phase = SyncPhase.FAILED
            result.status = "failed"
            result.fatal_error = f"{exc.__class__.__name__}: {exc}"
            logger.error("Error during sync: %s", result.fatal_error)
        finally:
            self._persist(sync_pass, completed)

        if completed:
            result.status = "success"
            result.watermark = sync_pass.started_at
            self._phase = SyncPhase.IDLE
            logger.info("%s: %s", result.message, result.summary())
        elif result.status == "cancelled":
            self._phase = SyncPhase.IDLE
        return result

    # ----------------------------
    # Internals
    # ----------------------------
    def _walk(
        self,
        folder: LocalFolder,
        sync_pass: SyncPass,
        resolver: FolderResolver,
        uploader: FileUploader,
    ) -> None:
        for child in folder.children:
            match child:
                case LocalFile():
                    self._sync_file(child, sync_pass, uploader)
                case LocalFolder():
                    try:
                        resolver.resolve(child.path)
                    except RemoteError as exc:
                        logger.warning("Failed to resolve folder %s: %s", child.path, exc)
                        sync_pass.record_error(child.path, "folder", exc)
                        self._mark_subtree_pending(child, sync_pass)
                        continue
                    self._walk(child, sync_pass, resolver, uploader)
                case _:
                    raise TypeError(f"Unsupported node type: {type(child).__name__}")

    def _sync_file(self, file: LocalFile, sync_pass: SyncPass, uploader: FileUploader) -> None:
        if sync_pass.cancelled:
            raise SyncCancelledError("Sync cancelled", details={"next_path": file.path})

        sync_pass.seen_paths.add(file.path)
        if not should_upload(
            file,
            sync_pass.last_sync_timestamp,
            pending_paths=sync_pass.pending_paths,
        ):
            logger.debug("Skipping %s - not modified since last sync", file.path)
            sync_pass.result.skipped += 1
            return

        mime_type = mime_type_for_extension(file.extension)
        try:
            content = self._file_tree.read(file)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Error reading file %s: %s", file.path, exc)
            self._fail_file(file.path, exc, sync_pass)
            return

        try:
            uploader.upload(file.path, content, mime_type)
        except RemoteError as exc:
            logger.warning("Error uploading file %s: %s", file.path, exc)
            self._fail_file(file.path, exc, sync_pass)
            return

        sync_pass.pending_paths.discard(file.path)
        sync_pass.uploads_since_checkpoint += 1
        if (
            self._options.checkpoint_every
            and sync_pass.uploads_since_checkpoint >= self._options.checkpoint_every
        ):
            self._store.save_file_ids(sync_pass.cache.file_ids)
            sync_pass.uploads_since_checkpoint = 0

    def _fail_file(self, path: str, exc: Exception, sync_pass: SyncPass) -> None:
        sync_pass.record_error(path, "file", exc)
        sync_pass.pending_paths.add(path)
        sync_pass.result.failed += 1

    def _mark_subtree_pending(self, folder: LocalFolder, sync_pass: SyncPass) -> None:
        for node in _iter_files(folder):
            sync_pass.seen_paths.add(node.path)
            if should_upload(
                node,
                sync_pass.last_sync_timestamp,
                pending_paths=sync_pass.pending_paths,
            ):
                sync_pass.pending_paths.add(node.path)
                sync_pass.result.failed += 1

    def _persist(self, sync_pass: SyncPass, completed: bool) -> None:
        settings = self._settings
        if completed:
            # Paths that vanished locally no longer need a retry.
            settings.pending_paths = sync_pass.pending_paths & sync_pass.seen_paths
            settings.last_sync_timestamp = sync_pass.started_at
        else:
            settings.pending_paths = set(sync_pass.pending_paths)

        self._store.save_file_ids(sync_pass.cache.file_ids)
        self._store.save_settings(settings)


def _iter_files(folder: LocalFolder):
    for child in folder.children:
        match child:
            case LocalFile():
                yield child
            case LocalFolder():
                yield from _iter_files(child)
