"""Maps local folder paths to remote folder ids, creating folders on demand."""

from __future__ import annotations

import logging
from typing import Optional

from vaultsync.errors import InvalidStateError
from vaultsync.models import RemoteItem
from vaultsync.util.mime import is_folder
from vaultsync.util.paths import ROOT_PATH, join_path, split_path

from .protocols import RemoteStore
from .sync_pass import SyncPass

logger = logging.getLogger(__name__)


class FolderResolver:
    """
    Resolve sync-relative folder paths to remote folder ids.

    Every resolved prefix is stored in the pass's folder cache, so each
    folder is looked up (and at most created) once per pass no matter how
    many files live under it.
    """

    def __init__(self, remote: RemoteStore, sync_pass: SyncPass) -> None:
        self._remote = remote
        self._pass = sync_pass

    def resolve_root(self, name: str, *, parent_id: Optional[str] = None) -> str:
        """Find or create the remote root folder and seed it at the empty path."""
        cached = self._pass.cache.get_folder_id(ROOT_PATH)
        if cached is not None:
            self._pass.root_folder_id = cached
            return cached

        found = _pick_folder(self._remote.find_folders(name, parent_id=parent_id), name, ROOT_PATH)
        if found is not None:
            root_id = found
        else:
            root_id = self._remote.create_folder(name, parent_id)
            self._pass.result.folders_created += 1
            logger.info("Created remote root folder %r, ID: %s", name, root_id)

        self._pass.root_folder_id = root_id
        self._pass.cache.set_folder_id(ROOT_PATH, root_id)
        logger.info("Remote root folder ID: %s", root_id)
        return root_id

    def resolve(self, path: str) -> str:
        """
        Return the remote folder id for a sync-relative folder path.

        Raises:
            InvalidStateError: if resolve_root() was not called for this pass.
            RemoteError: if a lookup or create call fails.
        """
        parent_id = self._pass.root_folder_id
        if parent_id is None:
            raise InvalidStateError("Root folder is not resolved. Call resolve_root() first.")

        current_path = ROOT_PATH
        for segment in split_path(path):
            current_path = join_path(current_path, segment)

            cached = self._pass.cache.get_folder_id(current_path)
            if cached is not None:
                parent_id = cached
                continue

            children = self._remote.list_children(parent_id, name=segment, folders_only=True)
            found = _pick_folder(children, segment, current_path)
            if found is not None:
                parent_id = found
            else:
                parent_id = self._remote.create_folder(segment, parent_id)
                self._pass.result.folders_created += 1
                logger.info("Created remote folder %s, ID: %s", current_path, parent_id)

            self._pass.cache.set_folder_id(current_path, parent_id)

        return parent_id


def _pick_folder(items: list[RemoteItem], name: str, path: str) -> Optional[str]:
    # Smallest id wins when the remote holds several folders with this name.
    matches = sorted(
        item.item_id
        for item in items
        if item.name == name and item.item_id and is_folder(item.mime_type)
    )
    if not matches:
        return None
    if len(matches) > 1:
        logger.warning(
            "Found %d remote folders named %r for %r; using %s",
            len(matches),
            name,
            path or "/",
            matches[0],
        )
    return matches[0]
