"""Creates or updates remote file objects and records their ids."""

from __future__ import annotations

import logging

from vaultsync.errors import NotFoundError
from vaultsync.util.paths import normalize_path, split_parent

from .folder_resolver import FolderResolver
from .protocols import Content, RemoteStore
from .sync_pass import SyncPass

logger = logging.getLogger(__name__)


class FileUploader:
    """Push one file's content to the remote store under its resolved parent folder."""

    def __init__(self, remote: RemoteStore, resolver: FolderResolver, sync_pass: SyncPass) -> None:
        self._remote = remote
        self._resolver = resolver
        self._pass = sync_pass

    def upload(self, relative_path: str, content: Content, mime_type: str) -> str:
        """
        Create or update the remote file for relative_path.

        A known id is updated in place (content, name, mime type and parent);
        if that object was deleted remotely the stale id is dropped and a new
        file is created. On success the id is recorded in the file cache.

        Raises:
            RemoteError: the remote call failed; the cache is left unchanged.
        """
        path = normalize_path(relative_path)
        parent_path, name = split_parent(path)
        parent_id = self._resolver.resolve(parent_path)

        file_id = self._pass.cache.get_file_id(path)
        if file_id is not None:
            try:
                new_id = self._remote.update_file(
                    file_id,
                    name,
                    mime_type,
                    content,
                    parent_id=parent_id,
                )
            except NotFoundError:
                logger.warning("Remote file for %s (ID: %s) is gone; creating it again", path, file_id)
                self._pass.cache.forget_file_id(path)
            else:
                self._pass.cache.set_file_id(path, new_id)
                self._pass.result.updated += 1
                logger.info("File updated: %s, ID: %s", path, new_id)
                return new_id

        new_id = self._remote.create_file(name, parent_id, mime_type, content)
        self._pass.cache.set_file_id(path, new_id)
        self._pass.result.created += 1
        logger.info("File created: %s, ID: %s", path, new_id)
        return new_id
