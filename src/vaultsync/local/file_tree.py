"""LocalFileTree: the vault on disk exposed as LocalFolder/LocalFile nodes."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Union

from vaultsync.errors import InvalidStateError
from vaultsync.models import LocalFile, LocalFolder, LocalNode
from vaultsync.util.mime import is_text_mime, mime_type_for_extension
from vaultsync.util.paths import join_path, split_path
from vaultsync.util.time import millis_from_mtime

logger = logging.getLogger(__name__)


class LocalFileTree:
    """
    Read-only view of a vault directory.

    Hidden entries (name starting with ".", e.g. the ".obsidian" config
    folder) are skipped unless include_hidden is True. Symlinked directories
    are not followed.
    """

    def __init__(self, root_dir: Union[str, Path], *, include_hidden: bool = False) -> None:
        self.root_dir = Path(root_dir)
        self.include_hidden = include_hidden

    def root(self) -> LocalFolder:
        """Scan the vault and return its root folder node."""
        if not self.root_dir.is_dir():
            raise InvalidStateError(
                "Vault directory does not exist",
                details={"root_dir": str(self.root_dir)},
            )
        try:
            return self._scan(self.root_dir, "", "")
        except OSError as exc:
            raise InvalidStateError(
                "Failed to scan vault directory",
                details={"root_dir": str(self.root_dir)},
                cause=exc,
            ) from exc

    def read(self, file: LocalFile) -> Union[str, bytes]:
        """
        Read file content: text for text-like MIME types, bytes otherwise.

        A text file that is not valid UTF-8 is returned as raw bytes.
        """
        path = self.os_path(file.path)
        data = path.read_bytes()
        if is_text_mime(mime_type_for_extension(file.extension)):
            try:
                return data.decode("utf-8")
            except UnicodeDecodeError:
                logger.debug("%s is not valid UTF-8, uploading raw bytes", file.path)
        return data

    def os_path(self, relative_path: str) -> Path:
        return self.root_dir.joinpath(*split_path(relative_path))

    def _scan(self, directory: Path, rel_path: str, name: str) -> LocalFolder:
        children: list[LocalNode] = []
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except PermissionError as exc:
            logger.warning("Permission denied, skipping %s: %s", rel_path or "/", exc)
            entries = []

        for entry in entries:
            if not self.include_hidden and entry.name.startswith("."):
                continue
            child_path = join_path(rel_path, entry.name)
            node: LocalNode
            try:
                if entry.is_dir(follow_symlinks=False):
                    node = self._scan(Path(entry.path), child_path, entry.name)
                elif entry.is_file():
                    node = LocalFile(
                        path=child_path,
                        name=entry.name,
                        extension=_extension(entry.name),
                        modified_time=millis_from_mtime(entry.stat().st_mtime),
                    )
                else:
                    continue
            except OSError as exc:
                # Removed or unreadable since the directory was listed.
                logger.warning("Skipping %s: %s", child_path, exc)
                continue
            children.append(node)

        return LocalFolder(path=rel_path, name=name, children=tuple(children))


def _extension(name: str) -> str:
    _, ext = os.path.splitext(name)
    return ext[1:].lower()
