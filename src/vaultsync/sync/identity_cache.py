"""Local path -> remote id mapping for folders (volatile) and files (durable)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from vaultsync.util.paths import normalize_path


@dataclass(slots=True)
class IdentityCache:
    """
    Two maps keyed by sync-relative path ("notes/a.md", root is "").

    Notes:
        - folder_ids is rebuilt from scratch for every pass.
        - file_ids survives passes; a hit only means the file was uploaded at
          that path before, the remote object may have been deleted since.
    """

    folder_ids: dict[str, str] = field(default_factory=dict)
    file_ids: dict[str, str] = field(default_factory=dict)

    def get_folder_id(self, path: str) -> Optional[str]:
        return self.folder_ids.get(normalize_path(path))

    def set_folder_id(self, path: str, folder_id: str) -> None:
        self.folder_ids[normalize_path(path)] = folder_id

    def get_file_id(self, path: str) -> Optional[str]:
        return self.file_ids.get(normalize_path(path))

    def set_file_id(self, path: str, file_id: str) -> None:
        self.file_ids[normalize_path(path)] = file_id

    def forget_file_id(self, path: str) -> None:
        self.file_ids.pop(normalize_path(path), None)

    def reset_folders(self) -> None:
        self.folder_ids.clear()
