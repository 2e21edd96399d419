"""Capabilities the sync core consumes."""

from __future__ import annotations

from typing import Any, Optional, Protocol, Union

from vaultsync.models import LocalFile, LocalFolder, RemoteItem
from vaultsync.store import SyncSettings

Content = Union[str, bytes]


class RemoteStore(Protocol):
    def list_children(
        self,
        parent_id: str,
        *,
        name: Optional[str] = None,
        folders_only: bool = False,
    ) -> list[RemoteItem]: ...

    def find_folders(self, name: str, *, parent_id: Optional[str] = None) -> list[RemoteItem]: ...

    def create_folder(self, name: str, parent_id: Optional[str]) -> str: ...

    def create_file(self, name: str, parent_id: str, mime_type: str, content: Content) -> str: ...

    def update_file(
        self,
        file_id: str,
        name: str,
        mime_type: str,
        content: Content,
        *,
        parent_id: Optional[str] = None,
    ) -> str: ...


class FileTree(Protocol):
    def root(self) -> LocalFolder: ...

    def read(self, file: LocalFile) -> Content: ...


class TokenProvider(Protocol):
    def get_credentials(self, ensure_valid: bool = True) -> Any: ...


class PersistentStore(Protocol):
    def load_settings(self) -> SyncSettings: ...

    def save_settings(self, settings: SyncSettings) -> None: ...

    def load_file_ids(self) -> dict[str, str]: ...

    def save_file_ids(self, file_ids: dict[str, str]) -> None: ...
