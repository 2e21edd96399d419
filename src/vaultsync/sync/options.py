"""Options for a sync pass."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from vaultsync.auth import DEFAULT_SCOPES

DEFAULT_ROOT_FOLDER_NAME = "Obsidian Vault"


@dataclass(slots=True, frozen=True)
class SyncOptions:
    """
    Options for VaultSyncManager / SyncOrchestrator.

    root_folder_name: remote folder that mirrors the vault root.
    root_parent_id: if set, the root folder is looked up/created only under
        this remote folder; otherwise it is looked up anywhere.
    checkpoint_every: save durable file ids after this many uploads
        (0 disables checkpoints; ids are still saved at pass end).
    """

    root_folder_name: str = DEFAULT_ROOT_FOLDER_NAME
    root_parent_id: Optional[str] = None
    checkpoint_every: int = 50
    scopes: tuple[str, ...] = DEFAULT_SCOPES

    def __post_init__(self) -> None:
        name = self.root_folder_name
        if not isinstance(name, str) or not name.strip() or "/" in name:
            raise ValueError("root_folder_name must be a non-empty name without '/'")
        if not isinstance(self.checkpoint_every, int) or self.checkpoint_every < 0:
            raise ValueError("checkpoint_every must be a non-negative int")
        if not self.scopes:
            raise ValueError("scopes must not be empty")
