"""Public store exports for vaultsync."""

from __future__ import annotations

from .json_store import JsonStore, default_state_dir
from .settings import SyncSettings

__all__ = ["JsonStore", "SyncSettings", "default_state_dir"]
