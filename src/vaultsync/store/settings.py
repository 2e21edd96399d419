"""Persisted settings for vaultsync."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Optional

CLIENT_ID_ENV = "GOOGLE_DRIVE_CLIENT_ID"
CLIENT_SECRET_ENV = "GOOGLE_DRIVE_CLIENT_SECRET"


@dataclass(slots=True)
class SyncSettings:
    """
    Settings persisted between runs.

    Notes:
        - last_sync_timestamp is the watermark in epoch milliseconds; None
          means no pass has ever completed.
        - pending_paths holds files whose last upload attempt failed and
          must be retried regardless of the watermark.
    """

    client_id: str = field(default_factory=lambda: os.environ.get(CLIENT_ID_ENV, ""))
    client_secret: str = field(default_factory=lambda: os.environ.get(CLIENT_SECRET_ENV, ""))
    refresh_token: str = ""
    last_sync_timestamp: Optional[int] = None
    pending_paths: set[str] = field(default_factory=set)

    @property
    def has_credentials(self) -> bool:
        return bool(self.client_id and self.client_secret and self.refresh_token)

    def to_dict(self) -> dict[str, Any]:
        return {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "refresh_token": self.refresh_token,
            "last_sync_timestamp": self.last_sync_timestamp,
            "pending_paths": sorted(self.pending_paths),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SyncSettings":
        """Create settings from a dict; missing keys fall back to defaults."""
        settings = cls()
        for key in ("client_id", "client_secret", "refresh_token"):
            value = data.get(key)
            if isinstance(value, str) and value:
                setattr(settings, key, value)

        ts = data.get("last_sync_timestamp")
        if isinstance(ts, int) and not isinstance(ts, bool):
            settings.last_sync_timestamp = ts

        pending = data.get("pending_paths") or []
        if isinstance(pending, list):
            settings.pending_paths = {p for p in pending if isinstance(p, str)}
        return settings
