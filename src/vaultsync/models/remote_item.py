"""Data model for objects returned by the remote store."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class RemoteItem:
    """A remote folder or file as reported by the remote store."""

    item_id: str
    name: str
    mime_type: str = ""
