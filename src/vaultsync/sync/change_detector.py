"""Decides whether a local file needs (re-)upload."""

from __future__ import annotations

from typing import AbstractSet, Optional

from vaultsync.models import LocalFile


def should_upload(
    file: LocalFile,
    last_sync_timestamp: Optional[int],
    *,
    pending_paths: AbstractSet[str] = frozenset(),
) -> bool:
    """
    Return True if the file must be uploaded in this pass.

    Policy:
        - No watermark yet (first sync): always upload.
        - Path left pending by a failed upload: always upload.
        - Otherwise upload iff modified_time > watermark (strictly).
    """
    if last_sync_timestamp is None:
        return True
    if file.path in pending_paths:
        return True
    return file.modified_time > last_sync_timestamp
