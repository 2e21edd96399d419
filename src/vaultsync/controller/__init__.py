"""Remote store exports for vaultsync."""

from __future__ import annotations

from .drive_controller import GoogleDriveController, build_query, escape_query_value

__all__ = ["GoogleDriveController", "build_query", "escape_query_value"]
