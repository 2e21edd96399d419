"""Local vault exports for vaultsync."""

from __future__ import annotations

from .file_tree import LocalFileTree

__all__ = ["LocalFileTree"]
