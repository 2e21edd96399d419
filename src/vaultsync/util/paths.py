"""Helpers for sync-relative paths (forward-slash joined, no leading/trailing slash)."""

from __future__ import annotations

ROOT_PATH: str = ""


def split_path(path: str) -> list[str]:
    """Split a relative path into its non-empty segments."""
    return [part for part in path.replace("\\", "/").split("/") if part]


def normalize_path(path: str) -> str:
    """
    Return the canonical form of a relative path.

    Accepts backslashes and redundant slashes; the result is case-preserving
    and has no leading or trailing slash. The sync root is the empty string.
    """
    return "/".join(split_path(path))


def join_path(parent: str, name: str) -> str:
    """Join a relative parent path and a child name."""
    if not parent:
        return normalize_path(name)
    return normalize_path(f"{parent}/{name}")


def split_parent(path: str) -> tuple[str, str]:
    """
    Return (parent_path, leaf_name) for a relative path.

    Example:
        "notes/daily/a.md" -> ("notes/daily", "a.md")
        "a.md" -> ("", "a.md")
    """
    parts = split_path(path)
    if not parts:
        raise ValueError("path must not be empty")
    return "/".join(parts[:-1]), parts[-1]
