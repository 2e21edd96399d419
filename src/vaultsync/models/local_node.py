"""Data model for the local vault tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(slots=True, frozen=True)
class LocalFile:
    """
    A file in the local vault.

    Notes:
        - path is sync-relative ("notes/a.md"), never an OS path.
        - modified_time is epoch milliseconds.
    """

    path: str
    name: str
    extension: str
    modified_time: int


@dataclass(slots=True, frozen=True)
class LocalFolder:
    """A folder in the local vault. The sync root has path == ""."""

    path: str
    name: str
    children: tuple["LocalNode", ...] = field(default_factory=tuple)


LocalNode = Union[LocalFile, LocalFolder]
