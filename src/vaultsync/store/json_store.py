"""JSON file persistence for settings and the durable file-id cache."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from vaultsync.errors import InvalidStateError

from .settings import SyncSettings

logger = logging.getLogger(__name__)

SETTINGS_FILE = "settings.json"
FILE_IDS_FILE = "file_ids.json"


def default_state_dir() -> Path:
    """Return ~/.config/vaultsync (honours XDG_CONFIG_HOME)."""
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / "vaultsync"
    return Path.home() / ".config" / "vaultsync"


class JsonStore:
    """
    Stores settings.json and file_ids.json in one state directory.

    Missing files load as defaults. Unreadable files raise InvalidStateError
    rather than silently starting over, since losing file ids would create
    duplicate remote files on the next pass.
    """

    def __init__(self, state_dir: Optional[Path] = None) -> None:
        self.state_dir = Path(state_dir) if state_dir is not None else default_state_dir()

    @property
    def settings_file(self) -> Path:
        return self.state_dir / SETTINGS_FILE

    @property
    def file_ids_file(self) -> Path:
        return self.state_dir / FILE_IDS_FILE

    def load_settings(self) -> SyncSettings:
        data = self._read_json(self.settings_file)
        if data is None:
            logger.debug("No settings found at %s", self.settings_file)
            return SyncSettings()
        return SyncSettings.from_dict(data)

    def save_settings(self, settings: SyncSettings) -> None:
        self._write_json(self.settings_file, settings.to_dict())

    def load_file_ids(self) -> dict[str, str]:
        data = self._read_json(self.file_ids_file)
        if data is None:
            return {}
        file_ids = {k: v for k, v in data.items() if isinstance(k, str) and isinstance(v, str)}
        logger.debug("Loaded %d file ids from %s", len(file_ids), self.file_ids_file)
        return file_ids

    def save_file_ids(self, file_ids: dict[str, str]) -> None:
        self._write_json(self.file_ids_file, dict(sorted(file_ids.items())))
        logger.debug("Saved %d file ids to %s", len(file_ids), self.file_ids_file)

    def _read_json(self, path: Path) -> Optional[dict[str, Any]]:
        if not path.exists():
            return None
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise InvalidStateError(
                "Failed to read state file",
                details={"path": str(path)},
                cause=exc,
            ) from exc
        if not isinstance(data, dict):
            raise InvalidStateError(
                "State file must contain a JSON object",
                details={"path": str(path)},
            )
        return data

    def _write_json(self, path: Path, data: dict[str, Any]) -> None:
        # Temp file + os.replace: readers never see a partially written file.
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
