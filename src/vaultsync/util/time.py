from __future__ import annotations

import time
from datetime import datetime, timezone


def now_millis() -> int:
    """Return current time as epoch milliseconds."""
    return time.time_ns() // 1_000_000


def millis_from_mtime(st_mtime: float) -> int:
    """Convert an os.stat() modification time (seconds, float) to epoch millis."""
    return int(st_mtime * 1000)


def millis_to_datetime(value: int) -> datetime:
    """Convert epoch millis to a tz-aware UTC datetime."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError("value must be an int (epoch millis)")
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


def format_millis(value: int | None) -> str:
    """Human readable UTC timestamp, or 'never' when absent."""
    if value is None:
        return "never"
    return millis_to_datetime(value).isoformat(timespec="seconds").replace("+00:00", "Z")
