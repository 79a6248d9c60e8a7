"""Timestamp policy: when and how a time marker is attached to log content."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

# Local wall-clock time, microsecond precision; offset appended as +HH:MM
ENTRY_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"
FLUSH_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

_ALIASES = {
    "none": "NONE",
    "per_entry": "PER_ENTRY",
    "log": "PER_ENTRY",
    "per_flush": "PER_FLUSH",
    "flush": "PER_FLUSH",
}


class TimestampMode(Enum):
    """Timestamp attachment policy.

    NONE      — lines are stored as-is.
    PER_ENTRY — each line is prefixed with the time ``log()`` was called.
    PER_FLUSH — on flush, the stored content is replaced by one timestamp line.
    """

    NONE = "none"
    PER_ENTRY = "per_entry"
    PER_FLUSH = "per_flush"

    @classmethod
    def parse(cls, value: str | TimestampMode) -> TimestampMode:
        """Parse a mode from its name or one of the short aliases (log, flush)."""
        if isinstance(value, cls):
            return value
        key = _ALIASES.get(str(value).strip().lower().replace("-", "_"))
        if key is None:
            valid = ", ".join(sorted(_ALIASES))
            raise ValueError(f"Unknown timestamp mode {value!r} (expected one of: {valid})")
        return cls[key]


def local_now() -> datetime:
    return datetime.now().astimezone()


def _utc_offset(now: datetime) -> str:
    """Offset rendered as ' +HH:MM'; empty for naive datetimes."""
    offset = now.strftime("%z")
    if not offset:
        return ""
    return f" {offset[:3]}:{offset[3:5]}"


def format_entry(line: str, mode: TimestampMode, now: datetime) -> str:
    """Render one buffered line, newline-terminated."""
    if mode is TimestampMode.PER_ENTRY:
        return f"{now.strftime(ENTRY_TIMESTAMP_FORMAT)}{_utc_offset(now)}: {line}\n"
    return f"{line}\n"


def flush_header(now: datetime) -> str:
    return f"{now.strftime(FLUSH_TIMESTAMP_FORMAT)}\n"
