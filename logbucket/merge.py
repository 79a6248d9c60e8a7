"""Read-merge-write core: combine remote content with buffered entries."""

from __future__ import annotations

from datetime import datetime

from logbucket.exceptions import DecodingError
from logbucket.timestamps import TimestampMode, flush_header


def decode_remote(object_name: str, raw: bytes) -> str:
    """Decode the full remote byte stream as UTF-8, rejecting invalid sequences."""
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodingError(object_name, exc.start) from exc


def merge_content(
    object_name: str,
    raw: bytes,
    entries: list[str],
    mode: TimestampMode,
    now: datetime,
) -> str:
    """Build the content to write back for one flush cycle.

    Under PER_FLUSH the existing remote content is discarded and replaced by a
    single timestamp line; otherwise it is kept as the base. Entries are
    appended in buffer order.
    """
    base = decode_remote(object_name, raw)
    if mode is TimestampMode.PER_FLUSH:
        base = flush_header(now)
    return base + "".join(entries)
