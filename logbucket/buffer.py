"""In-process buffer of pending log lines."""

from __future__ import annotations


class LogBuffer:
    """Ordered sequence of formatted lines waiting to be flushed.

    Owned by exactly one logger; not synchronized.
    """

    def __init__(self) -> None:
        self._entries: list[str] = []

    def append(self, entry: str) -> None:
        self._entries.append(entry)

    def snapshot(self) -> list[str]:
        """Return a copy of the buffered entries, in log order."""
        return list(self._entries)

    def drain(self, count: int) -> None:
        """Remove the first *count* entries (the ones a flush just persisted).

        Entries appended after the flush took its snapshot are kept.
        """
        if count < 0 or count > len(self._entries):
            raise ValueError(f"cannot drain {count} of {len(self._entries)} entries")
        del self._entries[:count]

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)
