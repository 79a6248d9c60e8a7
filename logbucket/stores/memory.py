"""In-memory blob store."""

from __future__ import annotations

import threading

from logbucket.exceptions import ObjectNotFoundError
from logbucket.stores.base import BlobStore


class InMemoryBlobStore(BlobStore):
    """Dict-backed store. Safe to share between threads."""

    def __init__(self, objects: dict[str, bytes] | None = None) -> None:
        self._objects: dict[str, bytes] = dict(objects or {})
        self._lock = threading.Lock()

    def exists(self, name: str) -> bool:
        with self._lock:
            return name in self._objects

    def create(self, name: str, data: bytes) -> None:
        with self._lock:
            self._objects[name] = bytes(data)

    def read(self, name: str) -> bytes:
        with self._lock:
            try:
                return self._objects[name]
            except KeyError:
                raise ObjectNotFoundError(name) from None

    def write(self, name: str, data: bytes) -> None:
        with self._lock:
            self._objects[name] = bytes(data)

    def get_text(self, name: str) -> str:
        """Convenience accessor for tests and debugging."""
        return self.read(name).decode("utf-8")
