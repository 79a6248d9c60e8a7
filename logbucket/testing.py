"""Test doubles for logbucket — use in host-program tests.

Usage::

    from logbucket.stores import InMemoryBlobStore
    from logbucket.testing import FlakyBlobStore

    store = FlakyBlobStore(InMemoryBlobStore())
    store.fail_next_write()          # next write raises StoreUnreachableError
"""

from __future__ import annotations

from logbucket.exceptions import StoreUnreachableError
from logbucket.stores.base import BlobStore


class FlakyBlobStore(BlobStore):
    """Wraps a store and fails selected operations on demand.

    Parameters
    ----------
    inner:
        The store that serves calls when no failure is armed.
    """

    def __init__(self, inner: BlobStore) -> None:
        self.inner = inner
        self._failures = {"exists": 0, "create": 0, "read": 0, "write": 0}
        self._calls: list[tuple[str, str]] = []

    @property
    def calls(self) -> list[tuple[str, str]]:
        """(operation, name) pairs received — useful for assertions in tests."""
        return self._calls

    def fail_next_exists(self, times: int = 1) -> None:
        self._failures["exists"] += times

    def fail_next_create(self, times: int = 1) -> None:
        self._failures["create"] += times

    def fail_next_read(self, times: int = 1) -> None:
        self._failures["read"] += times

    def fail_next_write(self, times: int = 1) -> None:
        self._failures["write"] += times

    def _check(self, op: str, name: str) -> None:
        self._calls.append((op, name))
        if self._failures[op] > 0:
            self._failures[op] -= 1
            raise StoreUnreachableError(f"injected {op} failure for '{name}'")

    def exists(self, name: str) -> bool:
        self._check("exists", name)
        return self.inner.exists(name)

    def create(self, name: str, data: bytes) -> None:
        self._check("create", name)
        self.inner.create(name, data)

    def read(self, name: str) -> bytes:
        self._check("read", name)
        return self.inner.read(name)

    def write(self, name: str, data: bytes) -> None:
        self._check("write", name)
        self.inner.write(name, data)
