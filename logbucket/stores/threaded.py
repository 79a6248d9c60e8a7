"""Run a blocking BlobStore from async code via asyncio.to_thread."""

from __future__ import annotations

import asyncio

from logbucket.stores.base import AsyncBlobStore, BlobStore


class ThreadedAsyncStore(AsyncBlobStore):
    """Thin async wrapper: every call runs in a worker thread.

    Lets each backend be written once, as a blocking store, and still be
    awaited without stalling the event loop.
    """

    def __init__(self, store: BlobStore) -> None:
        self._store = store

    @property
    def store(self) -> BlobStore:
        return self._store

    async def exists(self, name: str) -> bool:
        return await asyncio.to_thread(self._store.exists, name)

    async def create(self, name: str, data: bytes) -> None:
        await asyncio.to_thread(self._store.create, name, data)

    async def read(self, name: str) -> bytes:
        return await asyncio.to_thread(self._store.read, name)

    async def write(self, name: str, data: bytes) -> None:
        await asyncio.to_thread(self._store.write, name, data)
