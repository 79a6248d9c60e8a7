"""Blob store backends."""

from logbucket.stores.base import AsyncBlobStore, BlobStore
from logbucket.stores.local import LocalDirectoryBlobStore
from logbucket.stores.memory import InMemoryBlobStore
from logbucket.stores.threaded import ThreadedAsyncStore

__all__ = [
    "AsyncBlobStore",
    "BlobStore",
    "InMemoryBlobStore",
    "LocalDirectoryBlobStore",
    "ThreadedAsyncStore",
]
