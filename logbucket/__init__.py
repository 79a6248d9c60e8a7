"""logbucket: buffered log lines merged into a single remote blob on flush."""

__version__ = "0.1.0"

from logbucket.buffer import LogBuffer
from logbucket.config import LoggerSettings
from logbucket.exceptions import (
    ConstructionError,
    DecodingError,
    LocalMirrorError,
    LogBucketError,
    ObjectNotFoundError,
    RemoteReadError,
    RemoteWriteError,
    StoreError,
    StoreUnreachableError,
)
from logbucket.logger import AsyncLogger, FlushResult, Logger
from logbucket.merge import merge_content
from logbucket.stores.base import AsyncBlobStore, BlobStore
from logbucket.timestamps import TimestampMode

__all__ = [
    "AsyncBlobStore",
    "AsyncLogger",
    "BlobStore",
    "ConstructionError",
    "DecodingError",
    "FlushResult",
    "LocalMirrorError",
    "LogBucketError",
    "LogBuffer",
    "Logger",
    "LoggerSettings",
    "ObjectNotFoundError",
    "RemoteReadError",
    "RemoteWriteError",
    "StoreError",
    "StoreUnreachableError",
    "TimestampMode",
    "merge_content",
]
