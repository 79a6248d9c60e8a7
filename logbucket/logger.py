"""Buffered loggers that merge pending lines into one remote object on flush.

Usage::

    from logbucket import Logger, TimestampMode

    logger = Logger.for_s3("my-bucket", "logs.txt")
    logger.set_timestamp_mode(TimestampMode.PER_ENTRY)
    logger.log("hello world")
    logger.flush()

    # asyncio
    alogger = await AsyncLogger.create(store, "logs.txt")
    alogger.log("hello world")
    await alogger.flush()

Nothing is flushed implicitly: entries still buffered when a logger is
dropped are lost.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable

import structlog
from botocore.exceptions import BotoCoreError

from logbucket.buffer import LogBuffer
from logbucket.exceptions import (
    ConstructionError,
    LocalMirrorError,
    RemoteReadError,
    RemoteWriteError,
    StoreError,
)
from logbucket.merge import merge_content
from logbucket.mirror import append_to_mirror
from logbucket.stores.base import AsyncBlobStore, BlobStore
from logbucket.stores.s3 import S3BlobStore
from logbucket.stores.threaded import ThreadedAsyncStore
from logbucket.timestamps import TimestampMode, format_entry, local_now

if TYPE_CHECKING:
    from logbucket.config import LoggerSettings

log = structlog.get_logger("logbucket.logger")


@dataclass
class FlushResult:
    """Outcome of one successful flush cycle."""

    object_name: str
    entries: int
    bytes_written: int
    mirrored: bool = False


def _build_s3_store(bucket: str, region: str | None, endpoint_url: str | None) -> BlobStore:
    try:
        return S3BlobStore(bucket, region=region, endpoint_url=endpoint_url)
    except (BotoCoreError, ValueError) as exc:
        raise ConstructionError(f"Cannot create S3 client for bucket '{bucket}': {exc}") from exc


class _BaseLogger:
    """State and merge steps shared by the blocking and async loggers."""

    def __init__(
        self,
        object_name: str,
        *,
        timestamp_mode: TimestampMode = TimestampMode.NONE,
        mirror_locally: bool = False,
        echo: bool = False,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if not object_name:
            raise ConstructionError("object_name must be a non-empty string")
        self._object_name = object_name
        self._buffer = LogBuffer()
        self._timestamp_mode = TimestampMode.parse(timestamp_mode)
        self._mirror_locally = mirror_locally
        self.echo = echo
        self._clock = clock or local_now

    # ── Properties ──

    @property
    def object_name(self) -> str:
        return self._object_name

    @property
    def timestamp_mode(self) -> TimestampMode:
        return self._timestamp_mode

    @property
    def mirror_locally(self) -> bool:
        return self._mirror_locally

    @property
    def pending(self) -> list[str]:
        """Buffered entries, formatted, in log order."""
        return self._buffer.snapshot()

    def __len__(self) -> int:
        return len(self._buffer)

    # ── Configuration ──

    def set_timestamp_mode(self, timestamp_mode: TimestampMode) -> None:
        """Change the policy for future log() and flush() calls."""
        self._timestamp_mode = TimestampMode.parse(timestamp_mode)

    def save_local_copy(self, local_copy: bool) -> None:
        """Enable or disable appending flushed content to a local file."""
        self._mirror_locally = local_copy

    # ── Logging ──

    def log(self, message: str) -> None:
        """Buffer one line. Never touches the store."""
        entry = format_entry(message, self._timestamp_mode, self._clock())
        if self.echo:
            print(entry, end="")
        self._buffer.append(entry)

    # ── Flush steps ──

    def _read_failed(self, exc: StoreError) -> RemoteReadError:
        log.warning("flush.read_failed", object=self._object_name, error=str(exc))
        return RemoteReadError(self._object_name, str(exc))

    def _write_failed(self, exc: StoreError) -> RemoteWriteError:
        log.warning("flush.write_failed", object=self._object_name, error=str(exc))
        return RemoteWriteError(self._object_name, str(exc))

    def _merge(self, raw: bytes, entries: list[str], mode: TimestampMode) -> str:
        return merge_content(self._object_name, raw, entries, mode, self._clock())

    def _complete(self, entries: list[str], data: bytes, merged: str) -> FlushResult:
        """Post-write bookkeeping: drain flushed entries, then mirror."""
        self._buffer.drain(len(entries))
        result = FlushResult(self._object_name, len(entries), len(data))
        log.info(
            "flush.completed",
            object=self._object_name,
            entries=result.entries,
            bytes=result.bytes_written,
        )
        if self._mirror_locally:
            try:
                append_to_mirror(self._object_name, merged)
            except LocalMirrorError as exc:
                log.warning("flush.mirror_failed", path=exc.path, error=exc.reason)
                raise
            result.mirrored = True
        return result

    def _warn_if_dropping(self) -> None:
        if self._buffer:
            log.warning(
                "logger.unflushed_entries_dropped",
                object=self._object_name,
                entries=len(self._buffer),
            )


class Logger(_BaseLogger):
    """Blocking logger. Construction and flush wait for the store.

    Not safe for concurrent use from several threads; serialize calls
    externally if needed.
    """

    def __init__(self, store: BlobStore, object_name: str, **options: Any) -> None:
        super().__init__(object_name, **options)
        self._store = store
        self._ensure_object()

    @classmethod
    def for_s3(
        cls,
        bucket: str,
        object_name: str,
        *,
        region: str | None = None,
        endpoint_url: str | None = None,
        **options: Any,
    ) -> Logger:
        return cls(_build_s3_store(bucket, region, endpoint_url), object_name, **options)

    @classmethod
    def from_settings(cls, settings: LoggerSettings) -> Logger:
        return cls.for_s3(
            settings.bucket,
            settings.object_name,
            region=settings.region,
            endpoint_url=settings.endpoint_url,
            **settings.logger_options(),
        )

    def _ensure_object(self) -> None:
        try:
            if not self._store.exists(self._object_name):
                log.info("logger.create_object", object=self._object_name)
                self._store.create(self._object_name, b"")
        except StoreError as exc:
            raise ConstructionError(
                f"Cannot initialise remote object '{self._object_name}': {exc}"
            ) from exc

    def flush(self) -> FlushResult:
        """Read the remote object, merge buffered entries, write it back.

        Raises RemoteReadError, DecodingError or RemoteWriteError with the
        buffer untouched; LocalMirrorError after the buffer was drained.
        """
        entries = self._buffer.snapshot()
        mode = self._timestamp_mode
        try:
            raw = self._store.read(self._object_name)
        except StoreError as exc:
            raise self._read_failed(exc) from exc

        merged = self._merge(raw, entries, mode)
        data = merged.encode("utf-8")
        try:
            self._store.write(self._object_name, data)
        except StoreError as exc:
            raise self._write_failed(exc) from exc

        return self._complete(entries, data, merged)

    def __enter__(self) -> Logger:
        return self

    def __exit__(self, *exc: object) -> None:
        self._warn_if_dropping()


class AsyncLogger(_BaseLogger):
    """Suspending logger. Use :meth:`create` to construct.

    ``log()`` stays synchronous; ``flush()`` is a coroutine. Concurrent
    flushes of one instance are serialized; lines logged while a flush is
    suspended are kept for the next one.
    """

    def __init__(
        self, store: AsyncBlobStore | BlobStore, object_name: str, **options: Any
    ) -> None:
        super().__init__(object_name, **options)
        if isinstance(store, BlobStore):
            store = ThreadedAsyncStore(store)
        self._store: AsyncBlobStore = store
        self._flush_lock = asyncio.Lock()

    @classmethod
    async def create(
        cls, store: AsyncBlobStore | BlobStore, object_name: str, **options: Any
    ) -> AsyncLogger:
        """Build a logger, creating the remote object empty if it is missing."""
        logger = cls(store, object_name, **options)
        await logger._ensure_object()
        return logger

    @classmethod
    async def for_s3(
        cls,
        bucket: str,
        object_name: str,
        *,
        region: str | None = None,
        endpoint_url: str | None = None,
        **options: Any,
    ) -> AsyncLogger:
        store = await asyncio.to_thread(_build_s3_store, bucket, region, endpoint_url)
        return await cls.create(store, object_name, **options)

    @classmethod
    async def from_settings(cls, settings: LoggerSettings) -> AsyncLogger:
        return await cls.for_s3(
            settings.bucket,
            settings.object_name,
            region=settings.region,
            endpoint_url=settings.endpoint_url,
            **settings.logger_options(),
        )

    async def _ensure_object(self) -> None:
        try:
            if not await self._store.exists(self._object_name):
                log.info("logger.create_object", object=self._object_name)
                await self._store.create(self._object_name, b"")
        except StoreError as exc:
            raise ConstructionError(
                f"Cannot initialise remote object '{self._object_name}': {exc}"
            ) from exc

    async def flush(self) -> FlushResult:
        """Async counterpart of :meth:`Logger.flush`, same merge result.

        Once started, a cycle runs to completion even if the caller is
        cancelled or times out, so a write that lands always drains its
        entries. The next flush waits for it on the lock.
        """
        cycle = asyncio.ensure_future(self._flush_cycle())
        try:
            return await asyncio.shield(cycle)
        except asyncio.CancelledError:
            cycle.add_done_callback(self._report_detached)
            raise

    def _report_detached(self, cycle: asyncio.Future[FlushResult]) -> None:
        if cycle.cancelled():
            return
        exc = cycle.exception()
        if exc is not None:
            log.warning("flush.detached_failed", object=self._object_name, error=str(exc))

    async def _flush_cycle(self) -> FlushResult:
        async with self._flush_lock:
            entries = self._buffer.snapshot()
            mode = self._timestamp_mode
            try:
                raw = await self._store.read(self._object_name)
            except StoreError as exc:
                raise self._read_failed(exc) from exc

            merged = self._merge(raw, entries, mode)
            data = merged.encode("utf-8")
            try:
                await self._store.write(self._object_name, data)
            except StoreError as exc:
                raise self._write_failed(exc) from exc

            return self._complete(entries, data, merged)

    async def __aenter__(self) -> AsyncLogger:
        return self

    async def __aexit__(self, *exc: object) -> None:
        self._warn_if_dropping()
