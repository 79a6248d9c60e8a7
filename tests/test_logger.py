"""Tests for the blocking Logger: construction, log, and the flush cycle."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from botocore.exceptions import NoRegionError

from logbucket.config import LoggerSettings
from logbucket.exceptions import (
    ConstructionError,
    DecodingError,
    LocalMirrorError,
    ObjectNotFoundError,
    RemoteReadError,
    RemoteWriteError,
)
from logbucket.logger import Logger
from logbucket.stores.memory import InMemoryBlobStore
from logbucket.testing import FlakyBlobStore
from logbucket.timestamps import TimestampMode

OBJECT = "logs.txt"

# ── Construction ─────────────────────────────────────────────────────────


class TestConstruction:
    def test_creates_missing_object_empty(self, store):
        Logger(store, OBJECT)
        assert store.exists(OBJECT)
        assert store.read(OBJECT) == b""

    def test_existing_object_untouched(self):
        store = FlakyBlobStore(InMemoryBlobStore({OBJECT: b"old\n"}))
        Logger(store, OBJECT)
        assert store.inner.read(OBJECT) == b"old\n"
        assert ("create", OBJECT) not in store.calls

    def test_defaults(self, store):
        logger = Logger(store, OBJECT)
        assert logger.object_name == OBJECT
        assert logger.timestamp_mode is TimestampMode.NONE
        assert logger.mirror_locally is False
        assert logger.pending == []

    def test_empty_object_name(self, store):
        with pytest.raises(ConstructionError):
            Logger(store, "")
        assert not store.exists("")

    def test_exists_failure_is_construction_error(self):
        store = FlakyBlobStore(InMemoryBlobStore())
        store.fail_next_exists()
        with pytest.raises(ConstructionError):
            Logger(store, OBJECT)

    def test_create_failure_is_construction_error(self):
        store = FlakyBlobStore(InMemoryBlobStore())
        store.fail_next_create()
        with pytest.raises(ConstructionError):
            Logger(store, OBJECT)
        assert not store.inner.exists(OBJECT)

    def test_timestamp_mode_accepts_alias(self, store):
        logger = Logger(store, OBJECT, timestamp_mode="flush")
        assert logger.timestamp_mode is TimestampMode.PER_FLUSH


# ── log() ────────────────────────────────────────────────────────────────


class TestLog:
    def test_log_does_not_touch_store(self):
        store = FlakyBlobStore(InMemoryBlobStore())
        logger = Logger(store, OBJECT)
        calls_before = list(store.calls)
        logger.log("hello")
        assert store.calls == calls_before
        assert logger.pending == ["hello\n"]
        assert len(logger) == 1

    def test_per_entry_stamps_at_log_time(self, store, clock):
        logger = Logger(store, OBJECT, timestamp_mode=TimestampMode.PER_ENTRY, clock=clock)
        logger.log("first")
        logger.log("second")
        assert logger.pending == [
            "2024-05-06 07:08:09.123456 +02:00: first\n",
            "2024-05-06 07:08:10.123456 +02:00: second\n",
        ]

    def test_mode_change_not_retroactive(self, store, fixed_clock):
        logger = Logger(store, OBJECT, clock=fixed_clock)
        logger.log("plain")
        logger.set_timestamp_mode(TimestampMode.PER_ENTRY)
        logger.log("stamped")
        assert logger.pending[0] == "plain\n"
        assert logger.pending[1].endswith(": stamped\n")

    def test_echo_prints_line(self, store, capsys):
        logger = Logger(store, OBJECT, echo=True)
        capsys.readouterr()  # drop construction diagnostics
        logger.log("visible")
        assert capsys.readouterr().out == "visible\n"

    def test_no_echo_by_default(self, store, capsys):
        logger = Logger(store, OBJECT)
        capsys.readouterr()
        logger.log("quiet")
        assert capsys.readouterr().out == ""


# ── flush() ──────────────────────────────────────────────────────────────


class TestFlush:
    def test_none_mode_example(self, store):
        logger = Logger(store, OBJECT)
        logger.log("a")
        logger.log("b")
        result = logger.flush()
        assert store.get_text(OBJECT) == "a\nb\n"
        assert logger.pending == []
        assert result.entries == 2
        assert result.bytes_written == 4
        assert result.mirrored is False

    def test_appends_to_existing_content(self):
        store = InMemoryBlobStore({OBJECT: b"a\nb\n"})
        logger = Logger(store, OBJECT)
        logger.log("c")
        logger.flush()
        logger.log("d")
        logger.flush()
        assert store.get_text(OBJECT) == "a\nb\nc\nd\n"

    def test_per_entry_stamps_reflect_log_time_not_flush_time(self, store, clock):
        logger = Logger(store, OBJECT, timestamp_mode=TimestampMode.PER_ENTRY, clock=clock)
        logger.log("a")
        logger.log("b")
        logger.flush()
        assert store.get_text(OBJECT) == (
            "2024-05-06 07:08:09.123456 +02:00: a\n"
            "2024-05-06 07:08:10.123456 +02:00: b\n"
        )

    def test_per_flush_discards_prior_content(self, fixed_clock):
        store = InMemoryBlobStore({OBJECT: b"a\nb\n"})
        logger = Logger(store, OBJECT, timestamp_mode=TimestampMode.PER_FLUSH, clock=fixed_clock)
        logger.log("c")
        logger.flush()
        assert store.get_text(OBJECT) == "2024-05-06 07:08:09\nc\n"

    def test_per_flush_uses_flush_time(self, store, clock):
        logger = Logger(store, OBJECT, timestamp_mode=TimestampMode.PER_FLUSH, clock=clock)
        logger.log("c")
        logger.flush()
        # log() consumed 07:08:09, flush() reads the clock again
        assert store.get_text(OBJECT) == "2024-05-06 07:08:10\nc\n"

    def test_empty_flush_keeps_content(self):
        store = InMemoryBlobStore({OBJECT: b"a\n"})
        result = Logger(store, OBJECT).flush()
        assert store.get_text(OBJECT) == "a\n"
        assert result.entries == 0

    def test_multibyte_remote_content_preserved(self):
        store = InMemoryBlobStore({OBJECT: "naïve café ✓\n".encode("utf-8")})
        logger = Logger(store, OBJECT)
        logger.log("日本")
        logger.flush()
        assert store.get_text(OBJECT) == "naïve café ✓\n日本\n"

    def test_write_failure_keeps_pending_for_retry(self):
        store = FlakyBlobStore(InMemoryBlobStore())
        logger = Logger(store, OBJECT)
        logger.log("a")
        logger.log("b")
        store.fail_next_write()

        with pytest.raises(RemoteWriteError):
            logger.flush()
        assert logger.pending == ["a\n", "b\n"]
        assert store.inner.read(OBJECT) == b""

        logger.log("c")
        logger.flush()
        assert store.inner.get_text(OBJECT) == "a\nb\nc\n"
        assert logger.pending == []

    def test_read_failure_keeps_pending(self):
        store = FlakyBlobStore(InMemoryBlobStore({OBJECT: b"x\n"}))
        logger = Logger(store, OBJECT)
        logger.log("a")
        store.fail_next_read()
        with pytest.raises(RemoteReadError) as exc_info:
            logger.flush()
        assert exc_info.value.object_name == OBJECT
        assert logger.pending == ["a\n"]
        assert ("write", OBJECT) not in store.calls

    def test_missing_object_is_read_error(self):
        backing = InMemoryBlobStore()
        logger = Logger(backing, OBJECT)
        logger.log("a")
        backing._objects.clear()
        with pytest.raises(RemoteReadError) as exc_info:
            logger.flush()
        assert isinstance(exc_info.value.__cause__, ObjectNotFoundError)
        assert logger.pending == ["a\n"]

    def test_invalid_remote_bytes_is_decoding_error(self):
        store = InMemoryBlobStore({OBJECT: b"\xc3\x28"})
        logger = Logger(store, OBJECT)
        logger.log("a")
        with pytest.raises(DecodingError):
            logger.flush()
        assert logger.pending == ["a\n"]
        assert store.read(OBJECT) == b"\xc3\x28"

    def test_context_manager_does_not_flush(self, store):
        with Logger(store, OBJECT) as logger:
            logger.log("lost")
        assert store.read(OBJECT) == b""


# ── Local mirror ─────────────────────────────────────────────────────────


class TestLocalMirror:
    def test_mirror_appends_each_merged_content(self, store, in_tmp_cwd):
        logger = Logger(store, OBJECT, mirror_locally=True)
        logger.log("a")
        assert logger.flush().mirrored is True
        logger.log("b")
        logger.flush()
        # each flush appends the full merged object
        assert (in_tmp_cwd / OBJECT).read_text() == "a\n" + "a\nb\n"

    def test_save_local_copy_toggle(self, store, in_tmp_cwd):
        logger = Logger(store, OBJECT)
        logger.log("a")
        logger.flush()
        assert not (in_tmp_cwd / OBJECT).exists()
        logger.save_local_copy(True)
        logger.log("b")
        logger.flush()
        assert (in_tmp_cwd / OBJECT).read_text() == "a\nb\n"

    def test_mirror_failure_does_not_roll_back(self, store, in_tmp_cwd):
        name = "no-such-dir/logs.txt"
        logger = Logger(store, name, mirror_locally=True)
        logger.log("a")
        with pytest.raises(LocalMirrorError) as exc_info:
            logger.flush()
        assert exc_info.value.path == name
        assert store.get_text(name) == "a\n"
        assert logger.pending == []


# ── Factories ────────────────────────────────────────────────────────────


class TestFactories:
    def test_for_s3_client_error_is_construction_error(self):
        with patch("logbucket.stores.s3.boto3.client", side_effect=NoRegionError()):
            with pytest.raises(ConstructionError):
                Logger.for_s3("bucket", OBJECT)

    def test_from_settings(self, store):
        settings = LoggerSettings(
            bucket="bucket",
            object_name=OBJECT,
            region="us-east-2",
            timestamp_mode=TimestampMode.PER_ENTRY,
            mirror_locally=True,
        )
        with patch("logbucket.logger._build_s3_store", return_value=store) as build:
            logger = Logger.from_settings(settings)
        build.assert_called_once_with("bucket", "us-east-2", None)
        assert logger.timestamp_mode is TimestampMode.PER_ENTRY
        assert logger.mirror_locally is True
        assert store.exists(OBJECT)
