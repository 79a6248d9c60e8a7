"""Custom exceptions for logbucket."""


class LogBucketError(Exception):
    """Base exception for all logbucket errors."""


class ConstructionError(LogBucketError):
    """Raised when a logger cannot be created (store unreachable, bad identity)."""


class RemoteReadError(LogBucketError):
    """Raised when the remote object cannot be read during a flush."""

    def __init__(self, object_name: str, reason: str):
        self.object_name = object_name
        self.reason = reason
        super().__init__(f"Failed to read remote object '{object_name}': {reason}")


class RemoteWriteError(LogBucketError):
    """Raised when the merged content cannot be written back during a flush."""

    def __init__(self, object_name: str, reason: str):
        self.object_name = object_name
        self.reason = reason
        super().__init__(f"Failed to write remote object '{object_name}': {reason}")


class DecodingError(LogBucketError):
    """Raised when the remote content is not valid UTF-8."""

    def __init__(self, object_name: str, position: int):
        self.object_name = object_name
        self.position = position
        super().__init__(
            f"Remote object '{object_name}' is not valid UTF-8 (invalid byte at offset {position})"
        )


class LocalMirrorError(LogBucketError):
    """Raised when appending flushed content to the local mirror file fails.

    The remote write has already succeeded when this is raised.
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to append to local mirror '{path}': {reason}")


# ── Store-level errors ──


class StoreError(LogBucketError):
    """Base exception raised by blob store backends."""


class ObjectNotFoundError(StoreError):
    """Raised when reading an object that does not exist."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Object '{name}' not found")


class StoreUnreachableError(StoreError):
    """Raised when the store cannot be contacted or rejects the request."""
