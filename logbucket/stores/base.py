"""Blob store abstract interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod


class BlobStore(ABC):
    """Blocking access to named objects, read and written whole."""

    @abstractmethod
    def exists(self, name: str) -> bool:
        """Return True if the object exists."""
        ...

    @abstractmethod
    def create(self, name: str, data: bytes) -> None:
        """Create the object with initial content."""
        ...

    @abstractmethod
    def read(self, name: str) -> bytes:
        """Return the full object content. Raises ObjectNotFoundError if absent."""
        ...

    @abstractmethod
    def write(self, name: str, data: bytes) -> None:
        """Overwrite the object with *data*."""
        ...


class AsyncBlobStore(ABC):
    """Suspending counterpart of :class:`BlobStore`."""

    @abstractmethod
    async def exists(self, name: str) -> bool: ...

    @abstractmethod
    async def create(self, name: str, data: bytes) -> None: ...

    @abstractmethod
    async def read(self, name: str) -> bytes: ...

    @abstractmethod
    async def write(self, name: str, data: bytes) -> None: ...
