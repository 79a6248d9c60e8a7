"""Local directory blob store (development stand-in for a remote bucket)."""

from __future__ import annotations

from pathlib import Path

from logbucket.exceptions import ObjectNotFoundError, StoreUnreachableError
from logbucket.stores.base import BlobStore


class LocalDirectoryBlobStore(BlobStore):
    """One file per object under *base_dir*. Object names may contain '/'."""

    def __init__(self, base_dir: str | Path = "logs/objects") -> None:
        self.base_dir = Path(base_dir)

    def _path(self, name: str) -> Path:
        path = (self.base_dir / name).resolve()
        if not path.is_relative_to(self.base_dir.resolve()):
            raise StoreUnreachableError(f"Object name '{name}' escapes {self.base_dir}")
        return path

    def exists(self, name: str) -> bool:
        return self._path(name).is_file()

    def create(self, name: str, data: bytes) -> None:
        self.write(name, data)

    def read(self, name: str) -> bytes:
        path = self._path(name)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            raise ObjectNotFoundError(name) from None
        except OSError as exc:
            raise StoreUnreachableError(f"Cannot read {path}: {exc}") from exc

    def write(self, name: str, data: bytes) -> None:
        path = self._path(name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            raise StoreUnreachableError(f"Cannot write {path}: {exc}") from exc
