"""Local mirror: best-effort append of flushed content to a local file."""

from __future__ import annotations

import os

from logbucket.exceptions import LocalMirrorError


def append_to_mirror(path: str | os.PathLike[str], content: str) -> None:
    """Append *content* to *path*, creating the file if needed.

    Uses the platform default text encoding. The handle is closed before
    returning, on success or failure.
    """
    try:
        with open(path, "a") as fh:
            fh.write(content)
    except OSError as exc:
        raise LocalMirrorError(os.fspath(path), str(exc)) from exc
