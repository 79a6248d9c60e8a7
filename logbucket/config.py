"""Environment-driven logger settings.

Reads from environment variables (explicit arguments win):
    LOGBUCKET_BUCKET          — bucket name (required)
    LOGBUCKET_OBJECT          — object key (required)
    LOGBUCKET_REGION          — AWS region (default: boto3 resolution)
    LOGBUCKET_ENDPOINT_URL    — custom S3 endpoint, e.g. MinIO
    LOGBUCKET_TIMESTAMP_MODE  — none | per_entry (log) | per_flush (flush)
    LOGBUCKET_MIRROR_LOCALLY  — 1/true/yes/on to append flushes to a local file
    LOGBUCKET_ECHO            — 1/true/yes/on to print each logged line
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

from logbucket.exceptions import ConstructionError
from logbucket.timestamps import TimestampMode

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in _TRUTHY


@dataclass
class LoggerSettings:
    bucket: str
    object_name: str
    region: str | None = None
    endpoint_url: str | None = None
    timestamp_mode: TimestampMode = TimestampMode.NONE
    mirror_locally: bool = False
    echo: bool = False

    @classmethod
    def from_env(
        cls,
        bucket: str | None = None,
        object_name: str | None = None,
    ) -> LoggerSettings:
        bucket = bucket or os.getenv("LOGBUCKET_BUCKET", "")
        object_name = object_name or os.getenv("LOGBUCKET_OBJECT", "")
        if not bucket or not object_name:
            raise ConstructionError(
                "Both LOGBUCKET_BUCKET and LOGBUCKET_OBJECT must be set "
                "(or passed explicitly)"
            )
        try:
            mode = TimestampMode.parse(os.getenv("LOGBUCKET_TIMESTAMP_MODE", "none"))
        except ValueError as exc:
            raise ConstructionError(str(exc)) from exc
        return cls(
            bucket=bucket,
            object_name=object_name,
            region=os.getenv("LOGBUCKET_REGION") or None,
            endpoint_url=os.getenv("LOGBUCKET_ENDPOINT_URL") or None,
            timestamp_mode=mode,
            mirror_locally=_env_flag("LOGBUCKET_MIRROR_LOCALLY"),
            echo=_env_flag("LOGBUCKET_ECHO"),
        )

    def logger_options(self) -> dict[str, Any]:
        """Keyword options accepted by Logger / AsyncLogger."""
        return {
            "timestamp_mode": self.timestamp_mode,
            "mirror_locally": self.mirror_locally,
            "echo": self.echo,
        }
