"""S3 blob store backed by boto3."""

from __future__ import annotations

from typing import Any

import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError

from logbucket.exceptions import ObjectNotFoundError, StoreUnreachableError
from logbucket.stores.base import BlobStore

log = structlog.get_logger("logbucket.stores.s3")

_NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}


def _error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", ""))


class S3BlobStore(BlobStore):
    """One S3 bucket, objects addressed by key.

    Credentials come from boto3's default provider chain unless a
    pre-configured *client* is injected.
    """

    def __init__(
        self,
        bucket: str,
        region: str | None = None,
        endpoint_url: str | None = None,
        client: Any = None,
    ) -> None:
        self.bucket = bucket
        self.client = client or boto3.client(
            "s3", region_name=region, endpoint_url=endpoint_url
        )

    def exists(self, name: str) -> bool:
        try:
            self.client.head_object(Bucket=self.bucket, Key=name)
            return True
        except ClientError as exc:
            if _error_code(exc) in _NOT_FOUND_CODES:
                return False
            raise StoreUnreachableError(f"head_object s3://{self.bucket}/{name}: {exc}") from exc
        except BotoCoreError as exc:
            raise StoreUnreachableError(f"head_object s3://{self.bucket}/{name}: {exc}") from exc

    def create(self, name: str, data: bytes) -> None:
        log.info("s3.create_object", bucket=self.bucket, key=name)
        self.write(name, data)

    def read(self, name: str) -> bytes:
        try:
            resp = self.client.get_object(Bucket=self.bucket, Key=name)
            return resp["Body"].read()
        except ClientError as exc:
            if _error_code(exc) in _NOT_FOUND_CODES:
                raise ObjectNotFoundError(name) from exc
            raise StoreUnreachableError(f"get_object s3://{self.bucket}/{name}: {exc}") from exc
        except BotoCoreError as exc:
            raise StoreUnreachableError(f"get_object s3://{self.bucket}/{name}: {exc}") from exc

    def write(self, name: str, data: bytes) -> None:
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=name,
                Body=data,
                ContentType="text/plain; charset=utf-8",
            )
        except (ClientError, BotoCoreError) as exc:
            raise StoreUnreachableError(f"put_object s3://{self.bucket}/{name}: {exc}") from exc
