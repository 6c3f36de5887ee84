"""Amazon S3 storage backed by :mod:`boto3`."""

from __future__ import annotations

import logging
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..config import Settings
from ..exceptions import ConfigurationError, ObjectNotFoundError, StorageError
from .base import ObjectLocator

LOGGER = logging.getLogger("pdfsigstrip.storage")

PDF_CONTENT_TYPE = "application/pdf"
_NOT_FOUND_CODES = {"NoSuchKey", "NoSuchBucket", "NotFound", "404"}


def create_s3_client(settings: Settings) -> Any:
    """Create an S3 client from ``settings``.

    Production uses the default credential chain; otherwise the static keys
    from the settings are required. A custom endpoint switches to path-style
    addressing so S3-compatible servers work.
    """

    options: dict[str, Any] = {"region_name": settings.aws_region}

    if not settings.aws_production:
        if not settings.aws_access_key_id or not settings.aws_secret_access_key:
            raise ConfigurationError(
                "AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY are required when AWS_PRODUCTION is false"
            )
        options["aws_access_key_id"] = settings.aws_access_key_id
        options["aws_secret_access_key"] = settings.aws_secret_access_key

    if settings.aws_endpoint:
        options["endpoint_url"] = settings.aws_endpoint
        options["config"] = Config(s3={"addressing_style": "path"})

    return boto3.client("s3", **options)


class S3Storage:
    """Object storage implementation that uses an S3 client."""

    def __init__(self, client: Any) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "S3Storage":
        return cls(create_s3_client(settings))

    def fetch(self, locator: ObjectLocator) -> bytes:
        LOGGER.info("Downloading %s", locator.uri)
        try:
            response = self._client.get_object(Bucket=locator.bucket, Key=locator.key)
            body = response["Body"]
            try:
                data = body.read()
            finally:
                body.close()
        except ClientError as exc:
            code = str(exc.response.get("Error", {}).get("Code", ""))
            if code in _NOT_FOUND_CODES:
                raise ObjectNotFoundError(f"Object not found: {locator.uri}") from exc
            raise StorageError(f"Unable to download {locator.uri}: {exc}") from exc
        except BotoCoreError as exc:
            raise StorageError(f"Unable to download {locator.uri}: {exc}") from exc

        LOGGER.info("Downloaded %d byte(s) from %s", len(data), locator.uri)
        return data

    def store(self, locator: ObjectLocator, data: bytes) -> None:
        LOGGER.info("Uploading to %s", locator.uri)
        try:
            self._client.put_object(
                Bucket=locator.bucket,
                Key=locator.key,
                Body=data,
                ContentType=PDF_CONTENT_TYPE,
            )
        except (ClientError, BotoCoreError) as exc:
            raise StorageError(f"Unable to upload {locator.uri}: {exc}") from exc
        LOGGER.info("Upload complete: %s", locator.uri)


__all__ = ["S3Storage", "create_s3_client", "PDF_CONTENT_TYPE"]
