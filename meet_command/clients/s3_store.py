"""
Amazon S3 wrapper used as an opaque key-value byte store.
"""

from __future__ import annotations

import logging
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from meet_command.core.config import StorageSettings

logger = logging.getLogger(__name__)

_MISSING_KEY_CODES = {"NoSuchKey", "404", "NotFound"}


class S3ObjectStore:
    """Read and overwrite whole objects in a single bucket."""

    def __init__(self, settings: StorageSettings, client=None) -> None:
        if not settings.bucket_name:
            raise ValueError("An S3 bucket name must be configured.")
        self._bucket = settings.bucket_name
        self._client = client or boto3.client("s3", region_name=settings.region_name)

    def get(self, key: str) -> Optional[bytes]:
        """Return the object body, or ``None`` when missing or unreadable."""
        try:
            response = self._client.get_object(Bucket=self._bucket, Key=key)
            return response["Body"].read()
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code", "")
            if code in _MISSING_KEY_CODES:
                logger.debug("No object stored at %s", key)
            else:
                logger.error("Failed to read %s from S3: %s", key, code or exc)
            return None
        except BotoCoreError:
            logger.exception("Failed to read %s from S3", key)
            return None

    def put(self, key: str, data: bytes) -> bool:
        """Overwrite the object at ``key``. Returns ``False`` on failure."""
        try:
            self._client.put_object(Bucket=self._bucket, Key=key, Body=data)
        except (BotoCoreError, ClientError):
            logger.exception("Failed to write %s to S3", key)
            return False
        return True


__all__ = ["S3ObjectStore"]
