"""S3 object store for file content.

Content is addressed by key inside one configured bucket. The store knows
nothing about project files; callers pick the key.
"""

import asyncio
import logging

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from app.core.config import Settings, settings
from app.exceptions.storage import ObjectStoreError

logger = logging.getLogger(__name__)

_MISSING_KEY_CODES = {"NoSuchKey", "404", "NotFound"}


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", ""))


class ObjectStore:
    """Put and get UTF-8 text objects in a single bucket."""

    def __init__(self, bucket_name: str, client):
        self.bucket_name = bucket_name
        self._client = client

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "ObjectStore":
        """Build a store with a boto3 client configured from settings."""
        if not config.s3_bucket_name:
            raise ObjectStoreError("Object storage is not configured (S3_BUCKET_NAME)")

        kwargs: dict = {
            "config": Config(
                region_name=config.s3_region,
                signature_version="s3v4",
                connect_timeout=config.s3_connect_timeout,
                read_timeout=config.s3_read_timeout,
                retries={"max_attempts": config.s3_max_attempts, "mode": "standard"},
            ),
        }
        if config.aws_access_key_id and config.aws_secret_access_key:
            kwargs["aws_access_key_id"] = config.aws_access_key_id
            kwargs["aws_secret_access_key"] = config.aws_secret_access_key
        if config.s3_endpoint_url:
            kwargs["endpoint_url"] = config.s3_endpoint_url

        return cls(config.s3_bucket_name, boto3.client("s3", **kwargs))

    async def put(self, key: str, content: str | bytes) -> str:
        """
        Write ``content`` under ``key``, replacing any existing object.

        Returns:
            The key written

        Raises:
            ObjectStoreError: If the upload fails
        """
        body = content.encode("utf-8") if isinstance(content, str) else content
        try:
            await asyncio.to_thread(
                self._client.put_object, Bucket=self.bucket_name, Key=key, Body=body
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("Error uploading %s/%s: %s", self.bucket_name, key, e)
            raise ObjectStoreError(f"Failed to upload {key}", key=key) from e

        logger.info("File uploaded successfully to %s/%s", self.bucket_name, key)
        return key

    async def get(self, key: str) -> str | None:
        """
        Read the whole object at ``key`` as text.

        Returns:
            The decoded content, or ``None`` if no object exists under ``key``

        Raises:
            ObjectStoreError: On any failure other than a missing key
        """
        try:
            return await asyncio.to_thread(self._read, key)
        except ClientError as e:
            if _error_code(e) in _MISSING_KEY_CODES:
                logger.info("No object at %s/%s", self.bucket_name, key)
                return None
            logger.error("Error fetching %s/%s: %s", self.bucket_name, key, e)
            raise ObjectStoreError(f"Failed to fetch {key}", key=key) from e
        except BotoCoreError as e:
            logger.error("Error fetching %s/%s: %s", self.bucket_name, key, e)
            raise ObjectStoreError(f"Failed to fetch {key}", key=key) from e
        except UnicodeDecodeError as e:
            logger.error("Object %s/%s is not valid UTF-8", self.bucket_name, key)
            raise ObjectStoreError(f"Content of {key} is not valid UTF-8", key=key) from e

    async def delete(self, key: str) -> None:
        """Remove the object at ``key``. Deleting a missing key succeeds."""
        try:
            await asyncio.to_thread(
                self._client.delete_object, Bucket=self.bucket_name, Key=key
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("Error deleting %s/%s: %s", self.bucket_name, key, e)
            raise ObjectStoreError(f"Failed to delete {key}", key=key) from e

    def _read(self, key: str) -> str:
        response = self._client.get_object(Bucket=self.bucket_name, Key=key)
        body = response["Body"]
        try:
            data = b"".join(body.iter_chunks())
        finally:
            body.close()
        return data.decode("utf-8")


def file_content_key(project_id: int, file_id: int) -> str:
    """Object key holding the content of one project file."""
    return f"projects/{project_id}/files/{file_id}"
