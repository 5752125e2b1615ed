"""
Remote object storage backend.
Supports AWS S3 and S3-compatible services like MinIO.
"""

import logging
from typing import Any, BinaryIO

import boto3
from boto3.exceptions import S3UploadFailedError
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from spooler.core.exceptions import ObjectNotFoundException, StorageException
from spooler.storage.base import StorageBackend
from spooler.storage.keys import validate_object_key
from spooler.storage.sniff import DEFAULT_CONTENT_TYPE

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}


def _error_code(error: ClientError) -> str | None:
    return error.response.get("Error", {}).get("Code")


class RemoteStorageBackend(StorageBackend):
    """
    S3-compatible object storage implementation.

    Credentials are resolved by boto3 from the ambient environment
    (environment variables, shared config, instance profile).
    """

    def __init__(
        self,
        bucket_name: str,
        endpoint_url: str | None = None,
        region: str | None = None,
        client: Any | None = None,
    ):
        """
        Initialize remote storage backend.

        Args:
            bucket_name: Bucket holding the print files
            endpoint_url: S3 endpoint URL (for MinIO, custom S3-compatible services)
            region: AWS region
            client: Pre-built S3 client, used instead of creating one
        """
        if not bucket_name:
            raise StorageException(
                message="Remote bucket name not configured",
                details={"required": "REMOTE_BUCKET_NAME"},
            )

        self.bucket_name = bucket_name

        if client is None:
            config = Config(
                signature_version="s3v4",
                retries={"max_attempts": 3, "mode": "standard"},
            )
            client = boto3.client(
                "s3",
                endpoint_url=endpoint_url,
                region_name=region,
                config=config,
            )
        self.client = client

    async def store(
        self,
        key: str,
        stream: BinaryIO,
        content_type: str = DEFAULT_CONTENT_TYPE,
    ) -> None:
        """
        Stream a file into the bucket.

        The object only becomes visible once the upload completes, so a
        failed copy never leaves a readable partial object.
        """
        validate_object_key(key)

        try:
            self.client.upload_fileobj(
                stream,
                self.bucket_name,
                key,
                ExtraArgs={
                    "ContentType": content_type,
                    "ContentDisposition": f'attachment; filename="{key}"',
                },
            )
        except (ClientError, BotoCoreError, S3UploadFailedError, OSError) as e:
            raise StorageException(
                message=f"Failed to upload file to remote storage: {e}",
                details={"key": key, "bucket": self.bucket_name},
            ) from e

        logger.debug("Stored %s in bucket %s (%s)", key, self.bucket_name, content_type)

    async def fetch(self, key: str) -> BinaryIO:
        """Open a streaming read of a remote object."""
        validate_object_key(key)

        try:
            response = self.client.get_object(
                Bucket=self.bucket_name,
                Key=key,
            )
        except ClientError as e:
            if _error_code(e) in NOT_FOUND_CODES:
                raise ObjectNotFoundException(key)
            raise StorageException(
                message=f"Failed to download file from remote storage: {e}",
                details={"key": key, "bucket": self.bucket_name},
            ) from e
        except BotoCoreError as e:
            raise StorageException(
                message=f"Failed to download file from remote storage: {e}",
                details={"key": key, "bucket": self.bucket_name},
            ) from e

        return response["Body"]

    async def delete(self, key: str) -> None:
        """Delete a remote object. Missing objects are an error."""
        validate_object_key(key)

        try:
            # S3 deletes are idempotent, so check existence first
            self.client.head_object(
                Bucket=self.bucket_name,
                Key=key,
            )
            self.client.delete_object(
                Bucket=self.bucket_name,
                Key=key,
            )
        except ClientError as e:
            if _error_code(e) in NOT_FOUND_CODES:
                raise ObjectNotFoundException(key)
            raise StorageException(
                message=f"Failed to delete file from remote storage: {e}",
                details={"key": key, "bucket": self.bucket_name},
            ) from e
        except BotoCoreError as e:
            raise StorageException(
                message=f"Failed to delete file from remote storage: {e}",
                details={"key": key, "bucket": self.bucket_name},
            ) from e

        logger.debug("Deleted %s from bucket %s", key, self.bucket_name)
