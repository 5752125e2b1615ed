"""
Local filesystem storage backend.
Stores print files on the local filesystem for development and simple deployments.
"""

import logging
import os
from functools import partial
from typing import BinaryIO

import aiofiles
import aiofiles.os

from spooler.core.exceptions import ObjectNotFoundException, StorageException, ValidationException
from spooler.storage.base import CHUNK_SIZE, StorageBackend
from spooler.storage.keys import is_within_root, validate_object_key
from spooler.storage.sniff import DEFAULT_CONTENT_TYPE

logger = logging.getLogger(__name__)

FILE_MODE = 0o644


class LocalStorageBackend(StorageBackend):
    """
    Local filesystem storage implementation.

    Objects are stored as files under an absolute root directory.
    """

    def __init__(self, base_path: str):
        """
        Initialize local storage backend.

        Args:
            base_path: Root directory for storage, created if missing
        """
        self.base_path = os.path.abspath(base_path)
        try:
            os.makedirs(self.base_path, mode=0o755, exist_ok=True)
        except OSError as e:
            raise StorageException(
                message=f"Failed to create storage directory: {e}",
                details={"base_path": self.base_path},
            ) from e

    def _get_full_path(self, key: str) -> str:
        """Validate a key and resolve it under the storage root."""
        validate_object_key(key)
        full_path = os.path.normpath(os.path.join(self.base_path, key))
        if full_path == self.base_path or not is_within_root(self.base_path, full_path):
            raise ValidationException(
                "Path traversal attempt detected",
                details={"key": key},
            )
        return full_path

    def _remove_partial(self, full_path: str) -> None:
        try:
            os.remove(full_path)
        except FileNotFoundError:
            pass
        except OSError:
            logger.exception("Failed to clean up partial file %s", full_path)

    async def store(
        self,
        key: str,
        stream: BinaryIO,
        content_type: str = DEFAULT_CONTENT_TYPE,
    ) -> None:
        """Stream a file to disk, removing it again if the copy fails."""
        full_path = self._get_full_path(key)

        try:
            os.makedirs(os.path.dirname(full_path), exist_ok=True)
        except OSError as e:
            raise StorageException(
                message=f"Failed to create file: {e}",
                details={"key": key},
            ) from e

        try:
            async with aiofiles.open(full_path, "wb", opener=partial(os.open, mode=FILE_MODE)) as f:
                while chunk := stream.read(CHUNK_SIZE):
                    await f.write(chunk)
        except Exception as e:
            self._remove_partial(full_path)
            raise StorageException(
                message=f"Failed to write file: {e}",
                details={"key": key},
            ) from e

        logger.debug("Stored %s (%s)", key, content_type)

    async def fetch(self, key: str) -> BinaryIO:
        """Open a stored file for reading."""
        full_path = self._get_full_path(key)

        try:
            return open(full_path, "rb")
        except (FileNotFoundError, IsADirectoryError):
            raise ObjectNotFoundException(key)
        except OSError as e:
            raise StorageException(
                message=f"Failed to open file: {e}",
                details={"key": key},
            ) from e

    async def delete(self, key: str) -> None:
        """Delete a stored file. Missing files are an error."""
        full_path = self._get_full_path(key)

        try:
            await aiofiles.os.remove(full_path)
        except (FileNotFoundError, IsADirectoryError):
            raise ObjectNotFoundException(key)
        except OSError as e:
            raise StorageException(
                message=f"Failed to delete file: {e}",
                details={"key": key},
            ) from e

        # Try to remove empty parent directories
        parent = os.path.dirname(full_path)
        while parent != self.base_path and is_within_root(self.base_path, parent):
            try:
                os.rmdir(parent)  # Only removes if empty
            except OSError:
                break
            parent = os.path.dirname(parent)

        logger.debug("Deleted %s", key)
