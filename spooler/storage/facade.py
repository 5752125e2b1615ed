"""
Storage facade used by request handlers.
Validates keys and sniffs content before delegating to the configured backend.
"""

import logging
from typing import BinaryIO

from spooler.core.exceptions import StorageException
from spooler.storage.base import StorageBackend
from spooler.storage.keys import validate_object_key
from spooler.storage.sniff import sniff_content_type

logger = logging.getLogger(__name__)


class StorageFacade:
    """Single entry point for storing, fetching and deleting print files."""

    def __init__(self, backend: StorageBackend):
        self.backend = backend

    async def store(self, key: str, stream: BinaryIO) -> None:
        validate_object_key(key)
        try:
            content_type, replay = sniff_content_type(stream)
        except OSError as e:
            raise StorageException(
                message=f"Failed to read upload: {e}",
                details={"key": key},
            ) from e
        await self.backend.store(key, replay, content_type)
        logger.info("Stored object %s (%s)", key, content_type)

    async def fetch(self, key: str) -> BinaryIO:
        validate_object_key(key)
        return await self.backend.fetch(key)

    async def delete(self, key: str) -> None:
        validate_object_key(key)
        await self.backend.delete(key)
        logger.info("Deleted object %s", key)
