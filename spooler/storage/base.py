"""
Abstract storage backend interface.
Defines the contract for all storage implementations.
"""

from abc import ABC, abstractmethod
from typing import BinaryIO, Iterator

from spooler.storage.sniff import DEFAULT_CONTENT_TYPE

CHUNK_SIZE = 1024 * 1024  # 1MB


class StorageBackend(ABC):
    """
    Abstract base class for storage backends.

    The Local and Remote implementations expose the same three operations,
    so callers never need to know which one is configured.
    """

    @abstractmethod
    async def store(
        self,
        key: str,
        stream: BinaryIO,
        content_type: str = DEFAULT_CONTENT_TYPE,
    ) -> None:
        """
        Stream a file into storage under the given key.

        An existing object with the same key is overwritten.

        Args:
            key: Object key (already generated by the caller)
            stream: Binary file-like object to copy from
            content_type: Best-guess MIME type of the content

        Raises:
            ValidationException: If the key is unsafe
            StorageException: If the copy fails; no partial object is left
        """
        pass

    @abstractmethod
    async def fetch(self, key: str) -> BinaryIO:
        """
        Open a stored object for reading.

        The caller owns the returned handle and must close it.

        Raises:
            ObjectNotFoundException: If the object does not exist
            StorageException: If the backend cannot be read
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """
        Permanently remove a stored object.

        Raises:
            ObjectNotFoundException: If the object does not exist
            StorageException: If deletion fails for other reasons
        """
        pass


def iter_chunks(handle: BinaryIO, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
    """Yield a fetched handle in chunks, closing it once drained."""
    try:
        while chunk := handle.read(chunk_size):
            yield chunk
    finally:
        handle.close()
