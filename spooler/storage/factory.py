"""
Storage backend factory.
Provides configuration-driven backend selection.
"""

import logging
from functools import lru_cache

from spooler.config import StorageConfig, StorageProvider, get_settings
from spooler.storage.base import StorageBackend
from spooler.storage.facade import StorageFacade
from spooler.storage.local import LocalStorageBackend
from spooler.storage.remote import RemoteStorageBackend

logger = logging.getLogger(__name__)


def create_storage_backend(config: StorageConfig) -> StorageBackend:
    """
    Construct the backend selected by the storage configuration.

    Raises:
        ValueError: If the provider is unknown
    """
    if config.provider == StorageProvider.LOCAL:
        return LocalStorageBackend(base_path=config.base_path)
    elif config.provider == StorageProvider.REMOTE:
        return RemoteStorageBackend(
            bucket_name=config.bucket_name,
            endpoint_url=config.endpoint_url,
            region=config.region,
        )
    else:
        raise ValueError(f"Unknown storage provider: {config.provider}")


@lru_cache
def get_storage_facade() -> StorageFacade:
    """
    Get the process-wide storage facade.

    Uses LRU cache so the backend is constructed once; changing the
    provider requires a restart.
    """
    config = get_settings().storage_config()
    logger.info("Initializing %s storage backend", config.provider.value)
    return StorageFacade(create_storage_backend(config))


def get_storage() -> StorageFacade:
    """
    Dependency function for FastAPI.

    Usage:
        @app.post("/upload")
        async def upload(storage: StorageFacade = Depends(get_storage)):
            ...
    """
    return get_storage_facade()
