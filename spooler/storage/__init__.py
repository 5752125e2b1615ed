"""
Storage abstraction layer for the Spooler API.
Supports two backends: Local filesystem and remote S3-compatible object storage.
"""

from spooler.storage.base import StorageBackend, iter_chunks
from spooler.storage.facade import StorageFacade
from spooler.storage.factory import create_storage_backend, get_storage, get_storage_facade
from spooler.storage.keys import generate_object_key, is_within_root, validate_object_key
from spooler.storage.local import LocalStorageBackend
from spooler.storage.remote import RemoteStorageBackend
from spooler.storage.sniff import SniffResult, detect_content_type, sniff_content_type

__all__ = [
    "StorageBackend",
    "StorageFacade",
    "LocalStorageBackend",
    "RemoteStorageBackend",
    "create_storage_backend",
    "get_storage",
    "get_storage_facade",
    "generate_object_key",
    "is_within_root",
    "validate_object_key",
    "iter_chunks",
    "SniffResult",
    "detect_content_type",
    "sniff_content_type",
]
