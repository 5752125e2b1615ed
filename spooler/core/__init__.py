"""Core utilities and exceptions for the Spooler API."""

from spooler.core.exceptions import (
    SpoolerAPIException,
    ValidationException,
    ObjectNotFoundException,
    PayloadTooLargeException,
    FormatException,
    StorageException,
)

__all__ = [
    "SpoolerAPIException",
    "ValidationException",
    "ObjectNotFoundException",
    "PayloadTooLargeException",
    "FormatException",
    "StorageException",
]
