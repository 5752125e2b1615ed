"""
Object key validation and generation.

Keys are checked here before any backend is touched, so a rejected key
never causes a side effect.
"""

import os
import re
from pathlib import PurePosixPath, PureWindowsPath
from uuid import uuid4

from spooler.core.exceptions import ValidationException

ILLEGAL_KEY_CHARACTERS = frozenset('<>:"|?*')

# NUL and the other C0 control characters, plus DEL
CONTROL_CHARACTERS = frozenset(chr(code) for code in range(32)) | {"\x7f"}

# Compound extensions are matched before their last component
KNOWN_EXTENSIONS = (".gcode.3mf", ".3mf", ".stl")

_SAFE_EXTENSION = re.compile(r"^(\.[a-z0-9]+)+$")


def validate_object_key(key: str) -> None:
    """
    Reject keys that are unsafe to use as a storage path.

    Raises:
        ValidationException: If the key is empty, contains "..", is an
            absolute path, or contains a character from ILLEGAL_KEY_CHARACTERS
            or CONTROL_CHARACTERS.
    """
    if not key:
        raise ValidationException("Object key cannot be empty")

    if ".." in key:
        raise ValidationException(
            "Path traversal not allowed",
            details={"key": key},
        )

    if os.path.isabs(key) or PurePosixPath(key).is_absolute() or PureWindowsPath(key).is_absolute():
        raise ValidationException(
            "Absolute paths not allowed",
            details={"key": key},
        )

    if any(char in ILLEGAL_KEY_CHARACTERS or char in CONTROL_CHARACTERS for char in key):
        raise ValidationException(
            "Invalid characters in object key",
            details={"key": key},
        )


def is_within_root(root: str, full_path: str) -> bool:
    """
    Check that a joined path stays inside the storage root.

    The root must match on a path-separator boundary, so a root of
    "/data/foo" does not contain "/data/foobar/evil".
    """
    if full_path == root:
        return True
    prefix = root if root.endswith(os.sep) else root + os.sep
    return full_path.startswith(prefix)


def split_extension(filename: str) -> str:
    """
    Return the lower-cased extension of a filename.

    Known compound extensions such as ".gcode.3mf" are returned whole;
    anything else falls back to the last suffix.
    """
    name = os.path.basename(filename).lower()
    for extension in KNOWN_EXTENSIONS:
        if name.endswith(extension) and len(name) > len(extension):
            return extension
    return os.path.splitext(name)[1]


def generate_object_key(filename: str) -> str:
    """Build a collision-resistant key: a random id plus the original extension."""
    extension = split_extension(filename)
    if not _SAFE_EXTENSION.match(extension):
        extension = ""
    return f"{uuid4().hex}{extension}"
