"""
Tests for object key validation and generation.
"""

import pytest

from spooler.core.exceptions import ValidationException
from spooler.storage.keys import (
    generate_object_key,
    is_within_root,
    split_extension,
    validate_object_key,
)


@pytest.mark.parametrize(
    "key",
    [
        "model.stl",
        "3f2a9c.gcode.3mf",
        "prints/2024/part.3mf",
        "file with spaces.stl",
    ],
)
def test_valid_keys_accepted(key: str):
    """Test that ordinary keys pass validation."""
    validate_object_key(key)


@pytest.mark.parametrize(
    "key",
    [
        "",
        "../etc/passwd",
        "prints/../../secret",
        "a..b.stl",
        "/etc/passwd",
        "model<1>.stl",
        'model".stl',
        "model|pipe.stl",
        "model?.stl",
        "model*.stl",
        "C:model.stl",
        "abc\x00.stl",
        "model\r\ninjected.stl",
        "tab\tname.stl",
        "del\x7f.stl",
    ],
)
def test_unsafe_keys_rejected(key: str):
    """Test that empty, traversal, absolute, illegal-character and control-character keys are rejected."""
    with pytest.raises(ValidationException) as exc_info:
        validate_object_key(key)

    assert exc_info.value.status_code == 400


def test_is_within_root_accepts_children():
    """Test containment for paths below the root."""
    assert is_within_root("/data/foo", "/data/foo/model.stl")
    assert is_within_root("/data/foo", "/data/foo/nested/model.stl")
    assert is_within_root("/data/foo", "/data/foo")


def test_is_within_root_requires_separator_boundary():
    """Test that a sibling sharing the root as a string prefix is rejected."""
    assert not is_within_root("/data/foo", "/data/foobar/evil")
    assert not is_within_root("/data/foo", "/data/other")


@pytest.mark.parametrize(
    "filename,expected",
    [
        ("model.stl", ".stl"),
        ("MODEL.STL", ".stl"),
        ("part.3mf", ".3mf"),
        ("job.gcode.3mf", ".gcode.3mf"),
        ("Job.GCODE.3MF", ".gcode.3mf"),
        ("notes.txt", ".txt"),
        ("README", ""),
    ],
)
def test_split_extension(filename: str, expected: str):
    """Test extension extraction including the compound .gcode.3mf."""
    assert split_extension(filename) == expected


def test_generate_object_key_keeps_extension():
    """Test generated keys carry the original extension and pass validation."""
    key = generate_object_key("benchy.gcode.3mf")

    assert key.endswith(".gcode.3mf")
    validate_object_key(key)


def test_generate_object_key_is_unique():
    """Test that repeated uploads of the same name get distinct keys."""
    keys = {generate_object_key("model.stl") for _ in range(100)}

    assert len(keys) == 100


def test_generate_object_key_drops_unsafe_extension():
    """Test that an extension with illegal characters is not carried over."""
    key = generate_object_key("model.st*l")

    assert "*" not in key
    validate_object_key(key)
