"""
Tests for content type sniffing.
"""

import io

import pytest

from spooler.storage.sniff import (
    DEFAULT_CONTENT_TYPE,
    SNIFF_LENGTH,
    detect_content_type,
    sniff_content_type,
)


class TrickleStream(io.RawIOBase):
    """Stream that returns at most a few bytes per read."""

    def __init__(self, data: bytes, step: int = 7):
        self._data = io.BytesIO(data)
        self._step = step

    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        if size is None or size < 0:
            size = self._step
        return self._data.read(min(size, self._step))


def test_sniff_empty_stream():
    """Test that empty input is octet-stream with an empty replay stream."""
    result = sniff_content_type(io.BytesIO(b""))

    assert result.mime_type == DEFAULT_CONTENT_TYPE
    assert result.stream.read() == b""


@pytest.mark.parametrize(
    "size",
    [1, 100, SNIFF_LENGTH - 1, SNIFF_LENGTH, SNIFF_LENGTH + 1, 5 * SNIFF_LENGTH + 3],
)
def test_sniff_replays_all_bytes(size: int):
    """Test that draining the returned stream reproduces the input exactly."""
    data = bytes(i % 251 for i in range(size))

    result = sniff_content_type(io.BytesIO(data))

    assert result.stream.read() == data


def test_sniff_replays_short_reads():
    """Test that a source returning short reads still sniffs and replays fully."""
    data = b"solid part\n" + b"facet normal 0 0 1\n" * 100

    result = sniff_content_type(TrickleStream(data))

    assert result.mime_type == "text/plain; charset=utf-8"
    chunks = []
    while chunk := result.stream.read(64):
        chunks.append(chunk)
    assert b"".join(chunks) == data


def test_sniff_consumes_at_most_sniff_length():
    """Test that only the peeked prefix is read from the source before replay."""
    source = io.BytesIO(b"x" * (SNIFF_LENGTH * 3))

    sniff_content_type(source)

    assert source.tell() == SNIFF_LENGTH


@pytest.mark.parametrize(
    "data,expected",
    [
        (b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR", "image/png"),
        (b"PK\x03\x04\x14\x00\x00\x00", "application/zip"),
        (b"solid cube\nfacet normal 0 0 1\n", "text/plain; charset=utf-8"),
        (b"\x00" * 80 + b"\x0c\x00\x00\x00", DEFAULT_CONTENT_TYPE),
        (b"  <html><body>hi</body></html>", "text/html; charset=utf-8"),
        (b"<?xml version='1.0'?><model/>", "text/xml; charset=utf-8"),
        (b"%PDF-1.7\n", "application/pdf"),
        (b"GIF89a\x01\x00", "image/gif"),
        (b"\xff\xd8\xff\xe0", "image/jpeg"),
        (b"\x1f\x8b\x08\x00", "application/x-gzip"),
        (b"RIFF\x24\x00\x00\x00WAVEfmt ", "audio/wave"),
        (b"\x00\x00\x00\x18ftypisom\x00\x00\x02\x00isommp41", "video/mp4"),
        (b"\xef\xbb\xbfhello", "text/plain; charset=utf-8"),
        (b"\x00asm\x01\x00\x00\x00", "application/wasm"),
    ],
)
def test_detect_content_type(data: bytes, expected: str):
    """Test classification of common signatures."""
    assert detect_content_type(data) == expected


def test_detect_content_type_empty():
    """Test that empty input is octet-stream."""
    assert detect_content_type(b"") == DEFAULT_CONTENT_TYPE
