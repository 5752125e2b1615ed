"""
Content type sniffing for upload streams.

Classification follows the WHATWG MIME sniffing signature table. The bytes
inspected are replayed to the caller, so sniffing never loses data.
"""

import io
from typing import BinaryIO, Callable, NamedTuple

SNIFF_LENGTH = 512
DEFAULT_CONTENT_TYPE = "application/octet-stream"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"

_WHITESPACE = b"\t\n\x0c\r "
_TAG_TERMINATORS = b" >"

_HTML_PATTERNS = (
    b"<!DOCTYPE HTML", b"<HTML", b"<HEAD", b"<SCRIPT", b"<IFRAME", b"<H1",
    b"<DIV", b"<FONT", b"<TABLE", b"<A", b"<STYLE", b"<TITLE", b"<B",
    b"<BODY", b"<BR", b"<P", b"<!--",
)

_BINARY_BYTES = frozenset(
    list(range(0x00, 0x09)) + [0x0B] + list(range(0x0E, 0x1B)) + list(range(0x1C, 0x20))
)

Matcher = Callable[[bytes], "str | None"]


def _skip_whitespace(data: bytes) -> bytes:
    return data.lstrip(_WHITESPACE)


def _html(data: bytes) -> str | None:
    data = _skip_whitespace(data)
    for pattern in _HTML_PATTERNS:
        end = len(pattern)
        if len(data) < end + 1:
            continue
        if data[:end].upper() == pattern and data[end] in _TAG_TERMINATORS:
            return "text/html; charset=utf-8"
    return None


def _exact(signature: bytes, content_type: str) -> Matcher:
    def match(data: bytes) -> str | None:
        return content_type if data.startswith(signature) else None
    return match


def _masked(mask: bytes, pattern: bytes, content_type: str, skip_ws: bool = False) -> Matcher:
    def match(data: bytes) -> str | None:
        if skip_ws:
            data = _skip_whitespace(data)
        if len(data) < len(pattern):
            return None
        if all((data[i] & mask[i]) == pattern[i] for i in range(len(pattern))):
            return content_type
        return None
    return match


def _mp4(data: bytes) -> str | None:
    if len(data) < 12:
        return None
    box_size = int.from_bytes(data[:4], "big")
    if len(data) < box_size or box_size % 4 != 0:
        return None
    if data[4:8] != b"ftyp":
        return None
    for start in range(8, box_size, 4):
        if start == 12:
            # minor version field
            continue
        if data[start:start + 3] == b"mp4":
            return "video/mp4"
    return None


def _text(data: bytes) -> str | None:
    if any(byte in _BINARY_BYTES for byte in _skip_whitespace(data)):
        return None
    return TEXT_CONTENT_TYPE


_RIFF_MASK = b"\xff\xff\xff\xff\x00\x00\x00\x00\xff\xff\xff\xff"

# Evaluated in order; the first match wins.
_MATCHERS: tuple[Matcher, ...] = (
    _html,
    _masked(b"\xff" * 5, b"<?xml", "text/xml; charset=utf-8", skip_ws=True),
    _exact(b"%PDF-", "application/pdf"),
    _exact(b"%!PS-Adobe-", "application/postscript"),
    _exact(b"\xfe\xff", "text/plain; charset=utf-16be"),
    _exact(b"\xff\xfe", "text/plain; charset=utf-16le"),
    _exact(b"\xef\xbb\xbf", TEXT_CONTENT_TYPE),
    _exact(b"\x00\x00\x01\x00", "image/x-icon"),
    _exact(b"\x00\x00\x02\x00", "image/x-icon"),
    _exact(b"BM", "image/bmp"),
    _exact(b"GIF87a", "image/gif"),
    _exact(b"GIF89a", "image/gif"),
    _masked(_RIFF_MASK + b"\xff\xff", b"RIFF\x00\x00\x00\x00WEBPVP", "image/webp"),
    _exact(b"\x89PNG\x0d\x0a\x1a\x0a", "image/png"),
    _exact(b"\xff\xd8\xff", "image/jpeg"),
    _masked(_RIFF_MASK, b"FORM\x00\x00\x00\x00AIFF", "audio/aiff"),
    _exact(b".snd", "audio/basic"),
    _exact(b"ID3", "audio/mpeg"),
    _exact(b"OggS\x00", "application/ogg"),
    _exact(b"MThd\x00\x00\x00\x06", "audio/midi"),
    _masked(_RIFF_MASK, b"RIFF\x00\x00\x00\x00AVI ", "video/avi"),
    _masked(_RIFF_MASK, b"RIFF\x00\x00\x00\x00WAVE", "audio/wave"),
    _mp4,
    _exact(b"\x1a\x45\xdf\xa3", "video/webm"),
    _masked(b"\x00" * 34 + b"\xff\xff", b"\x00" * 34 + b"LP", "application/vnd.ms-fontobject"),
    _exact(b"\x00\x01\x00\x00", "font/ttf"),
    _exact(b"OTTO", "font/otf"),
    _exact(b"ttcf", "font/collection"),
    _exact(b"wOFF", "font/woff"),
    _exact(b"wOF2", "font/woff2"),
    _exact(b"\x1f\x8b\x08", "application/x-gzip"),
    _exact(b"PK\x03\x04", "application/zip"),
    _exact(b"Rar!\x1a\x07\x00", "application/x-rar-compressed"),
    _exact(b"Rar!\x1a\x07\x01\x00", "application/x-rar-compressed"),
    _exact(b"\x00asm", "application/wasm"),
    _text,
)


class SniffResult(NamedTuple):
    """Detected MIME type plus a stream yielding the full original content."""
    mime_type: str
    stream: BinaryIO


class ReplayStream(io.RawIOBase):
    """
    Read-only stream that yields a peeked prefix, then the rest of the source.

    Draining it produces exactly the bytes of the source stream in order.
    """

    def __init__(self, prefix: bytes, source: BinaryIO):
        super().__init__()
        self._prefix = prefix
        self._offset = 0
        self._source = source

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        size = len(buffer)
        if size == 0:
            return 0

        remaining = len(self._prefix) - self._offset
        if remaining > 0:
            count = min(size, remaining)
            buffer[:count] = self._prefix[self._offset:self._offset + count]
            self._offset += count
            return count

        data = self._source.read(size)
        if not data:
            return 0
        buffer[:len(data)] = data
        return len(data)


def detect_content_type(data: bytes) -> str:
    """
    Classify content by its leading bytes.

    At most SNIFF_LENGTH bytes are considered. Empty input is reported as
    application/octet-stream.
    """
    data = data[:SNIFF_LENGTH]
    if not data:
        return DEFAULT_CONTENT_TYPE

    for matcher in _MATCHERS:
        content_type = matcher(data)
        if content_type:
            return content_type

    return DEFAULT_CONTENT_TYPE


def _read_prefix(stream: BinaryIO, size: int) -> bytes:
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def sniff_content_type(stream: BinaryIO) -> SniffResult:
    """
    Detect the MIME type of a stream without losing the inspected bytes.

    Args:
        stream: Binary file-like object positioned at the start of the content

    Returns:
        SniffResult whose stream replays the first SNIFF_LENGTH bytes and
        then continues reading from the original stream.
    """
    prefix = _read_prefix(stream, SNIFF_LENGTH)
    return SniffResult(detect_content_type(prefix), ReplayStream(prefix, stream))
