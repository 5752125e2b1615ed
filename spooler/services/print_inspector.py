"""
Print File Inspection Service.
Extracts a renderable preview from uploaded print files.
Supports plain STL models and 3MF packages, both unsliced and sliced (G-code 3MF).
"""

import base64
import io
import logging
import lzma
import zipfile
import zlib

from spooler.core.exceptions import FormatException
from spooler.schemas.preview import FileKind, FileMetadata
from spooler.storage.keys import split_extension

logger = logging.getLogger(__name__)

THUMBNAIL_SUFFIX = "plate_1.png"
SLICER_METADATA_SUFFIX = "metadata.json"
MODEL_SUFFIX = ".stl"


class PrintFileInspector:
    """
    Classifies print files and extracts a preview payload.

    Dispatch is by filename extension only. Sniffed MIME types are not
    used because 3MF packages are indistinguishable from plain zip archives.
    """

    ARCHIVE_EXTENSIONS = {".3mf", ".gcode.3mf"}

    def inspect(self, filename: str, content: bytes) -> FileMetadata:
        """
        Extract preview metadata from a print file.

        The whole file must already be in memory; callers are expected to
        enforce a size limit before calling this.

        Args:
            filename: Original filename, used for extension dispatch
            content: Full file content

        Returns:
            FileMetadata with at most one payload set. An unrecognized
            extension, or an archive with nothing extractable, yields
            kind UNKNOWN.

        Raises:
            FormatException: If a .3mf file is not a readable zip archive or
                one of its entries cannot be decompressed
        """
        extension = split_extension(filename)

        if extension == ".stl":
            return FileMetadata(kind=FileKind.STL, raw_model=_encode(content))

        if extension in self.ARCHIVE_EXTENSIONS:
            return self._inspect_archive(filename, content)

        logger.debug("No preview available for %s", filename)
        return FileMetadata(kind=FileKind.UNKNOWN)

    def _inspect_archive(self, filename: str, content: bytes) -> FileMetadata:
        """
        Scan a 3MF package once, in stored entry order.

        Slicer output is recognized by a plate thumbnail or a metadata.json
        entry. An .stl entry is only taken as the model if it appears before
        any such entry.
        """
        try:
            with zipfile.ZipFile(io.BytesIO(content)) as archive:
                thumbnail = None
                raw_model = None
                sliced = False

                for entry in archive.infolist():
                    name = entry.filename
                    if name.endswith(THUMBNAIL_SUFFIX):
                        thumbnail = archive.read(entry)
                        sliced = True
                    elif name.endswith(MODEL_SUFFIX) and not sliced:
                        raw_model = archive.read(entry)
                    elif name.endswith(SLICER_METADATA_SUFFIX):
                        sliced = True
        except (
            zipfile.BadZipFile,
            zipfile.LargeZipFile,
            zlib.error,
            lzma.LZMAError,
            EOFError,
            OSError,
            NotImplementedError,
            RuntimeError,
            ValueError,
        ) as e:
            raise FormatException(
                message=f"Failed to read 3MF archive: {e}",
                details={"filename": filename},
            ) from e

        if sliced and thumbnail is not None:
            return FileMetadata(
                kind=FileKind.GCODE_THREEMF,
                thumbnail=f"data:image/png;base64,{_encode(thumbnail)}",
            )

        if raw_model is not None:
            return FileMetadata(kind=FileKind.THREEMF, raw_model=_encode(raw_model))

        logger.info("Nothing extractable in %s", filename)
        return FileMetadata(kind=FileKind.UNKNOWN)


def _encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


# Singleton instance
_inspector: PrintFileInspector | None = None


def get_print_inspector() -> PrintFileInspector:
    """Get the singleton print file inspector instance."""
    global _inspector
    if _inspector is None:
        _inspector = PrintFileInspector()
    return _inspector
