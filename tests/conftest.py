"""
Pytest configuration and fixtures for Spooler API tests.
"""

import io
import zipfile
from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from botocore.exceptions import ClientError
from httpx import AsyncClient, ASGITransport

from spooler.config import Settings, get_settings
from spooler.main import app
from spooler.storage import LocalStorageBackend, RemoteStorageBackend, StorageFacade, get_storage

TEST_BUCKET = "spooler-test-prints"


class FakeS3Client:
    """
    In-memory stand-in for a boto3 S3 client.

    Uploads are committed only after the whole stream has been read,
    matching S3's all-or-nothing object writes. Every call is recorded.
    """

    def __init__(self):
        self.objects: dict[tuple[str, str], dict[str, Any]] = {}
        self.calls: list[str] = []

    def _missing(self, operation: str, code: str) -> ClientError:
        return ClientError(
            {"Error": {"Code": code, "Message": "Not Found"}},
            operation,
        )

    def upload_fileobj(self, Fileobj, Bucket, Key, ExtraArgs=None):
        self.calls.append("upload_fileobj")
        chunks = []
        while chunk := Fileobj.read(8192):
            chunks.append(chunk)
        body = b"".join(chunks)
        self.objects[(Bucket, Key)] = {"Body": body, **(ExtraArgs or {})}

    def get_object(self, Bucket, Key):
        self.calls.append("get_object")
        if (Bucket, Key) not in self.objects:
            raise self._missing("GetObject", "NoSuchKey")
        return {"Body": io.BytesIO(self.objects[(Bucket, Key)]["Body"])}

    def head_object(self, Bucket, Key):
        self.calls.append("head_object")
        if (Bucket, Key) not in self.objects:
            raise self._missing("HeadObject", "404")
        return {"ContentLength": len(self.objects[(Bucket, Key)]["Body"])}

    def delete_object(self, Bucket, Key):
        self.calls.append("delete_object")
        self.objects.pop((Bucket, Key), None)
        return {}


def make_archive(entries: list[tuple[str, bytes]], compression: int = zipfile.ZIP_DEFLATED) -> bytes:
    """Build an in-memory zip archive with entries stored in the given order."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression) as archive:
        for name, data in entries:
            archive.writestr(name, data)
    return buffer.getvalue()


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Get test settings."""
    return Settings(
        STORAGE_PROVIDER="local",
        LOCAL_STORAGE_PATH=str(tmp_path / "storage"),
        MAX_UPLOAD_SIZE=1024 * 1024,
        MAX_PREVIEW_SIZE=1024 * 1024,
    )


@pytest.fixture
def local_backend(tmp_path) -> LocalStorageBackend:
    """Create a local storage backend rooted in a temp directory."""
    return LocalStorageBackend(base_path=str(tmp_path / "storage"))


@pytest.fixture
def s3_client() -> FakeS3Client:
    return FakeS3Client()


@pytest.fixture
def remote_backend(s3_client) -> RemoteStorageBackend:
    """Create a remote storage backend over the fake S3 client."""
    return RemoteStorageBackend(bucket_name=TEST_BUCKET, client=s3_client)


@pytest.fixture
def test_storage(local_backend) -> StorageFacade:
    return StorageFacade(local_backend)


@pytest_asyncio.fixture(scope="function")
async def client(test_settings, test_storage) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""

    def override_get_storage():
        return test_storage

    def override_get_settings():
        return test_settings

    app.dependency_overrides[get_storage] = override_get_storage
    app.dependency_overrides[get_settings] = override_get_settings

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def sample_stl() -> bytes:
    """Small ASCII STL model."""
    return (
        b"solid cube\n"
        b"  facet normal 0 0 1\n"
        b"    outer loop\n"
        b"      vertex 0 0 1\n"
        b"      vertex 1 0 1\n"
        b"      vertex 0 1 1\n"
        b"    endloop\n"
        b"  endfacet\n"
        b"endsolid cube\n"
    )


@pytest.fixture
def sample_png() -> bytes:
    return b"\x89PNG\r\n\x1a\n" + b"\x00\x00\x00\rIHDR" + b"\x00" * 17


@pytest.fixture
def sliced_archive(sample_png) -> bytes:
    """Sliced 3MF package with slicer metadata and a plate thumbnail."""
    return make_archive([
        ("Metadata/metadata.json", b'{"printer": "X1C"}'),
        ("Metadata/plate_1.png", sample_png),
        ("Metadata/plate_1.gcode", b"G28\nG1 X10 Y10\n"),
    ])


@pytest.fixture
def archive_factory():
    """Factory building zip archives from (name, data) pairs."""
    return make_archive
