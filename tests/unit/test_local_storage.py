"""LocalStorageService against a temporary directory."""

from pathlib import Path

import pytest

from tramites.infrastructure.exceptions import StoragePermissionError, StorageUploadError
from tramites.infrastructure.external.storage.local_storage import LocalStorageService


async def test_upload_writes_file_and_returns_locator(tmp_path: Path) -> None:
    storage = LocalStorageService(str(tmp_path), base_url="https://files.example/")
    stored = await storage.upload(b"hello", "documents/doc1/a.pdf", "application/pdf")
    assert (tmp_path / "documents/doc1/a.pdf").read_bytes() == b"hello"
    assert stored.key == "documents/doc1/a.pdf"
    assert stored.url == "https://files.example/documents/doc1/a.pdf"
    assert stored.size == 5
    assert len(stored.checksum) == 64
    assert not list((tmp_path / "documents/doc1").glob(".tmp_*"))


async def test_upload_never_overwrites(tmp_path: Path) -> None:
    storage = LocalStorageService(str(tmp_path))
    await storage.upload(b"one", "documents/doc1/a.pdf", "application/pdf")
    with pytest.raises(StorageUploadError):
        await storage.upload(b"two", "documents/doc1/a.pdf", "application/pdf")
    assert (tmp_path / "documents/doc1/a.pdf").read_bytes() == b"one"


async def test_path_traversal_is_refused(tmp_path: Path) -> None:
    storage = LocalStorageService(str(tmp_path / "root"))
    with pytest.raises(StoragePermissionError):
        await storage.upload(b"x", "../escape.pdf", "application/pdf")


async def test_delete_removes_file_and_empty_dirs(tmp_path: Path) -> None:
    storage = LocalStorageService(str(tmp_path))
    await storage.upload(b"x", "documents/doc1/a.pdf", "application/pdf")
    assert await storage.delete("documents/doc1/a.pdf") is True
    assert not (tmp_path / "documents").exists()
    assert await storage.delete("documents/doc1/a.pdf") is False
    assert await storage.exists("documents/doc1/a.pdf") is False


async def test_url_falls_back_to_file_uri(tmp_path: Path) -> None:
    storage = LocalStorageService(str(tmp_path))
    stored = await storage.upload(b"x", "a.pdf", "application/pdf")
    assert stored.url.startswith("file://")
