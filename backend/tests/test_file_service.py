"""
SiteCMS Backend: File Service Unit Tests
=========================================

What:  Tests for upload naming, storage, listing and path resolution.
How:   Real files in a per-test temporary directory; failures are simulated
       by patching the private write coroutine.
"""

import asyncio
import re
import shutil
from unittest.mock import AsyncMock, patch

import pytest

from sitecms.exceptions import FileStorageError, NotFoundError, UploadError, ValidationError
from sitecms.services.file_service import FileService, generate_filename

GENERATED_NAME = re.compile(r"^(\d+)-(\d+)(\.[^.]*)?$")


class TestGenerateFilename:
    """Tests for the `<epoch ms>-<random>` naming scheme."""

    def test_keeps_extension(self):
        name = generate_filename("portrait.png")
        assert GENERATED_NAME.match(name)
        assert name.endswith(".png")

    def test_extension_case_preserved(self):
        assert generate_filename("Portrait.JPG").endswith(".JPG")

    def test_only_last_suffix_kept(self):
        name = generate_filename("archive.tar.gz")
        assert name.endswith(".gz")
        assert ".tar" not in name

    def test_no_extension(self):
        name = generate_filename("README")
        assert "." not in name
        assert GENERATED_NAME.match(name)

    def test_missing_filename(self):
        assert GENERATED_NAME.match(generate_filename(None))

    def test_directory_part_ignored(self):
        name = generate_filename("../../etc/passwd.txt")
        assert "/" not in name
        assert name.endswith(".txt")

    def test_timestamp_prefix(self):
        name = generate_filename("a.pdf", now_ms=1718000000000)
        assert name.startswith("1718000000000-")

    def test_random_part_in_range(self):
        for _ in range(50):
            match = GENERATED_NAME.match(generate_filename("x.bin"))
            assert 0 <= int(match.group(2)) <= 1_000_000_000


class TestStore:
    """Tests for FileService.store()."""

    @pytest.mark.asyncio
    async def test_store_writes_bytes_unchanged(self, file_service, upload_dir, sample_image_bytes):
        stored_name = await file_service.store("photo.png", sample_image_bytes)

        assert (upload_dir / stored_name).read_bytes() == sample_image_bytes
        assert file_service.url_for(stored_name) == f"/uploads/{stored_name}"

    @pytest.mark.asyncio
    async def test_store_empty_file(self, file_service, upload_dir):
        stored_name = await file_service.store("empty.txt", b"")
        assert (upload_dir / stored_name).read_bytes() == b""

    @pytest.mark.asyncio
    async def test_store_recreates_missing_directory(self, file_service, upload_dir):
        shutil.rmtree(upload_dir)

        stored_name = await file_service.store("doc.pdf", b"%PDF-1.4")

        assert (upload_dir / stored_name).exists()

    def test_init_creates_nested_directory(self, tmp_path):
        target = tmp_path / "a" / "b" / "uploads"
        FileService(upload_dir=str(target))
        assert target.is_dir()

    @pytest.mark.asyncio
    async def test_store_write_failure_raises_upload_error(self, file_service):
        with patch.object(
            file_service, "_write", AsyncMock(side_effect=OSError(28, "No space left on device"))
        ):
            with pytest.raises(UploadError) as exc_info:
                await file_service.store("photo.png", b"data")

        assert exc_info.value.status_code == 500
        assert "No space left on device" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_store_timeout_raises_upload_error(self, upload_dir):
        service = FileService(upload_dir=str(upload_dir), io_timeout=0.01)

        async def slow_write(path, content):
            await asyncio.sleep(1)

        with patch.object(service, "_write", slow_write):
            with pytest.raises(UploadError, match="Timed out") as exc_info:
                await service.store("photo.png", b"data")

        assert exc_info.value.status_code == 500


class TestListFiles:
    """Tests for FileService.list_files()."""

    @pytest.mark.asyncio
    async def test_list_empty(self, file_service):
        assert await file_service.list_files() == []

    @pytest.mark.asyncio
    async def test_list_returns_raw_names(self, file_service, upload_dir):
        (upload_dir / "b.txt").write_bytes(b"b")
        (upload_dir / "a.png").write_bytes(b"a")

        assert await file_service.list_files() == ["a.png", "b.txt"]

    @pytest.mark.asyncio
    async def test_list_unreadable_directory(self, file_service, upload_dir):
        shutil.rmtree(upload_dir)

        with pytest.raises(FileStorageError, match="Unable to scan directory"):
            await file_service.list_files()


class TestResolve:
    """Tests for mapping a requested name back to a stored file."""

    def test_resolve_existing(self, file_service, upload_dir):
        (upload_dir / "1-2.png").write_bytes(b"x")
        assert file_service.resolve("1-2.png") == (upload_dir / "1-2.png").resolve()

    def test_resolve_missing(self, file_service):
        with pytest.raises(NotFoundError):
            file_service.resolve("nope.png")

    def test_resolve_rejects_traversal(self, file_service, tmp_path):
        (tmp_path / "secret.txt").write_text("secret")
        with pytest.raises(ValidationError, match="Invalid file path"):
            file_service.resolve("../secret.txt")
