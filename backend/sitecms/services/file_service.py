"""
SiteCMS Backend: Upload File Service
=====================================

What:  Stores uploaded files in the upload directory, lists them, and
       resolves stored names back to paths for retrieval.
How:   Generates a `<epoch ms>-<random int>` filename that keeps the original
       extension, writes the bytes unchanged with async file I/O, and bounds
       every disk operation with `settings.io_timeout_seconds`.
Who:   Used by routes/uploads.py (through the `get_file_service` dependency)
       and by the application factory (directory creation at startup).

Naming Scheme:
    uploads/
    ├── 1718000000000-482913302.png
    ├── 1718000004211-77120.pdf
    └── 1718000009876-999999999

    The timestamp plus a random integer in [0, 10^9] is treated as unique;
    no check is made against files already on disk. Nothing is ever deleted
    from this directory, including when the record referencing a file is
    deleted, and a partially written file is left in place on failure.
"""

import asyncio
import logging
import os
import random
import time
from pathlib import Path
from typing import List, Optional

import aiofiles
import aiofiles.os

from sitecms.config import settings
from sitecms.exceptions import FileStorageError, NotFoundError, UploadError, ValidationError

logger = logging.getLogger(__name__)

# Public URL prefix the stored files are served under
UPLOAD_URL_PREFIX = "/uploads"

# Upper bound (inclusive) of the random part of a generated filename
RANDOM_SUFFIX_MAX = 1_000_000_000


def generate_filename(original_filename: Optional[str], now_ms: Optional[int] = None) -> str:
    """
    Build the stored name for an upload.

    The extension is the last suffix of the client filename, case preserved:
        "Portrait.JPG"   → "1718000000000-42.JPG"
        "archive.tar.gz" → "1718000000000-42.gz"
        "README"         → "1718000000000-42"
    Any directory part the client sent is ignored.
    """
    timestamp = now_ms if now_ms is not None else int(time.time() * 1000)
    basename = os.path.basename(original_filename or "")
    extension = os.path.splitext(basename)[1]
    return f"{timestamp}-{random.randint(0, RANDOM_SUFFIX_MAX)}{extension}"


class FileService:
    """
    Upload directory manager.

    Lifecycle of an uploaded file:
        1. POST /api/upload → FileService.store()
        2. Upload directory is (re)created if it vanished
        3. Bytes are written to <upload_dir>/<generated name>
        4. "/uploads/<generated name>" is returned to the client
        5. GET /uploads/<generated name> → FileService.resolve() → raw bytes
    """

    def __init__(self, upload_dir: Optional[str] = None, io_timeout: Optional[float] = None):
        """
        Args:
            upload_dir: Override the default upload path (used in tests).
            io_timeout: Override the disk operation timeout in seconds.
        """
        self.upload_dir = Path(upload_dir or settings.upload_dir).resolve()
        self.io_timeout = io_timeout or settings.io_timeout_seconds
        self.ensure_upload_dir()
        logger.info("FileService initialized with upload_dir=%s", self.upload_dir)

    def ensure_upload_dir(self) -> Path:
        """Create the upload directory (and parents) if it does not exist."""
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        return self.upload_dir

    @staticmethod
    def url_for(stored_name: str) -> str:
        return f"{UPLOAD_URL_PREFIX}/{stored_name}"

    async def _write(self, path: Path, content: bytes) -> None:
        async with aiofiles.open(path, "wb") as f:
            await f.write(content)

    async def store(self, original_filename: Optional[str], content: bytes) -> str:
        """
        Write an uploaded file and return its stored name.

        Raises:
            UploadError (500): directory creation failed, the write failed,
                               or the write exceeded the I/O timeout.
        """
        stored_name = generate_filename(original_filename)
        path = self.upload_dir / stored_name

        try:
            # The directory may have been removed since startup
            self.ensure_upload_dir()
            await asyncio.wait_for(self._write(path, content), timeout=self.io_timeout)
        except asyncio.TimeoutError:
            logger.error("Timed out after %.1fs writing %s", self.io_timeout, path)
            raise UploadError(
                message="Timed out while saving the uploaded file",
                context={"path": str(path), "timeout": self.io_timeout},
            )
        except OSError as e:
            logger.error("Failed to store file at %s: %s", path, str(e))
            raise UploadError(
                message=f"Failed to save uploaded file: {e.strerror or 'I/O error'}",
                context={"path": str(path), "os_error": str(e)},
            )

        logger.info(
            "File uploaded: %s (%d bytes, original name %s)",
            stored_name,
            len(content),
            original_filename or "unknown",
        )
        return stored_name

    async def list_files(self) -> List[str]:
        """
        Raw names of the entries in the upload directory, sorted.

        Raises:
            FileStorageError: directory missing/unreadable or listing timed out.
        """
        try:
            names = await asyncio.wait_for(
                aiofiles.os.listdir(self.upload_dir), timeout=self.io_timeout
            )
        except (OSError, asyncio.TimeoutError) as e:
            logger.error("Unable to scan upload directory %s: %s", self.upload_dir, str(e))
            raise FileStorageError(
                context={"path": str(self.upload_dir), "error": type(e).__name__},
            )
        return sorted(names)

    def resolve(self, stored_name: str) -> Path:
        """
        Map a requested name to a file inside the upload directory.

        Raises:
            ValidationError: the name resolves outside the upload directory.
            NotFoundError:   no such file.
        """
        full_path = (self.upload_dir / stored_name).resolve()

        # Reject ../ tricks: the resolved path must stay under upload_dir
        if not full_path.is_relative_to(self.upload_dir):
            raise ValidationError(message="Invalid file path", field="filename")

        if not full_path.is_file():
            raise NotFoundError(resource="file", resource_id=stored_name)

        return full_path


# ── Singleton Instance ────────────────────────────────────────────────────
# Constructed lazily so importing this module never touches the disk
_file_service: Optional[FileService] = None


def get_file_service() -> FileService:
    """FastAPI dependency returning the process-wide FileService."""
    global _file_service
    if _file_service is None:
        _file_service = FileService()
    return _file_service
