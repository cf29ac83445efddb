"""
UGC Agency Backend — File Storage Service
===========================================

What:  Validates, stores and serves the bytes behind Media rows.
Why:   Keeps every filesystem operation (and its safety checks) in one
       place; the media service only deals with rows.
How:   Validates extension and size, writes with aiofiles into
       date-partitioned directories under STORAGE_ROOT with UUID filenames,
       and resolves read paths strictly inside the root.

Directory structure:
    storage/
    └── 2026/
        └── 03/
            └── 14/
                ├── 1f0c...-9e2a.mp4
                └── 77ab...-0c41.png

Safety rules:
    - Stored filenames are UUIDs; no user input reaches the path.
    - Extension decides the mime type; unknown extensions are rejected.
    - Reads resolve the path and refuse anything outside the storage root.
"""

import logging
import os
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Tuple

import aiofiles

from ugc_backend.config import settings
from ugc_backend.exceptions import FileStorageError, NotFoundError, ValidationError
from ugc_backend.models.enums import MediaType

logger = logging.getLogger(__name__)

# ── Allowed File Types ────────────────────────────────────────────────────
ALLOWED_EXTENSIONS = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".heic": "image/heic",
    ".mp4": "video/mp4",
    ".mov": "video/quicktime",
    ".webm": "video/webm",
    ".m4v": "video/x-m4v",
    ".pdf": "application/pdf",
    ".doc": "application/msword",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".txt": "text/plain",
    ".zip": "application/zip",
}

# Used when a registration names no mime type
DEFAULT_MIME_TYPES = {
    MediaType.IMAGE: "image/jpeg",
    MediaType.VIDEO: "video/mp4",
    MediaType.DOCUMENT: "application/pdf",
    MediaType.OTHER: "application/octet-stream",
}


class StorageService:
    """
    Local-disk storage for uploaded media.

    Args:
        storage_root: Override the configured root (used in tests).
    """

    def __init__(self, storage_root: Optional[str] = None):
        self._storage_root = storage_root

    @property
    def storage_root(self) -> Path:
        # Resolved lazily so tests can point STORAGE_ROOT at a temp dir
        return Path(self._storage_root or settings.storage_root).resolve()

    def validate_extension(self, filename: str) -> str:
        """Return the lowercased extension, or raise ValidationError."""
        ext = Path(filename).suffix.lower()
        if ext not in ALLOWED_EXTENSIONS:
            raise ValidationError(
                message=(
                    f"File type '{ext or filename}' is not supported. "
                    f"Allowed types: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
                ),
                field="file",
                context={"extension": ext},
            )
        return ext

    def validate_size(self, size: int) -> None:
        max_mb = settings.max_file_size / (1024 * 1024)
        if size > settings.max_file_size:
            raise ValidationError(
                message=f"File size ({size / (1024 * 1024):.1f}MB) exceeds maximum of {max_mb:.0f}MB.",
                field="file",
                context={"max_size_mb": max_mb, "actual_size": size},
            )
        if size == 0:
            raise ValidationError("Uploaded file is empty", field="file")

    def mime_type_for(self, extension: str) -> str:
        return ALLOWED_EXTENSIONS.get(extension, "application/octet-stream")

    def _generate_storage_path(self, extension: str) -> Tuple[Path, str]:
        """Build `YYYY/MM/DD/<uuid><ext>`; returns (absolute, relative)."""
        date_dir = datetime.now(timezone.utc).strftime("%Y/%m/%d")
        relative_path = f"{date_dir}/{uuid.uuid4()}{extension}"
        return self.storage_root / relative_path, relative_path

    async def store_file(self, content: bytes, extension: str) -> str:
        """
        Write bytes to a fresh date-partitioned path.

        Returns:
            The path relative to the storage root (stored on the Media row).

        Raises:
            FileStorageError if the directory or file cannot be written.
        """
        absolute_path, relative_path = self._generate_storage_path(extension)
        try:
            absolute_path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(absolute_path, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Failed to store file at %s: %s", absolute_path, str(e))
            raise FileStorageError(
                message="Failed to save uploaded file. Please try again.",
                context={"os_error": str(e)},
            )

        logger.info("File stored: %s (%d bytes)", relative_path, len(content))
        return relative_path

    async def validate_and_store(self, filename: str, content: bytes) -> Tuple[str, str]:
        """
        Extension check, size check, then write.

        Returns:
            (relative_path, mime_type)
        """
        ext = self.validate_extension(filename)
        self.validate_size(len(content))
        relative_path = await self.store_file(content, ext)
        return relative_path, self.mime_type_for(ext)

    def resolve(self, relative_path: str) -> Path:
        """
        Map a public relative path to a file on disk.

        Raises:
            NotFoundError for traversal attempts and for missing files; the
            two are indistinguishable to the caller.
        """
        root = self.storage_root
        candidate = (root / relative_path).resolve()
        if root not in candidate.parents or not candidate.is_file():
            logger.warning("Rejected storage read for %r", relative_path)
            raise NotFoundError("File", message="File not found")
        return candidate

    async def cleanup_file(self, relative_path: str) -> None:
        """Best-effort removal after a failed registration."""
        path = self.storage_root / relative_path
        try:
            if path.exists():
                os.remove(path)
                logger.info("Cleaned up file: %s", relative_path)
        except OSError as e:
            logger.warning("Failed to clean up file %s: %s", relative_path, str(e))


storage_service = StorageService()
