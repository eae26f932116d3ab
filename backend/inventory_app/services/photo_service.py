"""
Inventory Service — Photo Storage Service
==========================================

What:  Writes uploaded photos to the cache directory and resolves them back.
Why:   Keeps every file system touch in one place; records only hold filenames.
How:   Generates a collision-resistant filename, writes bytes with aiofiles,
       and re-checks existence on every read.
Who:   Owned by InventoryService; created per application in create_app().

Naming:
    <unix-millis>-<uuid4 hex><original extension>
    e.g. 1718031234567-3f2a9c0e4b5d4e0f9a1b2c3d4e5f6a7b.jpg

    No user input except a sanitized extension reaches the filename, so the
    stored name cannot escape the cache directory.

Orphans:
    Replaced and deleted photos are never removed. Files outlive the process
    while the records pointing at them do not.
"""

import logging
import re
import time
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import aiofiles
import aiofiles.os

from inventory_app.exceptions import FileStorageError, ValidationError

logger = logging.getLogger(__name__)

# Extensions are kept only when they look like one (".jpg", ".webp", ...)
_EXTENSION_RE = re.compile(r"^\.[A-Za-z0-9]{1,10}$")


@dataclass
class PhotoUpload:
    """An uploaded file, already read into memory by the route."""

    filename: str
    content: bytes


class PhotoService:
    """
    Manages the photo cache directory.

    Directory Structure (flat):
        cache/
        ├── 1718031234567-3f2a9c0e....jpg
        └── 1718031299001-77d1e0aa....png
    """

    def __init__(self, cache_dir: Union[str, Path], max_size: Optional[int] = None):
        """
        Args:
            cache_dir: Directory uploaded photos are written to (created if absent).
            max_size:  Reject uploads larger than this many bytes (None = no limit).
        """
        self.cache_dir = Path(cache_dir).resolve()
        self.max_size = max_size
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        logger.info("PhotoService initialized with cache_dir=%s", self.cache_dir)

    @staticmethod
    def extension_of(filename: str) -> str:
        """Lowercased extension of `filename`, or "" when it has none worth keeping."""
        ext = Path(filename or "").suffix.lower()
        return ext if _EXTENSION_RE.match(ext) else ""

    def generate_filename(self, original_name: str) -> str:
        """Unique name for a new file in the cache directory."""
        millis = int(time.time() * 1000)
        return f"{millis}-{uuid.uuid4().hex}{self.extension_of(original_name)}"

    def validate_size(self, actual_size: int) -> None:
        """
        Raises:
            ValidationError when the upload exceeds max_size.
        """
        if self.max_size is not None and actual_size > self.max_size:
            max_mb = self.max_size / (1024 * 1024)
            raise ValidationError(
                message=(
                    f"Photo size ({actual_size / (1024 * 1024):.1f}MB) "
                    f"exceeds maximum of {max_mb:.1f}MB."
                ),
                field="photo",
                context={"max_size": self.max_size, "actual_size": actual_size},
            )

    def path_for(self, filename: str) -> Path:
        """Absolute path of a stored photo."""
        return self.cache_dir / Path(filename).name

    async def store(self, upload: PhotoUpload) -> str:
        """
        Write an upload to the cache directory.

        Returns:
            The generated filename (what the record keeps).

        Raises:
            ValidationError if the photo is too large.
            FileStorageError if the write fails.
        """
        self.validate_size(len(upload.content))
        filename = self.generate_filename(upload.filename)
        path = self.path_for(filename)

        try:
            async with aiofiles.open(path, "wb") as f:
                await f.write(upload.content)
        except OSError as e:
            logger.error("Failed to store photo at %s: %s", path, str(e))
            raise FileStorageError(
                message="Failed to save uploaded photo. Please try again.",
                context={"path": str(path), "os_error": str(e)},
            )

        logger.info("Photo stored: %s (%d bytes)", filename, len(upload.content))
        return filename

    async def exists(self, filename: Optional[str]) -> bool:
        """Whether `filename` currently names a regular file in the cache directory."""
        if not filename:
            return False
        return await aiofiles.os.path.isfile(self.path_for(filename))
