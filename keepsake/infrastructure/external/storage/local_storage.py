"""
Local filesystem storage for user uploads.

Security Features:
- Path traversal protection (resolve + prefix validation)
- Exclusive file creation (never overwrites an existing upload)
- Partial files removed when a write fails
- File permissions (0o640 files, 0o750 dirs)

The upload directory is flat: files live directly under the storage
root and are referenced publicly as `/uploads/<filename>`.
"""

import logging
import os
from collections.abc import Callable
from pathlib import Path

import aiofiles
import aiofiles.os

from keepsake.domain.entities import upload_uri
from keepsake.infrastructure.exceptions import (StorageDeleteError,
                                                StorageListError,
                                                StoragePermissionError,
                                                StorageUploadError)
from keepsake.shared.utils.generators import (current_time_millis,
                                              generate_upload_name)

logger = logging.getLogger(__name__)


class LocalUploadStorage:
    """
    Flat directory of uploaded files.

    Naming: upload-<millis><ext>, bumped on collision so two uploads in
    the same millisecond never overwrite each other.
    """

    def __init__(
        self,
        storage_root: str | Path,
        clock: Callable[[], int] = current_time_millis,
    ) -> None:
        """
        Initialize upload storage.

        Args:
            storage_root: Upload directory
            clock: Millisecond clock used for generated filenames
        """
        self.storage_root = Path(storage_root).resolve()
        self.clock = clock

    def ensure_root(self) -> None:
        """Create the upload directory if it doesn't exist"""
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)

    def _get_full_path(self, filename: str) -> Path:
        """
        Get full filesystem path with security validation.

        Args:
            filename: Name of a file directly inside the upload directory

        Returns:
            Path: Validated absolute path

        Raises:
            StoragePermissionError: If the name escapes the upload directory
        """
        # Security check: flat directory, so only bare filenames are accepted.
        # The last component is not resolved; deleting a symlink removes the link.
        if filename in ("", ".", "..") or Path(filename).name != filename:
            raise StoragePermissionError(filename, "path_validation")

        return self.storage_root / filename

    async def store(self, content: bytes, extension: str) -> str:
        """
        Write a new upload and return its public URI.

        Args:
            content: Decoded file bytes
            extension: Sanitized extension including the dot (e.g. ".png")

        Returns:
            str: Public URI, "/uploads/<filename>"

        Raises:
            StorageUploadError: If the file cannot be written
        """
        try:
            self.ensure_root()
        except OSError as e:
            raise StorageUploadError(str(self.storage_root), f"Upload failed: {e!s}") from e

        now_ms = self.clock()
        while True:
            filename = generate_upload_name(extension, now_ms)
            target_path = self._get_full_path(filename)
            try:
                # Exclusive create: a concurrent upload holding this name wins
                async with aiofiles.open(target_path, "xb") as f:
                    await f.write(content)
            except FileExistsError:
                now_ms += 1
                continue
            except OSError as e:
                target_path.unlink(missing_ok=True)
                raise StorageUploadError(filename, f"Upload failed: {e!s}") from e
            break

        try:
            os.chmod(target_path, 0o640)
        except OSError as e:
            logger.warning(f"Could not set permissions on {filename}: {e}")

        logger.info(f"Stored upload {filename} ({len(content)} bytes)")
        return upload_uri(filename)

    async def list_files(self) -> list[str]:
        """
        List regular files in the upload directory.

        Subdirectories are skipped, not recursed.

        Returns:
            list[str]: Filenames, sorted

        Raises:
            StorageListError: If the directory cannot be read
        """
        try:
            self.ensure_root()
            names = await aiofiles.os.listdir(self.storage_root)
            return sorted(
                name for name in names if (self.storage_root / name).is_file()
            )
        except OSError as e:
            raise StorageListError(str(self.storage_root), str(e)) from e

    async def list_uris(self) -> list[str]:
        """Public URIs of every stored upload"""
        return [upload_uri(name) for name in await self.list_files()]

    async def delete(self, filename: str) -> bool:
        """
        Delete an upload.

        Args:
            filename: Name of the file inside the upload directory

        Returns:
            bool: True if deleted, False if didn't exist

        Raises:
            StorageDeleteError: If deletion fails
        """
        file_path = self._get_full_path(filename)

        try:
            await aiofiles.os.remove(file_path)
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageDeleteError(filename, f"Delete failed: {e!s}") from e
