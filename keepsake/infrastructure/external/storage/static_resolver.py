"""
Traversal-safe resolution of static files.

Security:
- Separators normalized, `.`/`..` collapsed, leading `../` runs stripped
- Result resolved (symlinks followed) and validated against the base
  directory with Path.relative_to, not a string prefix
- Only regular files are served; anything else is reported as not found

Each StaticResolver is bound to exactly one base directory. The
registry holds one resolver per StaticBase (public assets, admin
interface, uploads).
"""

import logging
import posixpath
import stat
from collections.abc import AsyncIterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

import aiofiles

from keepsake.domain.enums import StaticBase
from keepsake.infrastructure.exceptions import StorageNotFoundError

logger = logging.getLogger(__name__)

MIME_TYPES: dict[str, str] = {
    ".html": "text/html; charset=utf-8",
    ".css": "text/css; charset=utf-8",
    ".js": "application/javascript; charset=utf-8",
    ".json": "application/json; charset=utf-8",
    ".txt": "text/plain; charset=utf-8",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".svg": "image/svg+xml",
    ".ico": "image/x-icon",
}
DEFAULT_CONTENT_TYPE = "application/octet-stream"


def content_type_for(path: Path) -> str:
    """Content type for a file, by lower-cased extension"""
    return MIME_TYPES.get(path.suffix.lower(), DEFAULT_CONTENT_TYPE)


@dataclass(frozen=True)
class ResolvedResource:
    """A static file that passed validation."""

    CHUNK_SIZE: ClassVar[int] = 64 * 1024  # 64KB chunks for streaming

    path: Path
    content_type: str
    size: int

    async def iter_bytes(self) -> AsyncIterator[bytes]:
        """
        Stream the file content.

        Yields:
            bytes: File content chunks
        """
        async with aiofiles.open(self.path, "rb") as f:
            while True:
                chunk = await f.read(self.CHUNK_SIZE)
                if not chunk:
                    break
                yield chunk


class StaticResolver:
    """Maps caller-supplied relative paths onto files inside one base directory."""

    def __init__(self, base_dir: str | Path) -> None:
        self.base_dir = Path(base_dir).resolve()

    @staticmethod
    def normalize(relative_path: str) -> str:
        """
        Collapse a relative path and drop leading parent-directory segments.

        "a/./b/../c" -> "a/c", "../../etc/passwd" -> "etc/passwd"
        """
        cleaned = relative_path.replace("\\", "/").lstrip("/")
        normalized = posixpath.normpath(cleaned) if cleaned else "."

        # normpath keeps leading ".." segments that would climb above the base
        while normalized == ".." or normalized.startswith("../"):
            normalized = normalized[3:] or "."
        return normalized

    def resolve(self, relative_path: str) -> ResolvedResource:
        """
        Resolve a relative path to a regular file inside the base directory.

        Args:
            relative_path: Caller-supplied path, relative to the base

        Returns:
            ResolvedResource: Validated file with its content type

        Raises:
            StorageNotFoundError: If the path escapes the base, does not
                exist, or is not a regular file
        """
        if "\x00" in relative_path:
            raise StorageNotFoundError(relative_path)

        safe_path = self.normalize(relative_path)
        try:
            full_path = (self.base_dir / safe_path).resolve()
        except (OSError, RuntimeError) as e:
            raise StorageNotFoundError(relative_path) from e

        # Security check: ensure path is within the base directory
        try:
            full_path.relative_to(self.base_dir)
        except ValueError:
            logger.warning(f"Rejected path outside {self.base_dir}: {relative_path!r}")
            raise StorageNotFoundError(relative_path) from None

        try:
            file_stat = full_path.stat()
        except OSError as e:
            raise StorageNotFoundError(relative_path) from e

        if not stat.S_ISREG(file_stat.st_mode):
            raise StorageNotFoundError(relative_path)

        return ResolvedResource(
            path=full_path,
            content_type=content_type_for(full_path),
            size=file_stat.st_size,
        )


class StaticResolverRegistry:
    """One StaticResolver per StaticBase."""

    def __init__(self, resolvers: Mapping[StaticBase, StaticResolver]) -> None:
        missing = set(StaticBase) - set(resolvers)
        if missing:
            raise ValueError(f"Missing static resolvers: {sorted(b.value for b in missing)}")
        self._resolvers = dict(resolvers)

    @classmethod
    def from_directories(
        cls,
        public_dir: str | Path,
        admin_dir: str | Path,
        upload_dir: str | Path,
    ) -> "StaticResolverRegistry":
        return cls(
            {
                StaticBase.PUBLIC: StaticResolver(public_dir),
                StaticBase.ADMIN: StaticResolver(admin_dir),
                StaticBase.UPLOADS: StaticResolver(upload_dir),
            }
        )

    def get(self, base: StaticBase) -> StaticResolver:
        return self._resolvers[base]

    def resolve(self, base: StaticBase, relative_path: str) -> ResolvedResource:
        """Resolve `relative_path` against the directory registered for `base`."""
        return self._resolvers[base].resolve(relative_path)
