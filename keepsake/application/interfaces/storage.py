"""
Storage interface (port) for uploaded files.

Following Dependency Inversion Principle (DIP).
"""

from typing import Protocol


class IUploadStorage(Protocol):
    """Protocol for the flat upload directory (DIP)"""

    async def store(self, content: bytes, extension: str) -> str:
        """Write a new upload, return its public URI"""
        ...

    async def list_files(self) -> list[str]:
        """Names of regular files in the upload directory"""
        ...

    async def list_uris(self) -> list[str]:
        """Public URIs of regular files in the upload directory"""
        ...

    async def delete(self, filename: str) -> bool:
        """Delete an upload, False if it didn't exist"""
        ...
