"""
Infrastructure exceptions for the Keepsake application.

This module defines infrastructure-level exceptions related to
document persistence and file storage operations.
"""

from keepsake.domain.exceptions import KeepsakeException


# Storage Exceptions
class StorageException(KeepsakeException):
    """Base exception for storage operations."""

    pass


class StorageNotFoundError(StorageException):
    """File not found in storage."""

    def __init__(self, file_path: str):
        super().__init__(
            f"File not found: {file_path}",
            "STORAGE_NOT_FOUND",
            {"file_path": file_path},
        )


class StorageUploadError(StorageException):
    """File upload failed."""

    def __init__(self, file_path: str, reason: str):
        super().__init__(
            f"Failed to upload file: {file_path}",
            "STORAGE_UPLOAD_ERROR",
            {"file_path": file_path, "reason": reason},
        )


class StorageDeleteError(StorageException):
    """File deletion failed."""

    def __init__(self, file_path: str, reason: str):
        super().__init__(
            f"Failed to delete file: {file_path}",
            "STORAGE_DELETE_ERROR",
            {"file_path": file_path, "reason": reason},
        )


class StorageListError(StorageException):
    """Directory listing failed."""

    def __init__(self, directory: str, reason: str):
        super().__init__(
            f"Failed to list directory: {directory}",
            "STORAGE_LIST_ERROR",
            {"directory": directory, "reason": reason},
        )


class DocumentSaveError(StorageException):
    """Timeline document could not be written."""

    def __init__(self, file_path: str, reason: str):
        super().__init__(
            f"Failed to save timeline document: {file_path}",
            "DOCUMENT_SAVE_ERROR",
            {"file_path": file_path, "reason": reason},
        )


class StoragePermissionError(StorageException):
    """Path escapes its storage root (path traversal detected)."""

    def __init__(self, file_path: str, operation: str):
        super().__init__(
            f"Path traversal detected for {operation}: {file_path}",
            "STORAGE_PERMISSION_DENIED",
            {"file_path": file_path, "operation": operation},
        )
