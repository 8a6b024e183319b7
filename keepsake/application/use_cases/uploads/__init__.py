from keepsake.application.use_cases.uploads.upload_operations import (
    UploadListing, UploadService)

__all__ = ["UploadListing", "UploadService"]
