from keepsake.application.services.upload_collector import \
    UploadGarbageCollector

__all__ = ["UploadGarbageCollector"]
