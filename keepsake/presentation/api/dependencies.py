from fastapi import Depends

from keepsake.application.services.upload_collector import \
    UploadGarbageCollector
from keepsake.application.use_cases.timeline.timeline_operations import \
    TimelineService
from keepsake.application.use_cases.uploads.upload_operations import \
    UploadService
from keepsake.infrastructure.config.settings import get_settings
from keepsake.infrastructure.external.storage import (LocalUploadStorage,
                                                      StaticResolverRegistry)
from keepsake.infrastructure.persistence import JsonTimelineRepository

# Global service instances (singletons). The repository must be shared so
# every request serializes on the same document lock.
_timeline_repository: JsonTimelineRepository | None = None
_upload_storage: LocalUploadStorage | None = None
_static_resolvers: StaticResolverRegistry | None = None


def get_timeline_repository() -> JsonTimelineRepository:
    """Timeline document repository dependency (singleton)"""
    global _timeline_repository
    if _timeline_repository is None:
        settings = get_settings()
        _timeline_repository = JsonTimelineRepository(
            data_path=settings.data_path,
            default_start_date=settings.default_start_date,
        )
    return _timeline_repository


def get_upload_storage() -> LocalUploadStorage:
    """Upload storage dependency (singleton)"""
    global _upload_storage
    if _upload_storage is None:
        _upload_storage = LocalUploadStorage(storage_root=get_settings().upload_dir)
    return _upload_storage


def get_static_resolvers() -> StaticResolverRegistry:
    """Static resolvers for public, admin and upload directories (singleton)"""
    global _static_resolvers
    if _static_resolvers is None:
        settings = get_settings()
        _static_resolvers = StaticResolverRegistry.from_directories(
            public_dir=settings.public_dir,
            admin_dir=settings.admin_dir,
            upload_dir=settings.upload_dir,
        )
    return _static_resolvers


def get_timeline_service(
    repository: JsonTimelineRepository = Depends(get_timeline_repository),
) -> TimelineService:
    """Timeline service dependency"""
    return TimelineService(repository=repository)


def get_upload_service(
    repository: JsonTimelineRepository = Depends(get_timeline_repository),
    storage: LocalUploadStorage = Depends(get_upload_storage),
) -> UploadService:
    """Upload service dependency wired with the garbage collector"""
    return UploadService(
        storage=storage,
        collector=UploadGarbageCollector(repository=repository, storage=storage),
        max_upload_size=get_settings().max_upload_size,
    )
