"""Storage implementations for uploads and static assets."""

from keepsake.infrastructure.external.storage.local_storage import \
    LocalUploadStorage
from keepsake.infrastructure.external.storage.static_resolver import (
    ResolvedResource, StaticResolver, StaticResolverRegistry)

__all__ = [
    "LocalUploadStorage",
    "ResolvedResource",
    "StaticResolver",
    "StaticResolverRegistry",
]
