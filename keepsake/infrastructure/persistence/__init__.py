"""Persistence for the timeline document."""

from keepsake.infrastructure.persistence.json_document_store import (
    DocumentLoadResult, JsonTimelineRepository)

__all__ = ["DocumentLoadResult", "JsonTimelineRepository"]
