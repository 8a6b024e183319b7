"""
Repository interfaces (ports) for the application layer.

These protocols define the contracts for document persistence.
Following Dependency Inversion Principle (DIP).
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from keepsake.domain.entities import TimelineDocument
    from keepsake.infrastructure.persistence.json_document_store import \
        DocumentLoadResult


class ITimelineRepository(Protocol):
    """Protocol for the whole-document timeline store (DIP)"""

    lock: asyncio.Lock

    async def load(self) -> DocumentLoadResult:
        """Read the document, degrading to the default document on failure"""
        ...

    async def save(self, document: TimelineDocument) -> None:
        """Replace the stored document"""
        ...
