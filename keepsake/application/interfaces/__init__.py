"""
Application layer interfaces (ports).

These protocols define the contracts between the application layer
and the infrastructure layer, following the Dependency Inversion Principle.
"""

from keepsake.application.interfaces.repositories import ITimelineRepository
from keepsake.application.interfaces.storage import IUploadStorage

__all__ = [
    # Repository interfaces
    "ITimelineRepository",
    # Storage interface
    "IUploadStorage",
]
