"""Domain enumerations for the Keepsake application."""

from enum import Enum


class LoadStatus(str, Enum):
    """Outcome of reading the timeline document from disk"""

    LOADED = "loaded"
    RECOVERED = "recovered"


class StaticBase(str, Enum):
    """Base directories static resources may be served from"""

    PUBLIC = "public"
    ADMIN = "admin"
    UPLOADS = "uploads"
