"""Keepsake - a small personal timeline service."""

__version__ = "1.0.0"
