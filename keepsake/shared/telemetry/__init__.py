"""Logging setup for Keepsake."""
