"""
Middleware layer for Keepsake application.

This package contains middleware components for request processing,
request IDs, size limits and security headers.
"""
