"""
Application layer - use cases and services.

Orchestrates the domain entities through the ports declared in
`keepsake.application.interfaces`.
"""
