"""Multi-tenant identity, session and authorization service."""

__version__ = "1.0.0"
