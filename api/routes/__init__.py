"""API route handlers."""

from api.routes import health, claims

__all__ = ["health", "claims"]
