"""API route handlers."""

from src.api.openapi.routes import events, health, uploads, videos

__all__ = [
    "events",
    "health",
    "uploads",
    "videos",
]
