"""Health check endpoints."""

from taskboard.api.health.endpoints import router

__all__ = ["router"]
