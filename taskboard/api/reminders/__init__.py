"""Endpoint for externally triggered reminder runs."""

from taskboard.api.reminders.endpoints import router

__all__ = ["router"]
