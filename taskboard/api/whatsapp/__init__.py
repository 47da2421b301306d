"""WhatsApp connectivity endpoints."""

from taskboard.api.whatsapp.endpoints import router

__all__ = ["router"]
