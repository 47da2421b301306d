"""Response models for WhatsApp endpoints."""

from pydantic import BaseModel, Field

from taskboard.database.whatsapp import ConnectionStatus


class ConnectionTestResponse(BaseModel):
    """Result of a WhatsApp connectivity test."""

    status: ConnectionStatus = Field(..., description="Connected or Disconnected")
    message: str = Field(..., description="Provider message")
