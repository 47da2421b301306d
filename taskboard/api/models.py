"""Shared API response models."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error body returned by failed requests."""

    detail: str = Field(..., description="Error description")
