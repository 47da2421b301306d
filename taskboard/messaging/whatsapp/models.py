"""Pydantic models for Watzap API responses."""

from pydantic import BaseModel, Field


class ApiStatus(BaseModel):
    """Result of a Watzap connectivity check."""

    status: bool = Field(..., description="True if the API key is valid and connected")
    message: str = Field(..., description="Provider message")


class WatzapCredentials(BaseModel):
    """Credentials used for one run against the Watzap API."""

    api_key: str = Field(..., description="Watzap API key")
    number_key: str = Field(..., description="Sender number key")
