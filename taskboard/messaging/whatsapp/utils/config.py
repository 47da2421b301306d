"""Configuration for the Watzap WhatsApp integration using pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from taskboard.paths import ENV_FILE


class WatzapConfig(BaseSettings):
    """Configuration for the Watzap API.

    All settings are loaded from environment variables with the WATZAP_ prefix.
    The API key and number key here are only a fallback for when no account
    has been saved through the settings page.

    :param url: Base URL of the Watzap API.
    :param api_key: Fallback API key.
    :param number_key: Fallback sender number key.
    :param request_timeout: Timeout in seconds for each API call.
    """

    model_config = SettingsConfigDict(
        env_prefix="WATZAP_",
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    url: str = Field(
        default="https://api.watzap.id/v1",
        description="Base URL of the Watzap API",
    )
    api_key: str | None = Field(
        default=None,
        description="Fallback API key when no account is stored",
    )
    number_key: str | None = Field(
        default=None,
        description="Fallback sender number key when no account is stored",
    )
    request_timeout: int = Field(
        default=30,
        ge=1,
        le=300,
        description="Timeout in seconds for each API call",
    )


@lru_cache
def get_watzap_settings() -> WatzapConfig:
    """Get cached Watzap settings.

    :returns: Configured WatzapConfig instance.
    """
    return WatzapConfig()
