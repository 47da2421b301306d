"""Configuration for the reminder engine using pydantic-settings."""

from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from taskboard.paths import ENV_FILE


class ReminderConfig(BaseSettings):
    """Configuration for reminder scheduling and dispatch.

    All settings are loaded from environment variables with the REMINDER_ prefix.

    :param timezone: IANA timezone that defines "today" and the daily schedule.
    :param schedule_cron: Cron expression for the daily run.
    :param dispatch_delay_seconds: Pause between consecutive WhatsApp sends.
    :param lease_ttl_minutes: How long a run lease stays valid if never released.
    """

    model_config = SettingsConfigDict(
        env_prefix="REMINDER_",
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    timezone: str = Field(
        default="Asia/Jakarta",
        description="IANA timezone used to compute today's date",
    )
    schedule_cron: str = Field(
        default="0 8 * * *",
        description="Cron expression for the daily reminder run",
    )
    dispatch_delay_seconds: float = Field(
        default=90,
        ge=0,
        le=3600,
        description="Seconds to wait between WhatsApp messages (provider rate limit)",
    )
    lease_ttl_minutes: int = Field(
        default=120,
        ge=1,
        le=24 * 60,
        description="Minutes after which an unreleased run lease expires",
    )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate that the timezone is known to the system tz database.

        :param v: Timezone name.
        :returns: The validated name.
        :raises ValueError: If the timezone does not exist.
        """
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

    @property
    def tzinfo(self) -> ZoneInfo:
        """Get the configured timezone."""
        return ZoneInfo(self.timezone)


@lru_cache
def get_reminder_settings() -> ReminderConfig:
    """Get cached reminder settings.

    :returns: Configured ReminderConfig instance.
    """
    return ReminderConfig()
