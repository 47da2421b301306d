"""WhatsApp delivery through the Watzap gateway."""

from taskboard.messaging.whatsapp.client import (
    WatzapClient,
    WatzapClientError,
    WatzapConfigurationError,
)
from taskboard.messaging.whatsapp.credentials import (
    build_watzap_client,
    check_whatsapp_connection,
    get_watzap_credentials,
)
from taskboard.messaging.whatsapp.models import ApiStatus, WatzapCredentials
from taskboard.messaging.whatsapp.utils.config import WatzapConfig, get_watzap_settings

__all__ = [
    "ApiStatus",
    "WatzapClient",
    "WatzapClientError",
    "WatzapConfig",
    "WatzapConfigurationError",
    "WatzapCredentials",
    "build_watzap_client",
    "check_whatsapp_connection",
    "get_watzap_credentials",
    "get_watzap_settings",
]
