"""Resolve Watzap credentials and build clients."""

import logging
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from taskboard.database.whatsapp import (
    ConnectionStatus,
    get_default_account,
    update_account_connection_status,
)
from taskboard.messaging.whatsapp.client import (
    WatzapClient,
    WatzapClientError,
    WatzapConfigurationError,
)
from taskboard.messaging.whatsapp.models import ApiStatus, WatzapCredentials
from taskboard.messaging.whatsapp.utils.config import get_watzap_settings
from taskboard.utils.crypto import decrypt

logger = logging.getLogger(__name__)


def get_watzap_credentials(session: Session) -> WatzapCredentials:
    """Resolve Watzap credentials.

    The account saved through the settings page wins; WATZAP_API_KEY and
    WATZAP_NUMBER_KEY are the fallback.

    :param session: Database session.
    :returns: The credentials to use.
    :raises WatzapConfigurationError: If neither source provides credentials.
    """
    account = get_default_account(session)
    if account is not None:
        return WatzapCredentials(
            api_key=decrypt(account.api_key_encrypted),
            number_key=account.number_key,
        )

    settings = get_watzap_settings()
    if not settings.api_key or not settings.number_key:
        raise WatzapConfigurationError(
            "WhatsApp credentials not configured. Set up via Settings or "
            "WATZAP_API_KEY/WATZAP_NUMBER_KEY env vars."
        )

    logger.debug("Using Watzap credentials from environment")
    return WatzapCredentials(api_key=settings.api_key, number_key=settings.number_key)


def build_watzap_client(session: Session) -> WatzapClient:
    """Build a Watzap client from the resolved credentials.

    :param session: Database session.
    :returns: A configured client.
    :raises WatzapConfigurationError: If no credentials are configured.
    """
    credentials = get_watzap_credentials(session)
    settings = get_watzap_settings()
    return WatzapClient(
        api_key=credentials.api_key,
        number_key=credentials.number_key,
        base_url=settings.url,
        timeout=settings.request_timeout,
    )


def check_whatsapp_connection(session: Session) -> ApiStatus:
    """Run a connectivity check and record its outcome on the stored account.

    Request failures are reported as a disconnected status rather than raised.

    :param session: Database session.
    :returns: The connection status.
    :raises WatzapConfigurationError: If no credentials are configured.
    """
    client = build_watzap_client(session)
    now = datetime.now(UTC)

    try:
        result = client.check_status()
    except WatzapClientError as e:
        logger.warning(f"WhatsApp connection test failed: {e}")
        update_account_connection_status(session, ConnectionStatus.DISCONNECTED, now)
        return ApiStatus(status=False, message=str(e))

    status = ConnectionStatus.CONNECTED if result.status else ConnectionStatus.DISCONNECTED
    update_account_connection_status(session, status, now)
    return result
