"""Watzap API client for sending WhatsApp group messages."""

import logging
from typing import Any

import requests

from taskboard.messaging.whatsapp.models import ApiStatus

logger = logging.getLogger(__name__)

# Default API timeout in seconds
DEFAULT_REQUEST_TIMEOUT = 30

# Values of the provider's "status" field that signal a rejected request
_FAILURE_STATUSES = frozenset({"false", "error", "failed", "fail"})


class WatzapClientError(Exception):
    """Raised when a Watzap API request fails."""

    pass


class WatzapConfigurationError(Exception):
    """Raised when no Watzap credentials are configured."""

    pass


def _is_failure(result: dict[str, Any]) -> bool:
    status = result.get("status")
    if status is False:
        return True
    if isinstance(status, int) and not isinstance(status, bool):
        return status >= 400
    if isinstance(status, str):
        if status.isdigit():
            return int(status) >= 400
        return status.strip().lower() in _FAILURE_STATUSES
    return False


class WatzapClient:
    """Client for the Watzap WhatsApp gateway."""

    def __init__(
        self,
        *,
        api_key: str,
        number_key: str,
        base_url: str = "https://api.watzap.id/v1",
        timeout: int = DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        """Initialise the Watzap client.

        :param api_key: Watzap API key.
        :param number_key: Number key of the sending WhatsApp account.
        :param base_url: Base URL of the Watzap API.
        :param timeout: Timeout in seconds for each request.
        """
        self._api_key = api_key
        self._number_key = number_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        logger.debug(f"WatzapClient initialised with base_url={self._base_url}")

    def _post(self, endpoint: str, payload: dict[str, Any]) -> dict[str, Any]:
        url = f"{self._base_url}/{endpoint}"
        try:
            response = requests.post(url, json=payload, timeout=self._timeout)
            response.raise_for_status()
            result = response.json()

        except requests.exceptions.Timeout as e:
            raise WatzapClientError(
                f"Watzap API request timed out after {self._timeout}s"
            ) from e
        except requests.exceptions.RequestException as e:
            raise WatzapClientError(f"Watzap API request failed: {e}") from e
        except ValueError as e:
            raise WatzapClientError(f"Watzap API returned invalid JSON: {e}") from e

        if not isinstance(result, dict):
            raise WatzapClientError(f"Unexpected Watzap API response: {result!r}")

        return result

    def check_status(self) -> ApiStatus:
        """Check that the API key is valid and the sender is connected.

        :returns: Connection status and the provider's message.
        :raises WatzapClientError: If the request fails.
        """
        result = self._post("checking_key", {"api_key": self._api_key})
        connected = result.get("status") is True
        message = result.get("message") or ("Connected" if connected else "Disconnected")
        logger.info(f"Watzap status check: connected={connected}")
        return ApiStatus(status=connected, message=str(message))

    def send_group_message(self, group_id: str, message: str) -> dict[str, Any]:
        """Send a text message to a WhatsApp group.

        :param group_id: Provider group ID.
        :param message: Message text.
        :returns: The provider's response body.
        :raises WatzapClientError: If the request fails or the provider rejects it.
        """
        logger.info(f"Sending WhatsApp group message ({len(message)} chars)")
        result = self._post(
            "send_message_group",
            {
                "api_key": self._api_key,
                "number_key": self._number_key,
                "group_id": group_id,
                "message": message,
            },
        )

        if _is_failure(result):
            error_description = result.get("message", "Unknown error")
            raise WatzapClientError(f"Watzap API returned error: {error_description}")

        return result
