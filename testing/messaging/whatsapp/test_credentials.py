"""Tests for Watzap credential resolution."""

import unittest
from unittest.mock import MagicMock, patch

from taskboard.database.whatsapp import ConnectionStatus
from taskboard.messaging.whatsapp.client import WatzapClientError, WatzapConfigurationError
from taskboard.messaging.whatsapp.credentials import (
    build_watzap_client,
    check_whatsapp_connection,
    get_watzap_credentials,
)
from taskboard.messaging.whatsapp.models import ApiStatus
from taskboard.messaging.whatsapp.utils.config import WatzapConfig


def _settings(**overrides: object) -> WatzapConfig:
    values = {"url": "https://api.watzap.id/v1", "api_key": None, "number_key": None}
    values.update(overrides)
    return WatzapConfig(_env_file=None, **values)


@patch("taskboard.messaging.whatsapp.credentials.get_watzap_settings")
@patch("taskboard.messaging.whatsapp.credentials.get_default_account")
class TestGetWatzapCredentials(unittest.TestCase):
    """Tests for get_watzap_credentials function."""

    @patch("taskboard.messaging.whatsapp.credentials.decrypt", return_value="stored-key")
    def test_stored_account_wins(
        self,
        mock_decrypt: MagicMock,
        mock_account: MagicMock,
        mock_settings: MagicMock,
    ) -> None:
        """Test that the stored account is used over environment values."""
        mock_account.return_value = MagicMock(
            api_key_encrypted="encrypted", number_key="stored-number"
        )
        mock_settings.return_value = _settings(api_key="env-key", number_key="env-number")

        credentials = get_watzap_credentials(MagicMock())

        self.assertEqual(credentials.api_key, "stored-key")
        self.assertEqual(credentials.number_key, "stored-number")
        mock_decrypt.assert_called_once_with("encrypted")

    def test_falls_back_to_environment(
        self, mock_account: MagicMock, mock_settings: MagicMock
    ) -> None:
        """Test the environment fallback when no account is stored."""
        mock_account.return_value = None
        mock_settings.return_value = _settings(api_key="env-key", number_key="env-number")

        credentials = get_watzap_credentials(MagicMock())

        self.assertEqual(credentials.api_key, "env-key")
        self.assertEqual(credentials.number_key, "env-number")

    def test_raises_when_nothing_configured(
        self, mock_account: MagicMock, mock_settings: MagicMock
    ) -> None:
        """Test that missing credentials raise a configuration error."""
        mock_account.return_value = None
        mock_settings.return_value = _settings(api_key="env-key")

        with self.assertRaises(WatzapConfigurationError):
            get_watzap_credentials(MagicMock())


class TestBuildWatzapClient(unittest.TestCase):
    """Tests for build_watzap_client function."""

    @patch("taskboard.messaging.whatsapp.credentials.WatzapClient")
    @patch("taskboard.messaging.whatsapp.credentials.get_watzap_settings")
    @patch("taskboard.messaging.whatsapp.credentials.get_default_account", return_value=None)
    def test_builds_client_from_settings(
        self,
        _mock_account: MagicMock,
        mock_settings: MagicMock,
        mock_client_cls: MagicMock,
    ) -> None:
        """Test that the client receives credentials, URL and timeout."""
        mock_settings.return_value = _settings(
            url="https://watzap.test/v1", api_key="k", number_key="n", request_timeout=15
        )

        build_watzap_client(MagicMock())

        mock_client_cls.assert_called_once_with(
            api_key="k",
            number_key="n",
            base_url="https://watzap.test/v1",
            timeout=15,
        )


@patch("taskboard.messaging.whatsapp.credentials.update_account_connection_status")
@patch("taskboard.messaging.whatsapp.credentials.build_watzap_client")
class TestCheckWhatsappConnection(unittest.TestCase):
    """Tests for check_whatsapp_connection function."""

    def test_connected(self, mock_build: MagicMock, mock_update: MagicMock) -> None:
        """Test a successful check records Connected."""
        mock_build.return_value.check_status.return_value = ApiStatus(status=True, message="OK")
        session = MagicMock()

        result = check_whatsapp_connection(session)

        self.assertTrue(result.status)
        self.assertEqual(mock_update.call_args.args[:2], (session, ConnectionStatus.CONNECTED))

    def test_request_failure_records_disconnected(
        self, mock_build: MagicMock, mock_update: MagicMock
    ) -> None:
        """Test that a request error is returned as a disconnected status."""
        mock_build.return_value.check_status.side_effect = WatzapClientError("timed out")
        session = MagicMock()

        result = check_whatsapp_connection(session)

        self.assertFalse(result.status)
        self.assertEqual(result.message, "timed out")
        self.assertEqual(mock_update.call_args.args[:2], (session, ConnectionStatus.DISCONNECTED))

    def test_configuration_error_propagates(
        self, mock_build: MagicMock, mock_update: MagicMock
    ) -> None:
        """Test that missing credentials are raised to the caller."""
        mock_build.side_effect = WatzapConfigurationError("not configured")

        with self.assertRaises(WatzapConfigurationError):
            check_whatsapp_connection(MagicMock())

        mock_update.assert_not_called()


if __name__ == "__main__":
    unittest.main()
