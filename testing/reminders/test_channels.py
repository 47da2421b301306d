"""Tests for channel resolution."""

import unittest
from unittest.mock import MagicMock, patch
from uuid import uuid4

from taskboard.reminders.channels import ResolvedChannel, resolve_channel


def _group(group_type: str, encrypted: str = "enc-group") -> MagicMock:
    group = MagicMock()
    group.id = uuid4()
    group.type = group_type
    group.group_id_encrypted = encrypted
    return group


@patch("taskboard.reminders.channels.decrypt", side_effect=lambda value: f"plain:{value}")
class TestResolveChannel(unittest.TestCase):
    """Tests for resolve_channel function."""

    @patch("taskboard.reminders.channels.find_group_by_contains_type")
    @patch("taskboard.reminders.channels.find_group_by_exact_type")
    def test_exact_match_preferred(
        self,
        mock_exact: MagicMock,
        mock_contains: MagicMock,
        _mock_decrypt: MagicMock,
    ) -> None:
        """Test that an exact type match wins over a substring match."""
        exact = _group("Marketing", "enc-marketing")
        mock_exact.return_value = exact
        mock_contains.return_value = _group("Marketing-Finance", "enc-mf")

        result = resolve_channel(MagicMock(), "Marketing")

        self.assertEqual(
            result,
            ResolvedChannel(channel_id=exact.id, destination_id="plain:enc-marketing"),
        )
        mock_contains.assert_not_called()

    @patch("taskboard.reminders.channels.find_group_by_contains_type")
    @patch("taskboard.reminders.channels.find_group_by_exact_type")
    def test_falls_back_to_contains_match(
        self,
        mock_exact: MagicMock,
        mock_contains: MagicMock,
        _mock_decrypt: MagicMock,
    ) -> None:
        """Test that a substring match is used when no exact match exists."""
        mock_exact.return_value = None
        fallback = _group("Marketing-Finance", "enc-mf")
        mock_contains.return_value = fallback
        session = MagicMock()

        result = resolve_channel(session, "Marketing")

        self.assertIsNotNone(result)
        self.assertEqual(result.channel_id, fallback.id)
        self.assertEqual(result.destination_id, "plain:enc-mf")
        mock_contains.assert_called_once_with(session, "Marketing")

    @patch("taskboard.reminders.channels.find_group_by_contains_type")
    @patch("taskboard.reminders.channels.find_group_by_exact_type")
    def test_returns_none_when_no_group(
        self,
        mock_exact: MagicMock,
        mock_contains: MagicMock,
        mock_decrypt: MagicMock,
    ) -> None:
        """Test that None is returned when nothing matches."""
        mock_exact.return_value = None
        mock_contains.return_value = None

        result = resolve_channel(MagicMock(), "Sales")

        self.assertIsNone(result)
        mock_decrypt.assert_not_called()

    @patch("taskboard.reminders.channels.find_group_by_contains_type")
    @patch("taskboard.reminders.channels.find_group_by_exact_type")
    def test_decrypt_error_propagates(
        self,
        mock_exact: MagicMock,
        _mock_contains: MagicMock,
        mock_decrypt: MagicMock,
    ) -> None:
        """Test that an undecryptable group ID raises ValueError."""
        mock_exact.return_value = _group("Marketing")
        mock_decrypt.side_effect = ValueError("Invalid or corrupted encrypted value")

        with self.assertRaises(ValueError):
            resolve_channel(MagicMock(), "Marketing")


if __name__ == "__main__":
    unittest.main()
