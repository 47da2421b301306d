"""Tests for user database operations."""

import unittest
from unittest.mock import MagicMock
from uuid import uuid4

from taskboard.database.users.models import User
from taskboard.database.users.operations import (
    get_user_by_id,
    get_user_notification_preferences,
)


def _session_returning(user: User | None) -> MagicMock:
    mock_session = MagicMock()
    mock_session.query.return_value.filter.return_value.first.return_value = user
    return mock_session


def _user(preferences: object) -> User:
    return User(
        id=uuid4(),
        name="Dina Rahma",
        email="dina@example.com",
        notification_preferences=preferences,
    )


class TestGetUserById(unittest.TestCase):
    """Tests for get_user_by_id operation."""

    def test_returns_user(self) -> None:
        """Test that the user is returned when found."""
        user = _user({})

        self.assertIs(get_user_by_id(_session_returning(user), user.id), user)


class TestGetUserNotificationPreferences(unittest.TestCase):
    """Tests for get_user_notification_preferences operation."""

    def test_dict_preferences(self) -> None:
        """Test preferences stored as a JSON object."""
        user = _user({"deadlineAlert": False, "approval": True})

        result = get_user_notification_preferences(_session_returning(user), user.id)

        self.assertEqual(result, {"deadlineAlert": False, "approval": True})

    def test_string_preferences(self) -> None:
        """Test preferences stored as a JSON-encoded string."""
        user = _user('{"deadlineAlert": false}')

        result = get_user_notification_preferences(_session_returning(user), user.id)

        self.assertEqual(result, {"deadlineAlert": False})

    def test_malformed_string(self) -> None:
        """Test that malformed JSON is treated as no preferences."""
        user = _user("{not json")

        self.assertEqual(get_user_notification_preferences(_session_returning(user), user.id), {})

    def test_missing_user(self) -> None:
        """Test that None is returned for an unknown user."""
        self.assertIsNone(get_user_notification_preferences(_session_returning(None), uuid4()))


if __name__ == "__main__":
    unittest.main()
