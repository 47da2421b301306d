"""Database models and operations for board users."""

from taskboard.database.users.models import User
from taskboard.database.users.operations import get_user_by_id, get_user_notification_preferences

__all__ = [
    "User",
    "get_user_by_id",
    "get_user_notification_preferences",
]
