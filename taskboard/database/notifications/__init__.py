"""Database model and operations for in-app notifications."""

from taskboard.database.notifications.models import Notification
from taskboard.database.notifications.operations import create_notification_record

__all__ = [
    "Notification",
    "create_notification_record",
]
