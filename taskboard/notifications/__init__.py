"""In-app notification emitter."""

from taskboard.notifications.service import (
    NotificationResult,
    NotificationType,
    create_notification,
    notify_users,
)

__all__ = [
    "NotificationResult",
    "NotificationType",
    "create_notification",
    "notify_users",
]
