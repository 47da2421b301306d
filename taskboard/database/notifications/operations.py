"""Database operations for in-app notifications."""

from __future__ import annotations

import logging
import uuid as uuid_module

from sqlalchemy.orm import Session

from taskboard.database.notifications.models import Notification

logger = logging.getLogger(__name__)


def create_notification_record(  # noqa: PLR0913
    session: Session,
    user_id: uuid_module.UUID,
    notification_type: str,
    title: str,
    message: str,
    task_id: uuid_module.UUID | None = None,
    activity_id: uuid_module.UUID | None = None,
) -> Notification:
    """Insert a notification row.

    :param session: Database session.
    :param user_id: Recipient user ID.
    :param notification_type: Notification type (e.g. ``deadlineAlert``).
    :param title: Short title.
    :param message: Notification body.
    :param task_id: Optional related task.
    :param activity_id: Optional related activity.
    :returns: The created notification.
    """
    notification = Notification(
        user_id=user_id,
        type=notification_type,
        title=title,
        message=message,
        task_id=task_id,
        activity_id=activity_id,
    )
    session.add(notification)
    session.flush()
    logger.debug(
        f"Created notification: id={notification.id}, user_id={user_id}, type={notification_type}"
    )
    return notification
