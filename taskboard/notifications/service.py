"""Create in-app notifications, honouring each user's preferences.

Notification delivery must never break the operation that raised it, so
``create_notification`` reports failures through its return value instead of
raising. Callers decide whether to log them.
"""

import logging
import uuid as uuid_module
from collections.abc import Iterable
from enum import StrEnum

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from taskboard.database.notifications import create_notification_record
from taskboard.database.users import get_user_notification_preferences

logger = logging.getLogger(__name__)


class NotificationType(StrEnum):
    """Notification types raised across the board."""

    TASK_ASSIGNMENT = "taskAssignment"
    APPROVAL = "approval"
    REVISION = "revision"
    REASSIGNMENT = "reassignment"
    DEADLINE_ALERT = "deadlineAlert"
    REMINDER = "reminder"


class NotificationResult(StrEnum):
    """Outcome of a single notification attempt."""

    CREATED = "created"
    SKIPPED = "skipped"
    FAILED = "failed"


# Preference key consulted for each notification type
TYPE_TO_PREFERENCE_KEY: dict[str, str] = {
    NotificationType.TASK_ASSIGNMENT: "taskAssignment",
    NotificationType.APPROVAL: "approval",
    NotificationType.REVISION: "revision",
    NotificationType.REASSIGNMENT: "reassignment",
    NotificationType.DEADLINE_ALERT: "deadlineAlert",
    NotificationType.REMINDER: "deadlineAlert",
}


def _is_enabled(preferences: dict[str, bool] | None, notification_type: str) -> bool:
    if not preferences:
        return True
    key = TYPE_TO_PREFERENCE_KEY.get(notification_type, notification_type)
    return preferences.get(key, True) is not False


def create_notification(  # noqa: PLR0913
    session: Session,
    *,
    user_id: uuid_module.UUID,
    notification_type: str,
    title: str,
    message: str,
    task_id: uuid_module.UUID | None = None,
    activity_id: uuid_module.UUID | None = None,
) -> NotificationResult:
    """Create a notification for one user unless they opted out of its type.

    The insert runs inside a SAVEPOINT so a failed write leaves the caller's
    transaction usable.

    :param session: Database session.
    :param user_id: Recipient user ID.
    :param notification_type: Notification type (see ``NotificationType``).
    :param title: Short title.
    :param message: Notification body.
    :param task_id: Optional related task.
    :param activity_id: Optional related activity.
    :returns: CREATED, SKIPPED (user disabled the type) or FAILED.
    """
    try:
        with session.begin_nested():
            preferences = get_user_notification_preferences(session, user_id)
            if not _is_enabled(preferences, notification_type):
                logger.debug(f"User {user_id} disabled {notification_type} notifications")
                return NotificationResult.SKIPPED

            create_notification_record(
                session,
                user_id=user_id,
                notification_type=notification_type,
                title=title,
                message=message,
                task_id=task_id,
                activity_id=activity_id,
            )
    except SQLAlchemyError as e:
        logger.error(f"Failed to create {notification_type} notification for user {user_id}: {e}")
        return NotificationResult.FAILED
    except Exception as e:
        logger.exception(
            f"Unexpected error creating {notification_type} notification for user {user_id}: {e}"
        )
        return NotificationResult.FAILED

    return NotificationResult.CREATED


def notify_users(  # noqa: PLR0913
    session: Session,
    user_ids: Iterable[uuid_module.UUID],
    actor_id: uuid_module.UUID | None,
    *,
    notification_type: str,
    title: str,
    message: str,
    task_id: uuid_module.UUID | None = None,
    activity_id: uuid_module.UUID | None = None,
) -> dict[uuid_module.UUID, NotificationResult]:
    """Notify several users about the same event, skipping the actor.

    :param session: Database session.
    :param user_ids: Recipient user IDs.
    :param actor_id: User who caused the event, or None for system events.
    :param notification_type: Notification type.
    :param title: Short title.
    :param message: Notification body.
    :param task_id: Optional related task.
    :param activity_id: Optional related activity.
    :returns: Outcome per recipient.
    """
    results: dict[uuid_module.UUID, NotificationResult] = {}
    for user_id in user_ids:
        if actor_id is not None and user_id == actor_id:
            continue
        results[user_id] = create_notification(
            session,
            user_id=user_id,
            notification_type=notification_type,
            title=title,
            message=message,
            task_id=task_id,
            activity_id=activity_id,
        )
    return results
