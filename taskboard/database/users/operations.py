"""Database operations for board users."""

from __future__ import annotations

import json
import logging
import uuid as uuid_module
from typing import Any

from sqlalchemy.orm import Session

from taskboard.database.users.models import User

logger = logging.getLogger(__name__)


def get_user_by_id(session: Session, user_id: uuid_module.UUID) -> User | None:
    """Get a user by ID.

    :param session: Database session.
    :param user_id: User ID.
    :returns: The user or None if not found.
    """
    return session.query(User).filter(User.id == user_id).first()


def get_user_notification_preferences(
    session: Session,
    user_id: uuid_module.UUID,
) -> dict[str, bool] | None:
    """Get a user's notification preference map.

    Preferences written by older clients may be stored as a JSON string, so
    both encodings are accepted. Keys missing from the map are treated as
    enabled by callers.

    :param session: Database session.
    :param user_id: User ID.
    :returns: The preference map, or None if the user does not exist.
    """
    user = get_user_by_id(session, user_id)
    if user is None:
        return None

    raw: Any = user.notification_preferences
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Ignoring malformed notification preferences for user {user_id}")
            return {}

    if not isinstance(raw, dict):
        return {}

    return {str(key): bool(value) for key, value in raw.items()}
