"""Database operations for the WhatsApp account and groups."""

from __future__ import annotations

import logging
import uuid as uuid_module
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from taskboard.database.whatsapp.models import (
    DEFAULT_ACCOUNT_ID,
    ConnectionStatus,
    WhatsappAccount,
    WhatsappGroup,
)

logger = logging.getLogger(__name__)


def get_default_account(session: Session) -> WhatsappAccount | None:
    """Get the sender account configured through the settings page.

    :param session: Database session.
    :returns: The account or None if not configured.
    """
    return session.query(WhatsappAccount).filter(WhatsappAccount.id == DEFAULT_ACCOUNT_ID).first()


def update_account_connection_status(
    session: Session,
    status: ConnectionStatus,
    now: datetime | None = None,
) -> WhatsappAccount | None:
    """Record the outcome of a connectivity test on the sender account.

    :param session: Database session.
    :param status: The tested connection status.
    :param now: Test time (defaults to now).
    :returns: The updated account or None if no account is stored.
    """
    if now is None:
        now = datetime.now(UTC)

    account = get_default_account(session)
    if account is None:
        return None

    account.connection_status = status.value
    account.last_tested_at = now
    session.flush()
    logger.info(f"Updated WhatsApp account connection status: {status.value}")
    return account


def find_group_by_exact_type(session: Session, channel: str) -> WhatsappGroup | None:
    """Find the first group whose logical type equals the channel name.

    :param session: Database session.
    :param channel: Logical channel name.
    :returns: The group or None if not found.
    """
    return (
        session.query(WhatsappGroup)
        .filter(WhatsappGroup.type == channel)
        .order_by(WhatsappGroup.created_at)
        .first()
    )


def find_group_by_contains_type(session: Session, channel: str) -> WhatsappGroup | None:
    """Find the first group whose logical type contains the channel name.

    :param session: Database session.
    :param channel: Logical channel name.
    :returns: The group or None if not found.
    """
    return (
        session.query(WhatsappGroup)
        .filter(WhatsappGroup.type.contains(channel, autoescape=True))
        .order_by(WhatsappGroup.created_at)
        .first()
    )


def update_group_last_sent(
    session: Session,
    group_id: uuid_module.UUID,
    now: datetime | None = None,
) -> WhatsappGroup | None:
    """Record that a message was delivered to a group.

    :param session: Database session.
    :param group_id: Database ID of the group.
    :param now: Send time (defaults to now).
    :returns: The updated group or None if not found.
    """
    if now is None:
        now = datetime.now(UTC)

    group = session.query(WhatsappGroup).filter(WhatsappGroup.id == group_id).first()
    if group is None:
        logger.warning(f"Cannot record last send, WhatsApp group not found: {group_id}")
        return None

    group.last_message_sent_at = now
    session.flush()
    logger.debug(f"Updated last_message_sent_at for group {group_id}")
    return group
