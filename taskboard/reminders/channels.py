"""Resolve a reminder's logical channel name to a WhatsApp group."""

import logging
import uuid as uuid_module
from dataclasses import dataclass

from sqlalchemy.orm import Session

from taskboard.database.whatsapp import find_group_by_contains_type, find_group_by_exact_type
from taskboard.utils.crypto import decrypt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedChannel:
    """A channel resolved to a concrete destination."""

    channel_id: uuid_module.UUID
    destination_id: str


def resolve_channel(session: Session, channel_name: str) -> ResolvedChannel | None:
    """Look up the WhatsApp group for a logical channel name.

    An exact match on the group's type wins; otherwise the first group whose
    type contains the name is used.

    :param session: Database session.
    :param channel_name: Logical channel name from the reminder.
    :returns: The resolved channel, or None if no group matches.
    """
    group = find_group_by_exact_type(session, channel_name)
    if group is None:
        group = find_group_by_contains_type(session, channel_name)
        if group is not None:
            logger.debug(f"Channel {channel_name!r} matched group type {group.type!r} by substring")

    if group is None:
        return None

    return ResolvedChannel(
        channel_id=group.id,
        destination_id=decrypt(group.group_id_encrypted),
    )
