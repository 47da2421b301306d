"""Database operations for deadline reminders, templates and run leases."""

from __future__ import annotations

import logging
import uuid as uuid_module
from datetime import UTC, datetime, timedelta

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload, selectinload

from taskboard.database.activities.models import (
    Activity,
    ActivityApprover,
    ActivityPic,
    Task,
    TaskApprover,
    TaskPic,
)
from taskboard.database.reminders.models import (
    ActivityReminder,
    MessageTemplate,
    ReminderRunLease,
    TaskReminder,
)
from taskboard.reminders.templates import extract_placeholders

logger = logging.getLogger(__name__)

# Lease name shared by every entry point that runs the reminder job
PROCESS_ALL_REMINDERS_LEASE = "process_all_reminders"


def list_enabled_activity_reminders(session: Session) -> list[ActivityReminder]:
    """Get all enabled activity reminders with their activity eagerly loaded.

    The activity's type, PICs and approvers (with their users) are loaded
    alongside so the collector does not issue per-reminder queries.

    :param session: Database session.
    :returns: List of enabled activity reminders.
    """
    return (
        session.query(ActivityReminder)
        .options(
            joinedload(ActivityReminder.activity).joinedload(Activity.activity_type),
            joinedload(ActivityReminder.activity)
            .selectinload(Activity.pics)
            .joinedload(ActivityPic.user),
            joinedload(ActivityReminder.activity)
            .selectinload(Activity.approvers)
            .joinedload(ActivityApprover.user),
        )
        .filter(ActivityReminder.enabled.is_(True))
        .order_by(ActivityReminder.created_at)
        .all()
    )


def list_enabled_task_reminders(session: Session) -> list[TaskReminder]:
    """Get all enabled task reminders with their task eagerly loaded.

    :param session: Database session.
    :returns: List of enabled task reminders.
    """
    return (
        session.query(TaskReminder)
        .options(
            joinedload(TaskReminder.task)
            .joinedload(Task.activity)
            .joinedload(Activity.activity_type),
            joinedload(TaskReminder.task).selectinload(Task.pics).joinedload(TaskPic.user),
            joinedload(TaskReminder.task)
            .selectinload(Task.approvers)
            .joinedload(TaskApprover.user),
        )
        .filter(TaskReminder.enabled.is_(True))
        .order_by(TaskReminder.created_at)
        .all()
    )


def get_message_template(
    session: Session,
    template_id: uuid_module.UUID,
) -> MessageTemplate | None:
    """Get a message template by ID.

    :param session: Database session.
    :param template_id: Template ID.
    :returns: The template or None if not found.
    """
    return session.query(MessageTemplate).filter(MessageTemplate.id == template_id).first()


def create_message_template(
    session: Session,
    name: str,
    body: str,
) -> MessageTemplate:
    """Create a message template, deriving its placeholder list from the body.

    :param session: Database session.
    :param name: Template name.
    :param body: Template body containing {{placeholder}} tokens.
    :returns: The created template.
    """
    template = MessageTemplate(
        name=name,
        body=body,
        placeholders=extract_placeholders(body),
    )
    session.add(template)
    session.flush()
    logger.info(
        f"Created message template: id={template.id}, placeholders={template.placeholders}"
    )
    return template


def acquire_run_lease(
    session: Session,
    holder: str,
    ttl: timedelta,
    name: str = PROCESS_ALL_REMINDERS_LEASE,
    now: datetime | None = None,
) -> bool:
    """Try to take the named run lease.

    The lease row is locked for the duration of the check. A lease that is
    held but past its expiry is taken over.

    :param session: Database session. The caller commits to publish the lease.
    :param holder: Token identifying this run.
    :param ttl: How long the lease stays valid without being released.
    :param name: Lease name.
    :param now: Current time (defaults to now).
    :returns: True if the lease was acquired, False if another run holds it.
    """
    if now is None:
        now = datetime.now(UTC)

    lease = (
        session.query(ReminderRunLease)
        .filter(ReminderRunLease.name == name)
        .with_for_update()
        .first()
    )

    if lease is None:
        lease = ReminderRunLease(
            name=name,
            holder=holder,
            acquired_at=now,
            expires_at=now + ttl,
        )
        try:
            with session.begin_nested():
                session.add(lease)
        except IntegrityError:
            logger.info(f"Run lease {name} was created concurrently by another run")
            return False
        logger.info(f"Acquired new run lease: name={name}, holder={holder}")
        return True

    if lease.is_held(now):
        logger.info(
            f"Run lease {name} is held by {lease.holder} until {lease.expires_at}"
        )
        return False

    if lease.holder is not None:
        logger.warning(
            f"Taking over expired run lease {name} from {lease.holder} "
            f"(expired at {lease.expires_at})"
        )

    lease.holder = holder
    lease.acquired_at = now
    lease.expires_at = now + ttl
    session.flush()
    logger.info(f"Acquired run lease: name={name}, holder={holder}")
    return True


def release_run_lease(
    session: Session,
    holder: str,
    name: str = PROCESS_ALL_REMINDERS_LEASE,
    now: datetime | None = None,
) -> bool:
    """Release the named run lease if this holder still owns it.

    :param session: Database session.
    :param holder: Token identifying this run.
    :param name: Lease name.
    :param now: Current time (defaults to now).
    :returns: True if the lease was released, False if it was not held by this holder.
    """
    if now is None:
        now = datetime.now(UTC)

    lease = (
        session.query(ReminderRunLease)
        .filter(ReminderRunLease.name == name)
        .with_for_update()
        .first()
    )
    if lease is None or lease.holder != holder:
        logger.warning(f"Run lease {name} not held by {holder}, nothing to release")
        return False

    lease.holder = None
    lease.expires_at = now
    session.flush()
    logger.info(f"Released run lease: name={name}, holder={holder}")
    return True
