"""Turn stored reminder rules into dispatch items and in-app notifications.

Activity and task reminders follow the same steps and differ only in the
parent entity they hang off. Each ``ReminderSource`` describes one parent
shape; ``collect_reminders`` runs the shared steps against it.
"""

import logging
import uuid as uuid_module
from collections.abc import Sequence
from datetime import date, tzinfo
from typing import Any, ClassVar, Protocol

from sqlalchemy.orm import Session

from taskboard.database.activities.models import Activity, ActivityStatus, Task, TaskStatus
from taskboard.database.reminders import (
    ActivityReminder,
    ReminderRuleMixin,
    TaskReminder,
    get_message_template,
    list_enabled_activity_reminders,
    list_enabled_task_reminders,
)
from taskboard.notifications import NotificationResult, NotificationType, create_notification
from taskboard.reminders.channels import resolve_channel
from taskboard.reminders.models import DispatchItem
from taskboard.reminders.templates import render_template
from taskboard.reminders.triggers import should_trigger, to_date
from taskboard.utils.crypto import EncryptionKeyError

logger = logging.getLogger(__name__)

NOTIFICATION_TITLE = "Deadline Reminder"

# Placeholder value when a parent has no assignees of a kind
EMPTY_NAMES = "-"


def join_names(assignees: Sequence[Any]) -> str:
    """Comma-join the user names of PIC/approver rows, or "-" when there are none."""
    names = [assignee.user.name for assignee in assignees]
    return ", ".join(names) or EMPTY_NAMES


class ReminderSource(Protocol):
    """Parent-entity accessors for one kind of reminder."""

    kind: ClassVar[str]
    terminal_statuses: ClassVar[frozenset[str]]

    def list_reminders(self, session: Session) -> Sequence[ReminderRuleMixin]:
        """Fetch the enabled reminders of this kind."""
        ...

    def get_parent(self, reminder: Any) -> Any:
        """Get the activity or task a reminder belongs to."""
        ...

    def build_variables(self, parent: Any, deadline: str) -> dict[str, str]:
        """Build the template variables for a parent."""
        ...

    def fallback_message(self, parent: Any, deadline: str, *, template_missing: bool) -> str:
        """Build the message used when no template text is available."""
        ...

    def notification_message(self, parent: Any, deadline: str) -> str:
        """Build the in-app notification body."""
        ...

    def parent_refs(self, parent: Any) -> dict[str, uuid_module.UUID | None]:
        """Get the task/activity IDs to attach to notifications."""
        ...

    def describe(self, parent: Any) -> str:
        """Short human-readable name used in labels and logs."""
        ...


class ActivityReminderSource:
    """Reminders attached to an activity's end date."""

    kind: ClassVar[str] = "activity"
    terminal_statuses: ClassVar[frozenset[str]] = frozenset(
        {ActivityStatus.COMPLETED, ActivityStatus.CANCELLED, ActivityStatus.ARCHIVED}
    )

    def list_reminders(self, session: Session) -> Sequence[ActivityReminder]:
        return list_enabled_activity_reminders(session)

    def get_parent(self, reminder: ActivityReminder) -> Activity:
        return reminder.activity

    def build_variables(self, parent: Activity, deadline: str) -> dict[str, str]:
        return {
            "activity_name": parent.name,
            "task_name": "",
            "deadline": deadline,
            "pic_name": join_names(parent.pics),
            "status": parent.status,
            "activity_type": parent.activity_type.name,
            "approver_name": join_names(parent.approvers),
        }

    def fallback_message(self, parent: Activity, deadline: str, *, template_missing: bool) -> str:
        if template_missing:
            return f'Reminder: Activity "{parent.name}" deadline is {deadline}'
        return (
            f'Reminder: Activity "{parent.name}" deadline is {deadline}. '
            f"Status: {parent.status}. PICs: {join_names(parent.pics)}"
        )

    def notification_message(self, parent: Activity, deadline: str) -> str:
        return f'Activity "{parent.name}" deadline: {deadline}'

    def parent_refs(self, parent: Activity) -> dict[str, uuid_module.UUID | None]:
        return {"task_id": None, "activity_id": parent.id}

    def describe(self, parent: Activity) -> str:
        return f'Activity "{parent.name}"'


class TaskReminderSource:
    """Reminders attached to a task's end date."""

    kind: ClassVar[str] = "task"
    terminal_statuses: ClassVar[frozenset[str]] = frozenset(
        {TaskStatus.ARCHIVED, TaskStatus.APPROVED}
    )

    def list_reminders(self, session: Session) -> Sequence[TaskReminder]:
        return list_enabled_task_reminders(session)

    def get_parent(self, reminder: TaskReminder) -> Task:
        return reminder.task

    def build_variables(self, parent: Task, deadline: str) -> dict[str, str]:
        return {
            "task_name": parent.name,
            "activity_name": parent.activity.name,
            "deadline": deadline,
            "pic_name": join_names(parent.pics),
            "status": parent.status,
            "activity_type": parent.activity.activity_type.name,
            "approver_name": join_names(parent.approvers),
        }

    def fallback_message(self, parent: Task, deadline: str, *, template_missing: bool) -> str:
        if template_missing:
            return f'Reminder: Task "{parent.name}" deadline is {deadline}'
        return (
            f'Reminder: Task "{parent.name}" ({parent.activity.name}) deadline is {deadline}. '
            f"Status: {parent.status}. PICs: {join_names(parent.pics)}"
        )

    def notification_message(self, parent: Task, deadline: str) -> str:
        return f'Task "{parent.name}" deadline: {deadline}'

    def parent_refs(self, parent: Task) -> dict[str, uuid_module.UUID | None]:
        return {"task_id": parent.id, "activity_id": parent.activity_id}

    def describe(self, parent: Task) -> str:
        return f'Task "{parent.name}"'


def build_message(
    session: Session,
    source: ReminderSource,
    reminder: ReminderRuleMixin,
    parent: Any,
    deadline: str,
) -> str:
    """Render a reminder's message text.

    ``custom_message`` wins over the linked template; without either, a
    generated sentence is used.

    :param session: Database session.
    :param source: Accessors for the reminder's parent kind.
    :param reminder: The reminder rule.
    :param parent: The reminder's activity or task.
    :param deadline: The parent's deadline as ``YYYY-MM-DD``.
    :returns: The message text.
    """
    variables = source.build_variables(parent, deadline)

    if reminder.custom_message:
        return render_template(reminder.custom_message, variables)

    if reminder.template_id:
        template = get_message_template(session, reminder.template_id)
        if template is not None:
            return render_template(template.body, variables)
        logger.warning(
            f"Message template {reminder.template_id} not found for "
            f"{source.kind} reminder {reminder.id}, using default text"
        )
        return source.fallback_message(parent, deadline, template_missing=True)

    return source.fallback_message(parent, deadline, template_missing=False)


def _notify_pics(session: Session, source: ReminderSource, parent: Any, deadline: str) -> None:
    message = source.notification_message(parent, deadline)
    refs = source.parent_refs(parent)

    for pic in parent.pics:
        result = create_notification(
            session,
            user_id=pic.user.id,
            notification_type=NotificationType.DEADLINE_ALERT,
            title=NOTIFICATION_TITLE,
            message=message,
            **refs,
        )
        if result is NotificationResult.FAILED:
            logger.warning(
                f"In-app deadline notification for user {pic.user.id} on "
                f"{source.describe(parent)} was not saved"
            )


def _process_reminder(
    session: Session,
    source: ReminderSource,
    reminder: ReminderRuleMixin,
    today: date,
    tz: tzinfo | None,
) -> DispatchItem | None:
    if not reminder.enabled:
        return None

    parent = source.get_parent(reminder)
    if parent.status in source.terminal_statuses:
        logger.debug(f"Skipping {source.kind} reminder {reminder.id}: parent is {parent.status}")
        return None

    deadline_date = to_date(parent.end_date, tz)
    if not should_trigger(reminder.trigger, reminder.custom_days, deadline_date, today):
        return None

    deadline = deadline_date.isoformat()
    message = build_message(session, source, reminder, parent, deadline)
    label = f"{source.describe(parent)} → {reminder.channel}"

    item = None
    try:
        channel = resolve_channel(session, reminder.channel)
    except (ValueError, EncryptionKeyError) as e:
        logger.error(f"Cannot decrypt WhatsApp group for channel {reminder.channel!r}: {e}")
        channel = None
    else:
        if channel is None:
            logger.warning(f"No WhatsApp group found for channel: {reminder.channel}")

    if channel is not None:
        item = DispatchItem(
            channel_id=channel.channel_id,
            destination_id=channel.destination_id,
            message=message,
            label=label,
        )

    _notify_pics(session, source, parent, deadline)

    logger.info(f"Reminder {reminder.describe_trigger()} due: {label}")
    return item


def collect_reminders(
    session: Session,
    source: ReminderSource,
    today: date,
    tz: tzinfo | None = None,
) -> list[DispatchItem]:
    """Evaluate every enabled reminder of one kind for the given day.

    In-app notifications for each due reminder's PICs are created as a side
    effect, whether or not its WhatsApp group resolves. Each reminder runs in
    its own SAVEPOINT, so a failed reminder is rolled back on its own.

    :param session: Database session.
    :param source: Accessors for the reminder kind.
    :param today: Day being processed.
    :param tz: Timezone used to read parent deadlines as calendar days.
    :returns: Dispatch items for the due reminders whose channel resolved.
    """
    reminders = source.list_reminders(session)
    logger.info(f"Evaluating {len(reminders)} enabled {source.kind} reminders for {today}")

    items: list[DispatchItem] = []
    for reminder in reminders:
        try:
            with session.begin_nested():
                item = _process_reminder(session, source, reminder, today, tz)
        except Exception as e:
            logger.exception(f"Failed to process {source.kind} reminder {reminder.id}: {e}")
            continue

        if item is not None:
            items.append(item)

    logger.info(f"Collected {len(items)} {source.kind} messages for {today}")
    return items


def collect_activity_reminders(
    session: Session,
    today: date,
    tz: tzinfo | None = None,
) -> list[DispatchItem]:
    """Collect due activity reminders."""
    return collect_reminders(session, ActivityReminderSource(), today, tz)


def collect_task_reminders(
    session: Session,
    today: date,
    tz: tzinfo | None = None,
) -> list[DispatchItem]:
    """Collect due task reminders."""
    return collect_reminders(session, TaskReminderSource(), today, tz)
