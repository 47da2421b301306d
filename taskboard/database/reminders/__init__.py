"""Database models and operations for deadline reminders."""

from taskboard.database.reminders.models import (
    ActivityReminder,
    MessageTemplate,
    ReminderRuleMixin,
    ReminderRunLease,
    ReminderTrigger,
    TaskReminder,
)
from taskboard.database.reminders.operations import (
    PROCESS_ALL_REMINDERS_LEASE,
    acquire_run_lease,
    create_message_template,
    get_message_template,
    list_enabled_activity_reminders,
    list_enabled_task_reminders,
    release_run_lease,
)

__all__ = [
    "PROCESS_ALL_REMINDERS_LEASE",
    # Models
    "ActivityReminder",
    "MessageTemplate",
    "ReminderRuleMixin",
    "ReminderRunLease",
    "ReminderTrigger",
    "TaskReminder",
    # Operations
    "acquire_run_lease",
    "create_message_template",
    "get_message_template",
    "list_enabled_activity_reminders",
    "list_enabled_task_reminders",
    "release_run_lease",
]
