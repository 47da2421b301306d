"""Database models for activities and tasks read by the reminder engine."""

from taskboard.database.activities.models import (
    Activity,
    ActivityApprover,
    ActivityPic,
    ActivityStatus,
    ActivityType,
    Task,
    TaskApprover,
    TaskPic,
    TaskStatus,
)

__all__ = [
    "Activity",
    "ActivityApprover",
    "ActivityPic",
    "ActivityStatus",
    "ActivityType",
    "Task",
    "TaskApprover",
    "TaskPic",
    "TaskStatus",
]
