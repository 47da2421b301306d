"""SQLAlchemy ORM models for deadline reminders and message templates."""

import uuid as uuid_module
from datetime import UTC, datetime
from enum import StrEnum

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import ARRAY, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskboard.database.activities.models import Activity, Task
from taskboard.database.core import Base


class ReminderTrigger(StrEnum):
    """How many days before the parent's deadline a reminder fires."""

    H_7 = "H-7"
    H_3 = "H-3"
    H_1 = "H-1"
    DAY_H = "Day-H"
    CUSTOM = "Custom"


class MessageTemplate(Base):
    """ORM model for a reusable reminder message body with {{placeholder}} tokens."""

    __tablename__ = "message_templates"

    id: Mapped[uuid_module.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid_module.uuid4,
    )
    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
    )
    body: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    placeholders: Mapped[list[str]] = mapped_column(
        ARRAY(String(50)),
        nullable=False,
        default=list,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )

    def __repr__(self) -> str:
        """Return string representation of the template."""
        return f"<MessageTemplate(id={self.id}, name={self.name!r})>"


class ReminderRuleMixin:
    """Columns shared by activity and task reminders."""

    id: Mapped[uuid_module.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid_module.uuid4,
    )
    trigger: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
    )
    custom_days: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
    )
    channel: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    template_id: Mapped[uuid_module.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("message_templates.id", ondelete="SET NULL"),
        nullable=True,
    )
    custom_message: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    enabled: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )

    def describe_trigger(self) -> str:
        """Return the trigger with its offset, e.g. "Custom(5)" or "H-1"."""
        if self.trigger == ReminderTrigger.CUSTOM.value:
            return f"{self.trigger}({self.custom_days})"
        return self.trigger


class ActivityReminder(ReminderRuleMixin, Base):
    """ORM model for a reminder attached to an activity's deadline."""

    __tablename__ = "activity_reminders"

    activity_id: Mapped[uuid_module.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("activities.id", ondelete="CASCADE"),
        nullable=False,
    )

    activity: Mapped["Activity"] = relationship("Activity")

    __table_args__ = (Index("idx_activity_reminders_enabled", "enabled"),)

    def __repr__(self) -> str:
        """Return string representation of the reminder."""
        return (
            f"<ActivityReminder(id={self.id}, activity_id={self.activity_id}, "
            f"trigger={self.describe_trigger()}, channel={self.channel!r})>"
        )


class TaskReminder(ReminderRuleMixin, Base):
    """ORM model for a reminder attached to a task's deadline."""

    __tablename__ = "task_reminders"

    task_id: Mapped[uuid_module.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("tasks.id", ondelete="CASCADE"),
        nullable=False,
    )

    task: Mapped["Task"] = relationship("Task")

    __table_args__ = (Index("idx_task_reminders_enabled", "enabled"),)

    def __repr__(self) -> str:
        """Return string representation of the reminder."""
        return (
            f"<TaskReminder(id={self.id}, task_id={self.task_id}, "
            f"trigger={self.describe_trigger()}, channel={self.channel!r})>"
        )


class ReminderRunLease(Base):
    """ORM model for the single-flight lease guarding reminder runs.

    One row per named job. A run holds the lease while ``holder`` is set and
    ``expires_at`` is in the future; an expired lease can be taken over.
    """

    __tablename__ = "reminder_run_leases"

    name: Mapped[str] = mapped_column(
        String(100),
        primary_key=True,
    )
    holder: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
    )
    acquired_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def is_held(self, now: datetime) -> bool:
        """Check whether the lease is held by a live run."""
        return self.holder is not None and self.expires_at is not None and self.expires_at > now

    def __repr__(self) -> str:
        """Return string representation of the lease."""
        return f"<ReminderRunLease(name={self.name}, holder={self.holder}, expires_at={self.expires_at})>"
