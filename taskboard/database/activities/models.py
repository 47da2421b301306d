"""SQLAlchemy ORM models for activities, tasks and their assignees.

The board's CRUD and approval workflow own these tables. The reminder
engine only reads them, so just the columns it needs are mapped.
"""

import uuid as uuid_module
from datetime import UTC, datetime
from enum import StrEnum

from sqlalchemy import DateTime, ForeignKey, Index, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskboard.database.core import Base
from taskboard.database.users.models import User


class ActivityStatus(StrEnum):
    """Lifecycle status of an activity."""

    PLANNED = "Planned"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    ARCHIVED = "Archived"


class TaskStatus(StrEnum):
    """Lifecycle status of a task on the board."""

    TO_DO = "To Do"
    IN_PROGRESS = "In Progress"
    NEED_REVIEW = "Need Review"
    REVISION = "Revision"
    APPROVED = "Approved"
    ARCHIVED = "Archived"


class ActivityType(Base):
    """ORM model for an activity type (e.g. "IG Campaign")."""

    __tablename__ = "activity_types"

    id: Mapped[uuid_module.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid_module.uuid4,
    )
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
    )


class Activity(Base):
    """ORM model for an activity, the parent of tasks and activity reminders."""

    __tablename__ = "activities"

    id: Mapped[uuid_module.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid_module.uuid4,
    )
    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
    )
    activity_type_id: Mapped[uuid_module.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("activity_types.id"),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        default=ActivityStatus.PLANNED.value,
    )
    start_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    end_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )

    activity_type: Mapped["ActivityType"] = relationship("ActivityType")
    pics: Mapped[list["ActivityPic"]] = relationship(
        "ActivityPic",
        cascade="all, delete-orphan",
    )
    approvers: Mapped[list["ActivityApprover"]] = relationship(
        "ActivityApprover",
        cascade="all, delete-orphan",
    )
    tasks: Mapped[list["Task"]] = relationship(
        "Task",
        back_populates="activity",
        cascade="all, delete-orphan",
    )

    __table_args__ = (Index("idx_activities_status_end_date", "status", "end_date"),)

    def __repr__(self) -> str:
        """Return string representation of the activity."""
        return f"<Activity(id={self.id}, name={self.name!r}, status={self.status})>"


class ActivityPic(Base):
    """Person in charge assigned to an activity."""

    __tablename__ = "activity_pics"

    activity_id: Mapped[uuid_module.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("activities.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[uuid_module.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )

    user: Mapped["User"] = relationship("User")


class ActivityApprover(Base):
    """Approver assigned to an activity."""

    __tablename__ = "activity_approvers"

    activity_id: Mapped[uuid_module.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("activities.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[uuid_module.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )

    user: Mapped["User"] = relationship("User")


class Task(Base):
    """ORM model for a task belonging to an activity."""

    __tablename__ = "tasks"

    id: Mapped[uuid_module.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid_module.uuid4,
    )
    activity_id: Mapped[uuid_module.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("activities.id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        default=TaskStatus.TO_DO.value,
    )
    end_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )

    activity: Mapped["Activity"] = relationship("Activity", back_populates="tasks")
    pics: Mapped[list["TaskPic"]] = relationship(
        "TaskPic",
        cascade="all, delete-orphan",
    )
    approvers: Mapped[list["TaskApprover"]] = relationship(
        "TaskApprover",
        cascade="all, delete-orphan",
    )

    __table_args__ = (Index("idx_tasks_activity_id", "activity_id"),)

    def __repr__(self) -> str:
        """Return string representation of the task."""
        return f"<Task(id={self.id}, name={self.name!r}, status={self.status})>"


class TaskPic(Base):
    """Person in charge assigned to a task."""

    __tablename__ = "task_pics"

    task_id: Mapped[uuid_module.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("tasks.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[uuid_module.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )

    user: Mapped["User"] = relationship("User")


class TaskApprover(Base):
    """Approver assigned to a task."""

    __tablename__ = "task_approvers"

    task_id: Mapped[uuid_module.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("tasks.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[uuid_module.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )

    user: Mapped["User"] = relationship("User")
