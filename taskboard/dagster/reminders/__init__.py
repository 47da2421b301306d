"""Dagster jobs and schedules for deadline reminders."""

from taskboard.dagster.reminders.definitions import defs
from taskboard.dagster.reminders.jobs import process_reminders_job
from taskboard.dagster.reminders.ops import process_reminders_op
from taskboard.dagster.reminders.schedules import process_reminders_schedule

__all__ = [
    "defs",
    "process_reminders_job",
    "process_reminders_op",
    "process_reminders_schedule",
]
