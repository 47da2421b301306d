"""Dagster schedules for processing deadline reminders."""

from dagster import DefaultScheduleStatus, ScheduleDefinition

from taskboard.dagster.reminders.jobs import process_reminders_job
from taskboard.reminders.config import get_reminder_settings

_settings = get_reminder_settings()

# Daily at 08:00 board time by default
process_reminders_schedule = ScheduleDefinition(
    job=process_reminders_job,
    cron_schedule=_settings.schedule_cron,
    execution_timezone=_settings.timezone,
    default_status=DefaultScheduleStatus.RUNNING,
)
