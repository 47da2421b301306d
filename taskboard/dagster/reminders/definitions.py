"""Dagster definitions for reminder jobs and schedules."""

from dagster import Definitions

from taskboard.dagster.reminders.jobs import process_reminders_job
from taskboard.dagster.reminders.schedules import process_reminders_schedule

defs = Definitions(
    jobs=[process_reminders_job],
    schedules=[process_reminders_schedule],
)
