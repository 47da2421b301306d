"""Dagster jobs for processing deadline reminders."""

from dagster import job

from taskboard.dagster.reminders.ops import process_reminders_op


@job(
    name="process_reminders_job",
    description="Send today's deadline reminders (runs once a day).",
    tags={"dagster/max_retries": "0"},
)
def process_reminders_job() -> None:
    """Process reminders job."""
    process_reminders_op()
