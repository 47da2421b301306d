"""Dagster ops for processing deadline reminders."""

from dagster import OpExecutionContext, op

from taskboard.reminders.exceptions import ReminderRunInProgressError
from taskboard.reminders.models import ReminderRunResult
from taskboard.reminders.service import process_all_reminders


@op(
    name="process_all_reminders",
    description="Collect reminders due today and send them to their WhatsApp groups.",
)
def process_reminders_op(context: OpExecutionContext) -> ReminderRunResult | None:
    """Run the daily reminder cycle.

    No retry policy is attached: a retried run would resend every message
    that already went out.

    :param context: Dagster execution context.
    :returns: Run result, or None if another run was already in progress.
    """
    context.log.info("Starting reminder processing")

    try:
        result = process_all_reminders()
    except ReminderRunInProgressError as e:
        context.log.warning(f"Skipping reminder run: {e}")
        return None

    context.log.info(
        f"Reminder processing complete: "
        f"date={result.run_date}, queued={result.queued}, "
        f"sent={result.sent}, failed={result.failed}"
    )
    for error in result.errors:
        context.log.error(error)

    return result
