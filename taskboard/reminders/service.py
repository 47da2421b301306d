"""Run one full reminder cycle: collect due reminders, then deliver them."""

import logging
import threading
import time
import uuid as uuid_module
from collections.abc import Callable
from datetime import date, datetime, timedelta
from typing import Any, Protocol

from taskboard.database.connection import get_session
from taskboard.database.reminders import acquire_run_lease, release_run_lease
from taskboard.database.whatsapp import update_group_last_sent
from taskboard.messaging.whatsapp import build_watzap_client
from taskboard.reminders.collectors import collect_activity_reminders, collect_task_reminders
from taskboard.reminders.config import get_reminder_settings
from taskboard.reminders.exceptions import ReminderRunInProgressError
from taskboard.reminders.models import DispatchItem, ReminderRunResult

logger = logging.getLogger(__name__)


class GroupMessenger(Protocol):
    """Sends a message to a messaging group."""

    def send_group_message(self, group_id: str, message: str) -> dict[str, Any]:
        """Send ``message`` to ``group_id``, raising on failure."""
        ...


def _wait(
    seconds: float,
    sleep: Callable[[float], None],
    cancel_event: threading.Event | None,
) -> None:
    if cancel_event is not None:
        cancel_event.wait(seconds)
    else:
        sleep(seconds)


def dispatch_queue(  # noqa: PLR0913
    messenger: GroupMessenger,
    queue: list[DispatchItem],
    result: ReminderRunResult,
    *,
    delay_seconds: float,
    sleep: Callable[[float], None] = time.sleep,
    cancel_event: threading.Event | None = None,
) -> None:
    """Deliver queued messages one at a time with a fixed pause between them.

    Item i+1 is sent only after item i's call has returned and the delay has
    passed. A failed send is recorded and the loop moves on. No pause
    follows the last item.

    :param messenger: Client used to send each message.
    :param queue: Items in delivery order.
    :param result: Run result updated in place.
    :param delay_seconds: Pause between sends.
    :param sleep: Blocking sleep used when no cancel event is given.
    :param cancel_event: Optional event; once set, no further items are sent.
    """
    total = len(queue)

    for index, item in enumerate(queue):
        if cancel_event is not None and cancel_event.is_set():
            result.cancelled = True
            logger.warning(f"Reminder run cancelled with {total - index} messages unsent")
            break

        try:
            messenger.send_group_message(item.destination_id, item.message)
        except Exception as e:
            error_msg = f"Failed: {item.label}: {e}"
            logger.error(f"[{index + 1}/{total}] {error_msg}")
            result.failed += 1
            result.errors.append(error_msg)
        else:
            result.sent += 1
            logger.info(f"[{index + 1}/{total}] Sent: {item.label}")
            _record_sent(item)

        if index < total - 1:
            logger.info(f"Waiting {delay_seconds:g}s before next message...")
            _wait(delay_seconds, sleep, cancel_event)


def _record_sent(item: DispatchItem) -> None:
    # The message is already delivered; a bookkeeping failure must not count as a failed send.
    try:
        with get_session() as session:
            update_group_last_sent(session, item.channel_id)
    except Exception as e:
        logger.error(f"Failed to record last send for group {item.channel_id}: {e}")


def process_all_reminders(  # noqa: PLR0913
    *,
    messenger: GroupMessenger | None = None,
    today: date | None = None,
    delay_seconds: float | None = None,
    sleep: Callable[[float], None] = time.sleep,
    cancel_event: threading.Event | None = None,
) -> ReminderRunResult:
    """Process every reminder due today.

    This performs the following:
    1. Take the run lease so only one run is active at a time
    2. Resolve WhatsApp credentials (a missing configuration aborts the run)
    3. Collect due activity reminders, then task reminders, creating in-app
       notifications along the way
    4. Send the collected messages sequentially with a fixed delay

    Running it twice on the same day sends everything twice; the lease only
    prevents overlapping runs.

    :param messenger: Client to send with. Built from stored credentials if omitted.
    :param today: Day to process. Defaults to today in the configured timezone.
    :param delay_seconds: Pause between sends. Defaults to the configured delay.
    :param sleep: Blocking sleep used between sends.
    :param cancel_event: Optional event that stops the run between messages.
    :returns: Counts of queued, sent and failed messages.
    :raises ReminderRunInProgressError: If another run holds the lease.
    :raises WatzapConfigurationError: If no WhatsApp credentials are configured.
    """
    settings = get_reminder_settings()
    tz = settings.tzinfo
    if today is None:
        today = datetime.now(tz).date()
    if delay_seconds is None:
        delay_seconds = settings.dispatch_delay_seconds

    holder = uuid_module.uuid4().hex
    with get_session() as session:
        acquired = acquire_run_lease(
            session,
            holder,
            ttl=timedelta(minutes=settings.lease_ttl_minutes),
        )
    if not acquired:
        raise ReminderRunInProgressError("A reminder run is already in progress")

    try:
        logger.info(f"Processing reminders for {today.isoformat()}")
        result = ReminderRunResult(run_date=today)

        with get_session() as session:
            if messenger is None:
                messenger = build_watzap_client(session)

            queue = [
                *collect_activity_reminders(session, today, tz),
                *collect_task_reminders(session, today, tz),
            ]

        result.queued = len(queue)
        logger.info(f"{len(queue)} WhatsApp messages to send")

        dispatch_queue(
            messenger,
            queue,
            result,
            delay_seconds=delay_seconds,
            sleep=sleep,
            cancel_event=cancel_event,
        )

    finally:
        with get_session() as session:
            release_run_lease(session, holder)

    logger.info(
        f"Done processing reminders: "
        f"queued={result.queued}, sent={result.sent}, "
        f"failed={result.failed}, cancelled={result.cancelled}"
    )
    return result
