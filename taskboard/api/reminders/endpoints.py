"""API endpoint for triggering the daily reminder run from an external scheduler."""

import logging
import time

from fastapi import APIRouter, HTTPException, status

from taskboard.api.reminders.models import ReminderRunResponse
from taskboard.messaging.whatsapp import WatzapConfigurationError
from taskboard.reminders.exceptions import ReminderRunInProgressError
from taskboard.reminders.service import process_all_reminders

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cron", tags=["Reminders"])


@router.api_route(
    "/reminders",
    methods=["GET", "POST"],
    response_model=ReminderRunResponse,
    summary="Process reminders",
)
def run_reminders() -> ReminderRunResponse:
    """Run the reminder cycle for today and wait for it to finish.

    The request stays open while messages are sent, so callers need a
    timeout that covers the provider delay between messages.
    """
    start = time.perf_counter()
    logger.info("Reminder run requested over HTTP")

    try:
        result = process_all_reminders()
    except ReminderRunInProgressError as e:
        logger.warning(f"Rejected reminder run: {e}")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A reminder run is already in progress",
        ) from e
    except WatzapConfigurationError as e:
        logger.error(f"Reminder processing failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        ) from e
    except Exception as e:
        logger.exception(f"Reminder processing failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process reminders",
        ) from e

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        f"Reminder run complete: sent={result.sent}/{result.queued}, elapsed={elapsed_ms:.0f}ms"
    )

    return ReminderRunResponse(
        message="Reminders processed",
        run_date=result.run_date,
        queued=result.queued,
        sent=result.sent,
        failed=result.failed,
    )
