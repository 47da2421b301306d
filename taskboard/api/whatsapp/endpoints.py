"""API endpoints for the WhatsApp sender account."""

import logging

from fastapi import APIRouter, HTTPException, status

from taskboard.api.whatsapp.models import ConnectionTestResponse
from taskboard.database.connection import get_session
from taskboard.database.whatsapp import ConnectionStatus
from taskboard.messaging.whatsapp import WatzapConfigurationError, check_whatsapp_connection

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/whatsapp", tags=["WhatsApp"])


@router.post(
    "/test",
    response_model=ConnectionTestResponse,
    summary="Test WhatsApp connection",
)
def run_connection_test() -> ConnectionTestResponse:
    """Check the Watzap API key and record the result on the account."""
    logger.info("WhatsApp connection test requested")

    try:
        with get_session() as session:
            result = check_whatsapp_connection(session)
    except WatzapConfigurationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e

    connection_status = (
        ConnectionStatus.CONNECTED if result.status else ConnectionStatus.DISCONNECTED
    )
    logger.info(f"WhatsApp connection test complete: {connection_status.value}")
    return ConnectionTestResponse(status=connection_status, message=result.message)
