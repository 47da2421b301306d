"""FastAPI application configuration."""

import logging

from dotenv import load_dotenv
from fastapi import Depends, FastAPI

from taskboard.api.dependencies import verify_token
from taskboard.api.health import router as health_router
from taskboard.api.models import ErrorResponse
from taskboard.api.reminders import router as reminders_router
from taskboard.api.whatsapp import router as whatsapp_router
from taskboard.observability.sentry import init_sentry
from taskboard.utils.logging import configure_logging

load_dotenv()
configure_logging()
init_sentry()

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    :returns: Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Taskboard Reminder API",
        version="0.1.0",
        responses={
            401: {"model": ErrorResponse, "description": "Unauthorised"},
            500: {"model": ErrorResponse, "description": "Internal server error"},
        },
    )

    application.include_router(health_router)
    application.include_router(reminders_router, dependencies=[Depends(verify_token)])
    application.include_router(whatsapp_router, dependencies=[Depends(verify_token)])

    logger.info("FastAPI application created")

    return application


# Application instance for uvicorn
app = create_app()
