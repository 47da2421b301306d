"""Combine all dagster definitions.

Load with: dagster dev -m taskboard.dagster.definitions
"""

from dotenv import load_dotenv

from taskboard.observability.sentry import init_sentry
from taskboard.utils.logging import configure_logging

load_dotenv()
configure_logging()
init_sentry()

from taskboard.dagster.reminders.definitions import defs as reminders_defs  # noqa: E402

defs = reminders_defs
