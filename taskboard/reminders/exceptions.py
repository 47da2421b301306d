"""Exceptions raised by the reminder engine."""


class ReminderRunInProgressError(Exception):
    """Raised when another reminder run holds the run lease."""

    pass
