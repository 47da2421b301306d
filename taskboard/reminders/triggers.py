"""Decide whether a reminder fires on a given day."""

from datetime import date, datetime, tzinfo

from taskboard.database.reminders.models import ReminderTrigger

# Days before the deadline at which each fixed trigger fires
TRIGGER_OFFSETS: dict[ReminderTrigger, int] = {
    ReminderTrigger.H_7: 7,
    ReminderTrigger.H_3: 3,
    ReminderTrigger.H_1: 1,
    ReminderTrigger.DAY_H: 0,
}


def to_date(value: date | datetime, tz: tzinfo | None = None) -> date:
    """Strip the time of day from a date or datetime.

    Aware datetimes are first converted to ``tz`` when one is given, so a
    deadline stored in UTC lands on the calendar day of the board's timezone.
    """
    if isinstance(value, datetime):
        if tz is not None and value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.date()
    return value


def days_until(target_date: date | datetime, today: date | datetime) -> int:
    """Whole calendar days from today to the target date (negative once passed)."""
    return (to_date(target_date) - to_date(today)).days


def should_trigger(
    trigger: ReminderTrigger | str,
    custom_days: int | None,
    target_date: date | datetime,
    today: date | datetime,
) -> bool:
    """Check whether a reminder fires today.

    Fixed triggers fire when the deadline is exactly their offset away;
    ``Custom`` fires when it is exactly ``custom_days`` away. Unknown trigger
    values never fire.

    :param trigger: The reminder's trigger kind.
    :param custom_days: Offset for ``Custom`` triggers, ignored otherwise.
    :param target_date: The parent's deadline.
    :param today: The day being processed.
    :returns: True if the reminder fires on ``today``.
    """
    try:
        kind = ReminderTrigger(trigger)
    except ValueError:
        return False

    diff = days_until(target_date, today)

    if kind is ReminderTrigger.CUSTOM:
        return custom_days is not None and diff == custom_days

    return diff == TRIGGER_OFFSETS[kind]
