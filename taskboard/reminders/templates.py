"""Placeholder substitution for reminder message templates."""

import re
from typing import NamedTuple

PLACEHOLDER_PATTERN = re.compile(r"\{\{(\w+)\}\}")


class Placeholder(NamedTuple):
    """A placeholder the collectors always supply."""

    key: str
    label: str
    example: str


PLACEHOLDERS: tuple[Placeholder, ...] = (
    Placeholder("activity_name", "Activity Name", "Ramadan Campaign 2026"),
    Placeholder("task_name", "Task Name", "Final edit product video"),
    Placeholder("deadline", "Deadline", "2026-02-20"),
    Placeholder("pic_name", "PIC Name", "Dina Rahma"),
    Placeholder("status", "Status", "In Progress"),
    Placeholder("approver_name", "Approver Name", "Alex Morgan"),
    Placeholder("activity_type", "Activity Type", "IG Campaign"),
)


def render_template(template: str, variables: dict[str, str]) -> str:
    """Replace every ``{{key}}`` token that has a value in ``variables``.

    Tokens without a matching key are left as they are.

    :param template: Message body with ``{{placeholder}}`` tokens.
    :param variables: Values keyed by placeholder name.
    :returns: The rendered message.
    """

    def _substitute(match: re.Match[str]) -> str:
        key = match.group(1)
        if key in variables:
            return variables[key]
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(_substitute, template)


def extract_placeholders(body: str) -> list[str]:
    """List the placeholder names used in a template body, in first-use order."""
    return list(dict.fromkeys(PLACEHOLDER_PATTERN.findall(body)))
