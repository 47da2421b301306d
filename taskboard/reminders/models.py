"""Models for reminder dispatch."""

import uuid as uuid_module
from dataclasses import dataclass
from datetime import date

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class DispatchItem:
    """A rendered message waiting to be sent to a resolved WhatsApp group."""

    channel_id: uuid_module.UUID
    destination_id: str
    message: str
    label: str


class ReminderRunResult(BaseModel):
    """Result of one reminder run."""

    run_date: date = Field(..., description="Day the run processed")
    queued: int = Field(default=0, description="Messages queued for WhatsApp delivery")
    sent: int = Field(default=0, description="Messages delivered")
    failed: int = Field(default=0, description="Messages that failed to send")
    cancelled: bool = Field(default=False, description="True if the run stopped early")
    errors: list[str] = Field(default_factory=list, description="Error messages from failed sends")
