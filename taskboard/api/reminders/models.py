"""Response models for reminder run endpoints."""

from datetime import date

from pydantic import BaseModel, Field


class ReminderRunResponse(BaseModel):
    """Outcome of a reminder run triggered over HTTP."""

    ok: bool = Field(default=True, description="True when the run completed")
    message: str = Field(..., description="Summary message")
    run_date: date = Field(..., description="Day the run processed")
    queued: int = Field(..., description="Messages queued for WhatsApp delivery")
    sent: int = Field(..., description="Messages delivered")
    failed: int = Field(..., description="Messages that failed to send")
