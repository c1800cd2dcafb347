"""
Notification Schemas
"""

from pydantic import BaseModel, Field


class SendNotificationRequest(BaseModel):
    """Request body for POST /notifications."""

    to: list[str] = Field(
        ...,
        min_length=1,
        description='Recipient emails, or "All" to notify every guardian',
        json_schema_extra={"example": ["All"]},
    )
    subject: str = Field(..., min_length=1, max_length=200)
    body: str = Field(..., min_length=1, max_length=5000)


class SendNotificationResponse(BaseModel):
    """Response after a notification was handed to the transport."""

    status: str = "OK"
    recipients: list[str]


class NotificationOutcome(BaseModel):
    """
    Outcome of the notification that follows an admission decision.

    Reported next to the decision, never instead of it: a failed
    notification does not undo the decision.
    """

    sent: bool
    recipients: list[str] = Field(default_factory=list)
    message: str | None = None
