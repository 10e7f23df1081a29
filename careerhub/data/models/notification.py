"""
Notification models for CareerHub.

Notifications are produced as side effects of system events (mostly
application status changes) and owned by their recipient.
"""

from datetime import datetime
from typing import Optional

from careerhub.utils.constants import Collections, NotificationType

from .base import BaseDocument, EmbeddedModel, PyObjectId


class NotificationPayload(EmbeddedModel):
    """What a producer hands to the notification sink."""

    recipient_id: PyObjectId
    title: str
    message: str
    type: NotificationType = NotificationType.INFO
    link: str = ""


class Notification(BaseDocument):
    """A persisted notification for one user."""

    user_id: PyObjectId
    title: str
    message: str
    type: NotificationType = NotificationType.INFO
    link: str = ""
    read: bool = False
    read_at: Optional[datetime] = None

    @classmethod
    def from_payload(cls, payload: NotificationPayload) -> "Notification":
        return cls(
            user_id=payload.recipient_id,
            title=payload.title,
            message=payload.message,
            type=payload.type,
            link=payload.link,
        )

    class Settings:
        """MongoDB collection settings."""

        name = Collections.NOTIFICATIONS
        indexes = [[("user_id", 1), ("read", 1)], "created_at"]
