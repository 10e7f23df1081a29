"""
Notification repository for CareerHub.
"""

from datetime import datetime

from bson import ObjectId

from careerhub.data.models.notification import Notification
from careerhub.utils.constants import DEFAULT_NOTIFICATION_LIMIT, Collections

from .base import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    """Repository for notification operations."""

    @property
    def collection_name(self) -> str:
        return Collections.NOTIFICATIONS

    @property
    def model_class(self) -> type[Notification]:
        return Notification

    def get_for_user(
        self,
        user_id: str | ObjectId,
        limit: int = DEFAULT_NOTIFICATION_LIMIT,
    ) -> list[Notification]:
        """Get a user's most recent notifications, newest first."""
        return self.find(
            {"user_id": self._to_object_id(user_id)},
            limit=limit,
            sort_by="created_at",
        )

    def count_unread(self, user_id: str | ObjectId) -> int:
        """Count a user's unread notifications."""
        return self.count({"user_id": self._to_object_id(user_id), "read": False})

    def mark_all_read(self, user_id: str | ObjectId, read_at: datetime) -> int:
        """Mark every unread notification of a user as read in one batch."""
        return self.update_many(
            {"user_id": self._to_object_id(user_id), "read": False},
            {"read": True, "read_at": read_at},
        )
