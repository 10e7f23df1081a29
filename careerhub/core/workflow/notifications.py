"""
Notification service.

Persists notifications produced by system events and serves the
recipient's inbox operations.
"""

from typing import Optional

from bson import ObjectId

from careerhub.core.exceptions import ForbiddenError, NotFoundError
from careerhub.data.models import Notification, NotificationPayload, utcnow
from careerhub.data.repositories import NotificationRepository
from careerhub.utils.constants import DEFAULT_NOTIFICATION_LIMIT, NotificationType
from careerhub.utils.logger import get_logger

logger = get_logger(__name__)


class NotificationService:
    """Creates and manages user notifications."""

    def __init__(
        self,
        repository: NotificationRepository,
        list_limit: int = DEFAULT_NOTIFICATION_LIMIT,
    ):
        self._repository = repository
        self._list_limit = list_limit

    def notify(self, payload: NotificationPayload) -> Notification:
        """Persist an unread notification for the payload's recipient."""
        notification = self._repository.create(Notification.from_payload(payload))
        logger.debug(f"Notified user {payload.recipient_id}: {payload.title}")
        return notification

    def create(
        self,
        user_id: str | ObjectId,
        title: str,
        message: str,
        type: NotificationType = NotificationType.INFO,
        link: str = "",
    ) -> Notification:
        """Build and persist a notification."""
        return self.notify(
            NotificationPayload(
                recipient_id=user_id,
                title=title,
                message=message,
                type=type,
                link=link,
            )
        )

    def list_for_user(self, user_id: str | ObjectId, limit: Optional[int] = None) -> list[Notification]:
        """Get a user's latest notifications, newest first."""
        return self._repository.get_for_user(user_id, limit=limit or self._list_limit)

    def mark_read(self, notification_id: str | ObjectId, user_id: str | ObjectId) -> Notification:
        """
        Mark one notification as read.

        Raises:
            NotFoundError: If the notification does not exist
            ForbiddenError: If it belongs to another user
        """
        notification = self._repository.get_by_id(notification_id)
        if notification is None:
            raise NotFoundError("notification", notification_id)
        if str(notification.user_id) != str(user_id):
            raise ForbiddenError(
                "Notification belongs to another user",
                {"notification_id": str(notification_id)},
            )
        if notification.read:
            return notification

        updated = self._repository.update(notification_id, {"read": True, "read_at": utcnow()})
        if updated is None:
            raise NotFoundError("notification", notification_id)
        return updated

    def mark_all_read(self, user_id: str | ObjectId) -> int:
        """Mark all of a user's unread notifications as read in one batch."""
        count = self._repository.mark_all_read(user_id, read_at=utcnow())
        logger.debug(f"Marked {count} notifications read for user {user_id}")
        return count

    def unread_count(self, user_id: str | ObjectId) -> int:
        return self._repository.count_unread(user_id)
