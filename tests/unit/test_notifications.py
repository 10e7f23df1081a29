"""
Tests for careerhub.core.workflow.notifications: NotificationService.
"""

from unittest.mock import MagicMock

import pytest
from bson import ObjectId

from careerhub.core.exceptions import ForbiddenError, NotFoundError, UnavailableError
from careerhub.core.workflow import NotificationService
from careerhub.data.models import NotificationPayload
from careerhub.utils.constants import NotificationType


@pytest.fixture
def user_id():
    return ObjectId()


class TestCreate:
    def test_notify_persists_unread(self, notification_service, notification_repo, user_id):
        payload = NotificationPayload(
            recipient_id=user_id,
            title="Welcome",
            message="Your profile is ready.",
            type=NotificationType.SUCCESS,
            link="/student/profile",
        )
        notification = notification_service.notify(payload)

        stored = notification_repo.get_by_id(notification.id)
        assert stored.user_id == user_id
        assert stored.type == "success"
        assert stored.link == "/student/profile"
        assert stored.read is False
        assert stored.read_at is None

    def test_create_defaults(self, notification_service, user_id):
        notification = notification_service.create(str(user_id), "Hi", "Message")
        assert notification.type == "info"
        assert notification.link == ""

    def test_store_failure_propagates(self, notification_repo, user_id, monkeypatch):
        monkeypatch.setattr(notification_repo, "create", MagicMock(side_effect=UnavailableError("insert")))
        service = NotificationService(notification_repo)
        with pytest.raises(UnavailableError):
            service.create(user_id, "Hi", "Message")


class TestListing:
    def test_newest_first(self, notification_service, user_id, db_manager):
        first = notification_service.create(user_id, "First", "1")
        notification_service.create(user_id, "Second", "2")
        collection = db_manager.get_sync_collection("notifications")
        collection.update_one({"_id": first.id}, {"$set": {"created_at": first.created_at.replace(year=2020)}})

        titles = [n.title for n in notification_service.list_for_user(user_id)]
        assert titles == ["Second", "First"]

    def test_limit(self, notification_repo, user_id):
        service = NotificationService(notification_repo, list_limit=3)
        for i in range(5):
            service.create(user_id, f"N{i}", "message")
        assert len(service.list_for_user(user_id)) == 3
        assert len(service.list_for_user(user_id, limit=4)) == 4

    def test_only_own_notifications(self, notification_service, user_id):
        notification_service.create(user_id, "Mine", "message")
        notification_service.create(ObjectId(), "Theirs", "message")
        assert [n.title for n in notification_service.list_for_user(user_id)] == ["Mine"]


class TestMarkRead:
    def test_marks_read(self, notification_service, user_id):
        notification = notification_service.create(user_id, "Hi", "Message")
        updated = notification_service.mark_read(notification.id_str, str(user_id))
        assert updated.read is True
        assert updated.read_at is not None
        assert notification_service.unread_count(user_id) == 0

    def test_already_read_is_unchanged(self, notification_service, user_id):
        notification = notification_service.create(user_id, "Hi", "Message")
        first = notification_service.mark_read(notification.id, user_id)
        second = notification_service.mark_read(notification.id, user_id)
        assert second.read_at == first.read_at

    def test_unknown_notification(self, notification_service, user_id):
        with pytest.raises(NotFoundError):
            notification_service.mark_read(ObjectId(), user_id)

    def test_other_users_notification(self, notification_service, notification_repo, user_id):
        notification = notification_service.create(user_id, "Hi", "Message")
        with pytest.raises(ForbiddenError):
            notification_service.mark_read(notification.id, ObjectId())
        assert notification_repo.get_by_id(notification.id).read is False


class TestMarkAllRead:
    def test_marks_every_unread(self, notification_service, user_id):
        for i in range(3):
            notification_service.create(user_id, f"N{i}", "message")
        other = ObjectId()
        notification_service.create(other, "Other", "message")

        assert notification_service.unread_count(user_id) == 3
        assert notification_service.mark_all_read(user_id) == 3
        assert notification_service.unread_count(user_id) == 0
        assert all(n.read_at is not None for n in notification_service.list_for_user(user_id))
        assert notification_service.unread_count(other) == 1

    def test_nothing_unread(self, notification_service, user_id):
        assert notification_service.mark_all_read(user_id) == 0

    def test_already_read_not_counted(self, notification_service, user_id):
        read = notification_service.create(user_id, "Read", "message")
        notification_service.create(user_id, "Unread", "message")
        notification_service.mark_read(read.id, user_id)
        assert notification_service.mark_all_read(user_id) == 1
