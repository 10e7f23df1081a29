"""
Tests for careerhub.core.workflow.transitions: pure status planning.
"""

from datetime import datetime

import pytest
from bson import ObjectId

from careerhub.core.exceptions import InvalidArgumentError
from careerhub.core.workflow import parse_status, plan_status_transition, status_message
from careerhub.data.models import CourseApplication, JobApplication, NotificationPayload
from careerhub.utils.constants import (
    DEFAULT_STATUS_MESSAGE,
    STATUS_NOTIFICATION_TITLE,
    ApplicationKind,
    ApplicationStatus,
    NotificationType,
)

NOW = datetime(2024, 6, 30, 9, 15)


@pytest.fixture
def course_application():
    return CourseApplication(
        _id=ObjectId(),
        student_id=ObjectId(),
        course_id=ObjectId(),
        institution_id=ObjectId(),
    )


@pytest.fixture
def job_application():
    return JobApplication(_id=ObjectId(), student_id=ObjectId(), job_id=ObjectId(), company_id=ObjectId())


class TestParseStatus:
    @pytest.mark.parametrize("label", ["pending", "admitted", "rejected", "waiting-list"])
    def test_accepts_known_labels(self, label):
        assert parse_status(label).value == label

    def test_accepts_enum(self):
        assert parse_status(ApplicationStatus.ADMITTED) is ApplicationStatus.ADMITTED

    @pytest.mark.parametrize("label", ["accepted", "Admitted", "waiting_list", "", None])
    def test_rejects_unknown_labels(self, label):
        with pytest.raises(InvalidArgumentError) as exc_info:
            parse_status(label)
        assert exc_info.value.code == "invalid_argument"


class TestStatusMessage:
    def test_course_messages(self):
        assert status_message(ApplicationStatus.ADMITTED) == (
            "Congratulations! You've been admitted to the program."
        )
        assert status_message(ApplicationStatus.REJECTED) == (
            "Your application has been reviewed. Check your status for details."
        )
        assert status_message(ApplicationStatus.WAITING_LIST) == (
            "You've been placed on the waiting list for the program."
        )

    def test_pending_falls_back_to_generic(self):
        assert status_message(ApplicationStatus.PENDING) == DEFAULT_STATUS_MESSAGE
        assert status_message(ApplicationStatus.PENDING, ApplicationKind.JOB) == DEFAULT_STATUS_MESSAGE


class TestPlanStatusTransition:
    def test_changes_and_single_effect(self, course_application):
        transition = plan_status_transition(course_application, "admitted", now=NOW)

        assert transition.changes == {"status": "admitted", "updated_at": NOW}
        assert transition.previous_status == "pending"
        assert transition.new_status is ApplicationStatus.ADMITTED
        assert transition.kind is ApplicationKind.COURSE
        assert transition.application_id == course_application.id_str

        assert len(transition.effects) == 1
        effect = transition.effects[0]
        assert isinstance(effect, NotificationPayload)
        assert effect.recipient_id == course_application.student_id
        assert effect.title == STATUS_NOTIFICATION_TITLE
        assert effect.message.startswith("Congratulations!")
        assert effect.type == NotificationType.INFO
        assert effect.link == "/student/applications"

    def test_job_application_link(self, job_application):
        transition = plan_status_transition(job_application, "rejected", now=NOW)
        assert transition.kind is ApplicationKind.JOB
        assert transition.effects[0].link == "/student/job-applications"

    def test_explicit_link(self, course_application):
        transition = plan_status_transition(course_application, "waiting-list", now=NOW, link="/inbox")
        assert transition.effects[0].link == "/inbox"

    def test_no_terminal_lock(self, course_application):
        course_application.status = ApplicationStatus.REJECTED.value
        transition = plan_status_transition(course_application, "pending", now=NOW)
        assert transition.previous_status == "rejected"
        assert transition.changes["status"] == "pending"
        assert transition.effects[0].message == DEFAULT_STATUS_MESSAGE

    def test_defaults_timestamp(self, course_application):
        transition = plan_status_transition(course_application, "admitted")
        assert isinstance(transition.changes["updated_at"], datetime)

    def test_invalid_status_raises(self, course_application):
        with pytest.raises(InvalidArgumentError):
            plan_status_transition(course_application, "approved", now=NOW)

    def test_does_not_mutate_application(self, course_application):
        plan_status_transition(course_application, "admitted", now=NOW)
        assert course_application.status == "pending"
