"""
Pure application status transitions.

``plan_status_transition`` decides what a status change writes and which
notifications it produces, without touching the store. The workflow
commits the changes and then applies the effects.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from careerhub.core.exceptions import InvalidArgumentError
from careerhub.data.models import BaseApplication, NotificationPayload, utcnow
from careerhub.utils.constants import (
    COURSE_APPLICATIONS_LINK,
    DEFAULT_STATUS_MESSAGE,
    JOB_APPLICATIONS_LINK,
    STATUS_MESSAGES,
    STATUS_NOTIFICATION_TITLE,
    ApplicationKind,
    ApplicationStatus,
    NotificationType,
)

DEFAULT_LINKS: dict[ApplicationKind, str] = {
    ApplicationKind.COURSE: COURSE_APPLICATIONS_LINK,
    ApplicationKind.JOB: JOB_APPLICATIONS_LINK,
}


@dataclass(frozen=True)
class StatusTransition:
    """A validated status change and the effects to apply after commit."""

    application_id: str
    kind: ApplicationKind
    previous_status: str
    new_status: ApplicationStatus
    changes: dict[str, Any]
    effects: list[NotificationPayload] = field(default_factory=list)


def parse_status(value: Any) -> ApplicationStatus:
    """
    Convert a status label to an ApplicationStatus.

    Raises:
        InvalidArgumentError: If the label is not one of the four statuses
    """
    if isinstance(value, ApplicationStatus):
        return value
    try:
        return ApplicationStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in ApplicationStatus)
        raise InvalidArgumentError(
            f"Invalid status {value!r}; expected one of: {allowed}",
            {"status": str(value)},
        ) from None


def status_message(status: ApplicationStatus, kind: ApplicationKind = ApplicationKind.COURSE) -> str:
    """Notification message sent to the student for a status."""
    return STATUS_MESSAGES[kind].get(status, DEFAULT_STATUS_MESSAGE)


def plan_status_transition(
    application: BaseApplication,
    new_status: Any,
    now: Optional[datetime] = None,
    link: Optional[str] = None,
) -> StatusTransition:
    """
    Plan a status change for an application.

    Any recognized status may follow any other; there is no terminal lock.

    Args:
        application: The application being decided on
        new_status: Requested status label
        now: Timestamp for ``updated_at`` (defaults to the current UTC time)
        link: Deep link for the notification (defaults per application kind)

    Returns:
        StatusTransition with the field changes and one notification effect

    Raises:
        InvalidArgumentError: If the status label is not recognized
    """
    status = parse_status(new_status)
    kind = application.kind
    notification = NotificationPayload(
        recipient_id=application.student_id,
        title=STATUS_NOTIFICATION_TITLE,
        message=status_message(status, kind),
        type=NotificationType.INFO,
        link=link if link is not None else DEFAULT_LINKS[kind],
    )
    return StatusTransition(
        application_id=application.id_str,
        kind=kind,
        previous_status=ApplicationStatus(application.status).value,
        new_status=status,
        changes={"status": status.value, "updated_at": now or utcnow()},
        effects=[notification],
    )
