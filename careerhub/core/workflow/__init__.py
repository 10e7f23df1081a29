"""Application lifecycle, notifications and listings."""

from .application_workflow import ApplicationWorkflow
from .directory import (
    ApplicationDirectory,
    CourseApplicationView,
    InstitutionApplicationView,
    JobApplicationView,
)
from .notifications import NotificationService
from .transitions import StatusTransition, parse_status, plan_status_transition, status_message

__all__ = [
    "ApplicationWorkflow",
    "ApplicationDirectory",
    "CourseApplicationView",
    "InstitutionApplicationView",
    "JobApplicationView",
    "NotificationService",
    "StatusTransition",
    "parse_status",
    "plan_status_transition",
    "status_message",
]
