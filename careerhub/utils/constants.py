"""
Application-wide constants for CareerHub.

This module contains all constant values used throughout the application.
Modify these values to customize behavior without changing code logic.
"""

from enum import Enum
from typing import Final


# =============================================================================
# Application Constants
# =============================================================================

APP_NAME: Final[str] = "CareerHub"
APP_DISPLAY_NAME: Final[str] = "CareerHub Applicant Decisioning"
VERSION: Final[str] = "0.1.0"


# =============================================================================
# Collections
# =============================================================================

class Collections:
    """Names of the document store collections."""

    USERS: Final[str] = "users"
    JOBS: Final[str] = "jobs"
    COURSE_APPLICATIONS: Final[str] = "applications"
    JOB_APPLICATIONS: Final[str] = "jobApplications"
    CERTIFICATES: Final[str] = "certificates"
    TRANSCRIPTS: Final[str] = "transcripts"
    NOTIFICATIONS: Final[str] = "notifications"
    COURSES: Final[str] = "courses"
    FACULTIES: Final[str] = "faculties"


# =============================================================================
# Scoring Constants
# =============================================================================

# Maximum points contributed by each matching signal
SIGNAL_WEIGHTS: Final[dict[str, int]] = {
    "academic": 30,
    "certificates": 25,
    "qualifications": 35,
    "experience": 10,
}

# Points per certificate on file, capped at SIGNAL_WEIGHTS["certificates"]
POINTS_PER_CERTIFICATE: Final[int] = 5

MIN_SCORE: Final[int] = 0
MAX_SCORE: Final[int] = 100

# Score at or above which a candidate is qualified for a job
QUALIFICATION_THRESHOLD: Final[int] = 70

MATCH_DETAIL_ACADEMIC: Final[str] = "Academic transcripts verified"
MATCH_DETAIL_CERTIFICATES: Final[str] = "{count} relevant certificates"
MATCH_DETAIL_QUALIFICATIONS: Final[str] = "Meets qualification requirements"
MATCH_DETAIL_EXPERIENCE: Final[str] = "Has work experience"


# =============================================================================
# Workflow Constants
# =============================================================================

MAX_APPLICATIONS_PER_INSTITUTION: Final[int] = 2

DEFAULT_NOTIFICATION_LIMIT: Final[int] = 50

UNKNOWN_JOB_TITLE: Final[str] = "Unknown Job"
MISSING_PHONE_LABEL: Final[str] = "Not provided"

STATUS_NOTIFICATION_TITLE: Final[str] = "Application Status Update"

# Deep links attached to status notifications
COURSE_APPLICATIONS_LINK: Final[str] = "/student/applications"
JOB_APPLICATIONS_LINK: Final[str] = "/student/job-applications"


# =============================================================================
# Enums
# =============================================================================


class UserType(str, Enum):
    """Role of a platform account."""

    STUDENT = "student"
    INSTITUTION = "institution"
    COMPANY = "company"
    ADMIN = "admin"


class ApplicationStatus(str, Enum):
    """Status of a course or job application."""

    PENDING = "pending"
    ADMITTED = "admitted"
    REJECTED = "rejected"
    WAITING_LIST = "waiting-list"


class ApplicationKind(str, Enum):
    """The two kinds of application sharing one state machine."""

    COURSE = "course"
    JOB = "job"


class NotificationType(str, Enum):
    """Presentation type of a notification."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class AuditAction(str, Enum):
    """Types of actions that can be audited."""

    APPLICATION_SUBMITTED = "application_submitted"
    APPLICATION_STATUS_CHANGED = "application_status_changed"
    APPLICATION_WITHDRAWN = "application_withdrawn"
    APPLICANTS_RANKED = "applicants_ranked"


# Notification message per status, by application kind
STATUS_MESSAGES: Final[dict[ApplicationKind, dict[ApplicationStatus, str]]] = {
    ApplicationKind.COURSE: {
        ApplicationStatus.ADMITTED: "Congratulations! You've been admitted to the program.",
        ApplicationStatus.REJECTED: "Your application has been reviewed. Check your status for details.",
        ApplicationStatus.WAITING_LIST: "You've been placed on the waiting list for the program.",
    },
    ApplicationKind.JOB: {
        ApplicationStatus.ADMITTED: "Congratulations! Your job application has been accepted.",
        ApplicationStatus.REJECTED: "Your job application has been reviewed. Check your status for details.",
        ApplicationStatus.WAITING_LIST: "You've been placed on the waiting list for this position.",
    },
}

DEFAULT_STATUS_MESSAGE: Final[str] = "Your application status has been updated."
