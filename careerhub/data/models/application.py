"""
Application data models for CareerHub.

Course applications and job applications follow the same status state
machine but point at different targets: a course and its institution,
or a job and its company.
"""

from abc import abstractmethod
from datetime import datetime
from typing import ClassVar, Optional

from pydantic import Field

from careerhub.utils.constants import (
    MISSING_PHONE_LABEL,
    UNKNOWN_JOB_TITLE,
    ApplicationKind,
    ApplicationStatus,
    Collections,
)

from .base import BaseDocument, PyObjectId, utcnow


class BaseApplication(BaseDocument):
    """Fields shared by both application kinds."""

    student_id: PyObjectId
    status: ApplicationStatus = ApplicationStatus.PENDING
    applied_at: datetime = Field(default_factory=utcnow)

    kind: ClassVar[ApplicationKind]

    @property
    @abstractmethod
    def owner_id(self) -> Optional[PyObjectId]:
        """Id of the institution or company allowed to decide on it."""


class CourseApplication(BaseApplication):
    """A student's request for admission to an institution's course."""

    course_id: PyObjectId
    institution_id: PyObjectId

    kind: ClassVar[ApplicationKind] = ApplicationKind.COURSE

    @property
    def owner_id(self) -> Optional[PyObjectId]:
        return self.institution_id

    class Settings:
        """MongoDB collection settings."""

        name = Collections.COURSE_APPLICATIONS
        indexes = [
            [("student_id", 1), ("institution_id", 1)],
            [("student_id", 1), ("course_id", 1)],
            "institution_id",
        ]


class JobApplication(BaseApplication):
    """A student's application to a company's job posting."""

    job_id: PyObjectId
    company_id: Optional[PyObjectId] = None  # None when the job did not resolve
    job_title: str = UNKNOWN_JOB_TITLE
    student_name: str = ""
    student_email: Optional[str] = None
    student_phone: str = MISSING_PHONE_LABEL
    cover_letter: str = ""

    kind: ClassVar[ApplicationKind] = ApplicationKind.JOB

    @property
    def owner_id(self) -> Optional[PyObjectId]:
        return self.company_id

    @property
    def job_resolved(self) -> bool:
        """Check if the job was found when the application was created."""
        return self.company_id is not None

    class Settings:
        """MongoDB collection settings."""

        name = Collections.JOB_APPLICATIONS
        indexes = ["student_id", "job_id", "company_id"]
