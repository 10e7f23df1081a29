"""
Job posting and course models for CareerHub.

Job postings are owned by a company, courses by an institution. Both
are read-only from the point of view of matching.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from careerhub.utils.constants import Collections

from .base import BaseDocument, PyObjectId, utcnow


class JobPosting(BaseDocument):
    """A company's job posting."""

    company_id: PyObjectId
    title: str = ""
    description: Optional[str] = None
    qualifications: Optional[str] = None  # free-text requirement
    location: Optional[str] = None
    salary: Optional[str] = None
    is_active: bool = True
    deadline: Optional[datetime] = None
    closed_at: Optional[datetime] = None

    # Denormalized, only ever changed through atomic increments
    applications_count: int = Field(default=0, ge=0)

    @field_validator("applications_count", mode="before")
    @classmethod
    def clamp_count(cls, v: Optional[int]) -> int:
        """Concurrent withdrawals can leave the stored counter below zero."""
        return max(0, v or 0)

    @property
    def accepting_applications(self) -> bool:
        """Check if the posting is open and its deadline has not passed."""
        if not self.is_active:
            return False
        if self.deadline and self.deadline < utcnow():
            return False
        return True

    class Settings:
        """MongoDB collection settings."""

        name = Collections.JOBS
        indexes = ["company_id", "is_active", "deadline"]


class Course(BaseDocument):
    """An institution's course offering."""

    institution_id: PyObjectId
    faculty_id: Optional[PyObjectId] = None
    name: str = ""
    description: Optional[str] = None
    requirements: Optional[str] = None
    is_active: bool = True

    class Settings:
        """MongoDB collection settings."""

        name = Collections.COURSES
        indexes = ["institution_id", "faculty_id"]
