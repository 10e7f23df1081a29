"""
User account models for CareerHub.

Students, institutions, companies and admins share the ``users``
collection and are told apart by ``user_type``.
"""

from typing import Any, Optional

from pydantic import Field, field_validator

from careerhub.utils.constants import Collections, UserType

from .base import BaseDocument, PyObjectId


class User(BaseDocument):
    """A platform account."""

    display_name: str = ""
    # Stored as entered; blanks read as None
    email: Optional[str] = None
    phone: Optional[str] = None
    user_type: UserType = UserType.STUDENT
    is_active: bool = True

    # Student profile; any truthy value counts as work experience
    work_experience: Any = None
    job_applications: list[PyObjectId] = Field(default_factory=list)

    @field_validator("display_name")
    @classmethod
    def strip_display_name(cls, v: str) -> str:
        return v.strip()

    @field_validator("email", "phone", mode="before")
    @classmethod
    def blank_contact_to_none(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @property
    def is_student(self) -> bool:
        return self.user_type == UserType.STUDENT

    @property
    def has_work_experience(self) -> bool:
        """Check if the profile carries a truthy work-experience indicator."""
        return bool(self.work_experience)

    class Settings:
        """MongoDB collection settings."""

        name = Collections.USERS
        indexes = ["user_type", "email"]
