"""
User repository for CareerHub.

Provides data access for platform accounts, including the student
pool enumerated by the applicant ranker.
"""

from bson import ObjectId

from careerhub.data.models.user import User
from careerhub.utils.constants import Collections, UserType

from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for user account operations."""

    @property
    def collection_name(self) -> str:
        return Collections.USERS

    @property
    def model_class(self) -> type[User]:
        return User

    # -------------------------------------------------------------------------
    # Query Operations
    # -------------------------------------------------------------------------

    def get_students(self) -> list[User]:
        """Get every student account, ordered by id."""
        return self.find(
            {"user_type": UserType.STUDENT.value},
            limit=0,
            sort_by="_id",
            sort_order=1,
        )

    async def get_students_async(self) -> list[User]:
        """Get every student account, ordered by id, asynchronously."""
        return await self.find_async(
            {"user_type": UserType.STUDENT.value},
            limit=0,
            sort_by="_id",
            sort_order=1,
        )

    # -------------------------------------------------------------------------
    # Job Application Index
    # -------------------------------------------------------------------------

    def add_job_application(self, user_id: str | ObjectId, application_id: ObjectId) -> bool:
        """Record a job application id on the student's profile."""
        return self.add_to_set(user_id, "job_applications", application_id)

    def remove_job_application(self, user_id: str | ObjectId, application_id: ObjectId) -> bool:
        """Remove a job application id from the student's profile."""
        return self.pull(user_id, "job_applications", application_id)
