"""
Job posting and course repositories for CareerHub.
"""

from bson import ObjectId

from careerhub.data.models.job import Course, JobPosting
from careerhub.utils.constants import Collections

from .base import BaseRepository


class JobRepository(BaseRepository[JobPosting]):
    """Repository for job posting operations."""

    @property
    def collection_name(self) -> str:
        return Collections.JOBS

    @property
    def model_class(self) -> type[JobPosting]:
        return JobPosting

    def increment_applications(self, id_value: str | ObjectId, amount: int = 1) -> bool:
        """Atomically adjust the denormalized application counter."""
        return self.increment(id_value, "applications_count", amount)


class CourseRepository(BaseRepository[Course]):
    """Repository for course operations."""

    @property
    def collection_name(self) -> str:
        return Collections.COURSES

    @property
    def model_class(self) -> type[Course]:
        return Course
