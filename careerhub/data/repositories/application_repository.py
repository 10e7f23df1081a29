"""
Application repositories for CareerHub.

Course applications live in ``applications`` and job applications in
``jobApplications``; both share the status lifecycle.
"""

from bson import ObjectId

from careerhub.data.models.application import CourseApplication, JobApplication
from careerhub.utils.constants import Collections

from .base import BaseRepository


class CourseApplicationRepository(BaseRepository[CourseApplication]):
    """Repository for course application operations."""

    @property
    def collection_name(self) -> str:
        return Collections.COURSE_APPLICATIONS

    @property
    def model_class(self) -> type[CourseApplication]:
        return CourseApplication

    # -------------------------------------------------------------------------
    # Submission Checks
    # -------------------------------------------------------------------------

    def count_for_institution(
        self,
        student_id: str | ObjectId,
        institution_id: str | ObjectId,
    ) -> int:
        """Count a student's applications to one institution, any status."""
        return self.count(
            {
                "student_id": self._to_object_id(student_id),
                "institution_id": self._to_object_id(institution_id),
            }
        )

    def exists_for_course(
        self,
        student_id: str | ObjectId,
        course_id: str | ObjectId,
    ) -> bool:
        """Check if the student already applied to the course."""
        return self.exists(
            {
                "student_id": self._to_object_id(student_id),
                "course_id": self._to_object_id(course_id),
            }
        )

    # -------------------------------------------------------------------------
    # Listings
    # -------------------------------------------------------------------------

    def get_by_student(self, student_id: str | ObjectId) -> list[CourseApplication]:
        """Get a student's course applications, newest first."""
        return self.find(
            {"student_id": self._to_object_id(student_id)},
            limit=0,
            sort_by="applied_at",
        )

    def get_by_institution(self, institution_id: str | ObjectId) -> list[CourseApplication]:
        """Get every application addressed to an institution, newest first."""
        return self.find(
            {"institution_id": self._to_object_id(institution_id)},
            limit=0,
            sort_by="applied_at",
        )


class JobApplicationRepository(BaseRepository[JobApplication]):
    """Repository for job application operations."""

    @property
    def collection_name(self) -> str:
        return Collections.JOB_APPLICATIONS

    @property
    def model_class(self) -> type[JobApplication]:
        return JobApplication

    def get_by_student(self, student_id: str | ObjectId) -> list[JobApplication]:
        """Get a student's job applications, newest first."""
        return self.find(
            {"student_id": self._to_object_id(student_id)},
            limit=0,
            sort_by="applied_at",
        )
