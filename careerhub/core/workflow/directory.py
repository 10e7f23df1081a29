"""
Application listings joined with their related records.

Each listing batch-fetches related courses, jobs and accounts with one
``$in`` query per collection. A related record that no longer exists is
reported as ``None`` instead of failing the listing.
"""

from typing import Optional

from bson import ObjectId
from pydantic import BaseModel

from careerhub.data.models import Course, CourseApplication, JobApplication, JobPosting, User
from careerhub.data.repositories import (
    CourseApplicationRepository,
    CourseRepository,
    JobApplicationRepository,
    JobRepository,
    UserRepository,
)


class CourseApplicationView(BaseModel):
    """A student's course application with its course and institution."""

    application: CourseApplication
    course: Optional[Course] = None
    institution: Optional[User] = None


class InstitutionApplicationView(BaseModel):
    """An application received by an institution, with applicant and course."""

    application: CourseApplication
    student: Optional[User] = None
    course: Optional[Course] = None


class JobApplicationView(BaseModel):
    """A student's job application with its job and company."""

    application: JobApplication
    job: Optional[JobPosting] = None
    company: Optional[User] = None


def _ids(values) -> list[ObjectId]:
    return [v for v in values if v is not None]


class ApplicationDirectory:
    """Read-side listings of course and job applications."""

    def __init__(
        self,
        course_applications: CourseApplicationRepository,
        job_applications: JobApplicationRepository,
        courses: CourseRepository,
        jobs: JobRepository,
        users: UserRepository,
    ):
        self._course_applications = course_applications
        self._job_applications = job_applications
        self._courses = courses
        self._jobs = jobs
        self._users = users

    def student_course_applications(self, student_id: str | ObjectId) -> list[CourseApplicationView]:
        """List a student's course applications, newest first."""
        applications = self._course_applications.get_by_student(student_id)
        courses = self._courses.get_many_by_ids(_ids(a.course_id for a in applications))
        institutions = self._users.get_many_by_ids(_ids(a.institution_id for a in applications))

        return [
            CourseApplicationView(
                application=a,
                course=courses.get(str(a.course_id)),
                institution=institutions.get(str(a.institution_id)),
            )
            for a in applications
        ]

    def institution_applications(self, institution_id: str | ObjectId) -> list[InstitutionApplicationView]:
        """List every application addressed to an institution, newest first."""
        applications = self._course_applications.get_by_institution(institution_id)
        students = self._users.get_many_by_ids(_ids(a.student_id for a in applications))
        courses = self._courses.get_many_by_ids(_ids(a.course_id for a in applications))

        return [
            InstitutionApplicationView(
                application=a,
                student=students.get(str(a.student_id)),
                course=courses.get(str(a.course_id)),
            )
            for a in applications
        ]

    def student_job_applications(self, student_id: str | ObjectId) -> list[JobApplicationView]:
        """List a student's job applications, newest first."""
        applications = self._job_applications.get_by_student(student_id)
        jobs = self._jobs.get_many_by_ids(_ids(a.job_id for a in applications))
        companies = self._users.get_many_by_ids(_ids(a.company_id for a in applications))

        return [
            JobApplicationView(
                application=a,
                job=jobs.get(str(a.job_id)),
                company=companies.get(str(a.company_id)) if a.company_id else None,
            )
            for a in applications
        ]
