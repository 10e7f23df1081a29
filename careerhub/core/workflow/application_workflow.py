"""
Application workflow.

Owns the lifecycle of course and job applications: submission with its
admission rules, status decisions by the owning institution or company,
and withdrawal. The primary write of each operation is authoritative;
notifications, counters and the student's application index are
projections applied afterwards on a best-effort basis.
"""

from datetime import datetime
from typing import Callable, Optional

from bson import ObjectId

from careerhub.core.exceptions import (
    CareerHubError,
    ConflictError,
    ForbiddenError,
    InvalidArgumentError,
    LimitExceededError,
    NotFoundError,
    UnavailableError,
)
from careerhub.data.models import (
    CourseApplication,
    JobApplication,
    JobPosting,
    utcnow,
)
from careerhub.data.repositories import (
    CourseApplicationRepository,
    CourseRepository,
    JobApplicationRepository,
    JobRepository,
    UserRepository,
)
from careerhub.utils.config import WorkflowSettings
from careerhub.utils.constants import (
    MISSING_PHONE_LABEL,
    UNKNOWN_JOB_TITLE,
    ApplicationKind,
    ApplicationStatus,
    AuditAction,
)
from careerhub.utils.logger import LoggerMixin, audit_log

from .notifications import NotificationService
from .transitions import StatusTransition, parse_status, plan_status_transition


class ApplicationWorkflow(LoggerMixin):
    """Submission, decision and withdrawal of applications."""

    def __init__(
        self,
        course_applications: CourseApplicationRepository,
        job_applications: JobApplicationRepository,
        courses: CourseRepository,
        jobs: JobRepository,
        users: UserRepository,
        notifications: NotificationService,
        settings: Optional[WorkflowSettings] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._course_applications = course_applications
        self._job_applications = job_applications
        self._courses = courses
        self._jobs = jobs
        self._users = users
        self._notifications = notifications
        self._settings = settings or WorkflowSettings()
        self._clock = clock

    def _applications_for(self, kind: ApplicationKind):
        if kind == ApplicationKind.JOB:
            return self._job_applications
        return self._course_applications

    def _link_for(self, kind: ApplicationKind) -> str:
        if kind == ApplicationKind.JOB:
            return self._settings.job_notification_link
        return self._settings.course_notification_link

    # -------------------------------------------------------------------------
    # Status Decisions
    # -------------------------------------------------------------------------

    def set_status(
        self,
        application_id: str | ObjectId,
        new_status: str | ApplicationStatus,
        acting_authority: Optional[str | ObjectId] = None,
        kind: ApplicationKind = ApplicationKind.COURSE,
    ) -> StatusTransition:
        """
        Move an application to a new status and notify the student.

        Args:
            application_id: Application to decide on
            new_status: One of pending, admitted, rejected, waiting-list
            acting_authority: Institution or company making the decision;
                when given it must own the application
            kind: Whether the id refers to a course or job application

        Returns:
            The committed transition

        Raises:
            InvalidArgumentError: If the status label is not recognized
            NotFoundError: If the application does not exist
            ForbiddenError: If acting_authority does not own the application
        """
        parse_status(new_status)
        try:
            kind = ApplicationKind(kind)
        except ValueError:
            raise InvalidArgumentError(f"Invalid application kind: {kind!r}") from None

        applications = self._applications_for(kind)
        application = applications.get_by_id(application_id)
        if application is None:
            raise NotFoundError(f"{kind.value} application", application_id)

        if acting_authority is not None and str(application.owner_id) != str(acting_authority):
            raise ForbiddenError(
                "Application is addressed to another owner",
                {"application_id": str(application_id)},
            )

        transition = plan_status_transition(
            application,
            new_status,
            now=self._clock(),
            link=self._link_for(application.kind),
        )
        if applications.update(application.id, transition.changes) is None:
            raise NotFoundError(f"{kind.value} application", application_id)

        for payload in transition.effects:
            try:
                self._notifications.notify(payload)
            except CareerHubError as e:
                self.logger.warning(
                    f"Status notification for application {application_id} not delivered: {e}"
                )

        audit_log(
            AuditAction.APPLICATION_STATUS_CHANGED,
            {
                "application_id": transition.application_id,
                "kind": transition.kind.value,
                "from": transition.previous_status,
                "to": transition.new_status.value,
                "by": str(acting_authority) if acting_authority is not None else None,
            },
        )
        return transition

    # -------------------------------------------------------------------------
    # Course Applications
    # -------------------------------------------------------------------------

    def submit(
        self,
        student_id: str | ObjectId,
        course_id: str | ObjectId,
        institution_id: str | ObjectId,
    ) -> CourseApplication:
        """
        Submit a course application.

        A student may hold at most two applications per institution
        (counting every status) and only one per course.

        Raises:
            NotFoundError: If the course or institution does not exist
            InvalidArgumentError: If the course belongs to another institution
            LimitExceededError: If the per-institution cap is reached
            ConflictError: If the student already applied to the course
        """
        course = self._courses.get_by_id(course_id)
        if course is None:
            raise NotFoundError("course", course_id)
        if self._users.get_by_id(institution_id) is None:
            raise NotFoundError("institution", institution_id)
        if str(course.institution_id) != str(institution_id):
            raise InvalidArgumentError(
                "Course is not offered by this institution",
                {"course_id": str(course_id), "institution_id": str(institution_id)},
            )

        limit = self._settings.max_applications_per_institution
        held = self._course_applications.count_for_institution(student_id, institution_id)
        if held >= limit:
            raise LimitExceededError(
                f"You can only apply to maximum {limit} courses per institution",
                {"institution_id": str(institution_id), "limit": limit},
            )
        if self._course_applications.exists_for_course(student_id, course_id):
            raise ConflictError(
                "You have already applied to this course",
                {"course_id": str(course_id)},
            )

        application = self._course_applications.create(
            CourseApplication(
                student_id=student_id,
                course_id=course.id,
                institution_id=course.institution_id,
                status=ApplicationStatus.PENDING,
                applied_at=self._clock(),
            )
        )
        self.logger.info(f"Student {student_id} applied to course {course_id}")
        audit_log(
            AuditAction.APPLICATION_SUBMITTED,
            {
                "application_id": application.id_str,
                "kind": ApplicationKind.COURSE.value,
                "student_id": str(student_id),
                "course_id": str(course_id),
            },
        )
        return application

    # -------------------------------------------------------------------------
    # Job Applications
    # -------------------------------------------------------------------------

    def _resolve_job(self, job_id: str | ObjectId) -> Optional[JobPosting]:
        try:
            return self._jobs.get_by_id(job_id)
        except UnavailableError as e:
            self.logger.warning(f"Could not load job {job_id}, using placeholders: {e}")
            return None

    def apply(
        self,
        student_id: str | ObjectId,
        job_id: str | ObjectId,
        cover_letter: str = "",
    ) -> JobApplication:
        """
        Apply to a job posting.

        The student's contact details are copied onto the application. A
        job that cannot be loaded still accepts the application under a
        placeholder title, without a company and without touching the
        job's counter.

        Raises:
            NotFoundError: If the student profile does not exist
            InvalidArgumentError: If job_id is not a valid id
        """
        student = self._users.get_by_id(student_id)
        if student is None:
            raise NotFoundError("student profile", student_id)
        if not ObjectId.is_valid(job_id):
            raise InvalidArgumentError(f"Invalid job id: {job_id!r}", {"job_id": str(job_id)})

        job = self._resolve_job(job_id)
        application = self._job_applications.create(
            JobApplication(
                student_id=student.id,
                job_id=job_id,
                company_id=job.company_id if job else None,
                job_title=job.title if job else UNKNOWN_JOB_TITLE,
                student_name=student.display_name,
                student_email=student.email,
                student_phone=student.phone or MISSING_PHONE_LABEL,
                cover_letter=cover_letter,
                status=ApplicationStatus.PENDING,
                applied_at=self._clock(),
            )
        )

        try:
            self._users.add_job_application(student.id, application.id)
        except CareerHubError as e:
            self.logger.warning(f"Could not index application {application.id} on student {student_id}: {e}")

        if job is not None:
            try:
                self._jobs.increment_applications(job.id, 1)
            except CareerHubError as e:
                self.logger.warning(f"Could not increment application count for job {job_id}: {e}")

        self.logger.info(f"Student {student_id} applied to job {job_id}")
        audit_log(
            AuditAction.APPLICATION_SUBMITTED,
            {
                "application_id": application.id_str,
                "kind": ApplicationKind.JOB.value,
                "student_id": str(student_id),
                "job_id": str(job_id),
            },
        )
        return application

    def withdraw(
        self,
        application_id: str | ObjectId,
        requesting_student_id: str | ObjectId,
    ) -> None:
        """
        Withdraw a job application.

        Raises:
            NotFoundError: If the application does not exist
            ForbiddenError: If it belongs to another student
        """
        application = self._job_applications.get_by_id(application_id)
        if application is None:
            raise NotFoundError("job application", application_id)
        if str(application.student_id) != str(requesting_student_id):
            raise ForbiddenError(
                "Application belongs to another student",
                {"application_id": str(application_id)},
            )

        if not self._job_applications.delete(application.id):
            raise NotFoundError("job application", application_id)

        try:
            self._users.remove_job_application(application.student_id, application.id)
        except CareerHubError as e:
            self.logger.warning(
                f"Could not remove application {application_id} from student {requesting_student_id}: {e}"
            )

        if application.job_resolved:
            try:
                self._jobs.increment_applications(application.job_id, -1)
            except CareerHubError as e:
                self.logger.warning(
                    f"Could not decrement application count for job {application.job_id}: {e}"
                )

        self.logger.info(f"Student {requesting_student_id} withdrew application {application_id}")
        audit_log(
            AuditAction.APPLICATION_WITHDRAWN,
            {
                "application_id": str(application_id),
                "job_id": str(application.job_id),
                "student_id": str(requesting_student_id),
            },
        )
