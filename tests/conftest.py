"""
Shared test fixtures for the CareerHub test suite.

Sets environment variables before any careerhub imports so settings load
in testing mode, then provides a mongomock-backed database manager,
repositories, wired services and factories for stored documents.
"""

import os

# === Set environment BEFORE any careerhub imports ===
os.environ.setdefault("APP_ENVIRONMENT", "testing")
os.environ.setdefault("DB_NAME", "careerhub_test")
os.environ.setdefault("DB_USE_TRANSACTIONS", "false")
os.environ.setdefault("LOG_FILE_OUTPUT", "false")

from datetime import datetime
from typing import Any, Optional

import mongomock
import pytest
from bson import ObjectId

from careerhub.core.matching import Candidate, CandidateResolver, Matcher, Ranker
from careerhub.core.services import build_services
from careerhub.core.workflow import ApplicationDirectory, ApplicationWorkflow, NotificationService
from careerhub.data.database import DatabaseManager
from careerhub.data.models import (
    Certificate,
    Course,
    CourseApplication,
    JobApplication,
    JobPosting,
    Transcript,
    User,
)
from careerhub.data.repositories import (
    CertificateRepository,
    CourseApplicationRepository,
    CourseRepository,
    JobApplicationRepository,
    JobRepository,
    NotificationRepository,
    TranscriptRepository,
    UserRepository,
)
from careerhub.utils.config import AppSettings, WorkflowSettings
from careerhub.utils.constants import ApplicationStatus, UserType

FIXED_NOW = datetime(2024, 5, 1, 12, 0, 0)


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def settings():
    return AppSettings()


@pytest.fixture
def db_manager(settings):
    """DatabaseManager backed by an in-memory mongomock client."""
    manager = DatabaseManager(settings=settings, sync_client=mongomock.MongoClient())
    yield manager
    manager.close_sync()


# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------


@pytest.fixture
def user_repo(db_manager):
    return UserRepository(db_manager)


@pytest.fixture
def job_repo(db_manager):
    return JobRepository(db_manager)


@pytest.fixture
def course_repo(db_manager):
    return CourseRepository(db_manager)


@pytest.fixture
def transcript_repo(db_manager):
    return TranscriptRepository(db_manager)


@pytest.fixture
def certificate_repo(db_manager):
    return CertificateRepository(db_manager)


@pytest.fixture
def course_application_repo(db_manager):
    return CourseApplicationRepository(db_manager)


@pytest.fixture
def job_application_repo(db_manager):
    return JobApplicationRepository(db_manager)


@pytest.fixture
def notification_repo(db_manager):
    return NotificationRepository(db_manager)


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------


@pytest.fixture
def resolver(user_repo, transcript_repo, certificate_repo):
    return CandidateResolver(user_repo, transcript_repo, certificate_repo)


@pytest.fixture
def matcher(resolver, job_repo):
    return Matcher(resolver=resolver, jobs=job_repo)


@pytest.fixture
def ranker(matcher, resolver, user_repo, job_repo):
    return Ranker(matcher, resolver, user_repo, job_repo)


@pytest.fixture
def notification_service(notification_repo):
    return NotificationService(notification_repo)


@pytest.fixture
def workflow(
    course_application_repo,
    job_application_repo,
    course_repo,
    job_repo,
    user_repo,
    notification_service,
):
    return ApplicationWorkflow(
        course_application_repo,
        job_application_repo,
        course_repo,
        job_repo,
        user_repo,
        notification_service,
        settings=WorkflowSettings(),
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def directory(course_application_repo, job_application_repo, course_repo, job_repo, user_repo):
    return ApplicationDirectory(
        course_application_repo,
        job_application_repo,
        course_repo,
        job_repo,
        user_repo,
    )


@pytest.fixture
def services(db_manager, settings):
    return build_services(db_manager, settings)


# ---------------------------------------------------------------------------
# Document factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_student(user_repo):
    """Factory that stores a student profile."""

    def _factory(
        display_name: str = "Thabo Mokoena",
        email: Optional[str] = "thabo@example.com",
        phone: Optional[str] = "+266 5000 0000",
        work_experience: Any = None,
        **kwargs,
    ) -> User:
        return user_repo.create(
            User(
                display_name=display_name,
                email=email,
                phone=phone,
                user_type=UserType.STUDENT,
                work_experience=work_experience,
                **kwargs,
            )
        )

    return _factory


@pytest.fixture
def make_account(user_repo):
    """Factory that stores an institution, company or admin account."""

    def _factory(user_type: UserType = UserType.INSTITUTION, display_name: str = "Limkokwing University") -> User:
        return user_repo.create(User(display_name=display_name, user_type=user_type))

    return _factory


@pytest.fixture
def make_job(job_repo):
    """Factory that stores a job posting."""

    def _factory(
        company_id: Optional[ObjectId] = None,
        title: str = "Junior Data Analyst",
        qualifications: Optional[str] = "BSc in Statistics or related field",
        **kwargs,
    ) -> JobPosting:
        return job_repo.create(
            JobPosting(
                company_id=company_id or ObjectId(),
                title=title,
                qualifications=qualifications,
                **kwargs,
            )
        )

    return _factory


@pytest.fixture
def make_course(course_repo):
    """Factory that stores a course."""

    def _factory(institution_id: ObjectId, name: str = "BSc Information Technology", **kwargs) -> Course:
        return course_repo.create(Course(institution_id=institution_id, name=name, **kwargs))

    return _factory


@pytest.fixture
def add_transcript(transcript_repo):
    def _factory(student_id: ObjectId, is_verified: bool = True) -> Transcript:
        return transcript_repo.create(
            Transcript(
                student_id=student_id,
                file_name="transcript.pdf",
                is_verified=is_verified,
            )
        )

    return _factory


@pytest.fixture
def add_certificates(certificate_repo):
    def _factory(student_id: ObjectId, count: int) -> list[Certificate]:
        return [
            certificate_repo.create(Certificate(student_id=student_id, name=f"Certificate {i + 1}"))
            for i in range(count)
        ]

    return _factory


@pytest.fixture
def make_course_application(course_application_repo):
    """Factory that stores a course application directly, bypassing submission rules."""

    def _factory(
        student_id: ObjectId,
        course_id: ObjectId,
        institution_id: ObjectId,
        status: ApplicationStatus = ApplicationStatus.PENDING,
        **kwargs,
    ) -> CourseApplication:
        return course_application_repo.create(
            CourseApplication(
                student_id=student_id,
                course_id=course_id,
                institution_id=institution_id,
                status=status,
                **kwargs,
            )
        )

    return _factory


@pytest.fixture
def make_job_application(job_application_repo):
    def _factory(
        student_id: ObjectId,
        job_id: ObjectId,
        company_id: Optional[ObjectId] = None,
        **kwargs,
    ) -> JobApplication:
        return job_application_repo.create(
            JobApplication(student_id=student_id, job_id=job_id, company_id=company_id, **kwargs)
        )

    return _factory


# ---------------------------------------------------------------------------
# In-memory records (no store)
# ---------------------------------------------------------------------------


@pytest.fixture
def make_candidate():
    """Factory that builds an unsaved Candidate aggregate."""

    def _factory(
        verified_transcript: bool = False,
        certificates: int = 0,
        work_experience: Any = None,
        display_name: str = "Palesa Nthati",
    ) -> Candidate:
        student_id = ObjectId()
        return Candidate(
            profile=User(
                _id=student_id,
                display_name=display_name,
                email="palesa@example.com",
                work_experience=work_experience,
            ),
            transcripts=[Transcript(student_id=student_id, is_verified=True)] if verified_transcript else [],
            certificates=[Certificate(student_id=student_id, name=f"Cert {i}") for i in range(certificates)],
        )

    return _factory


@pytest.fixture
def sample_job():
    return JobPosting(
        _id=ObjectId(),
        company_id=ObjectId(),
        title="Software Developer",
        qualifications="Diploma in Computer Science",
    )
