"""
Service wiring for CareerHub.

``build_services`` is the single place where repositories are bound to a
database manager and handed to the matching and workflow services.
"""

from dataclasses import dataclass
from typing import Optional

from careerhub.data.database import DatabaseManager
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
from careerhub.utils.config import AppSettings, get_settings

from .matching import CandidateResolver, Matcher, Ranker
from .workflow import ApplicationDirectory, ApplicationWorkflow, NotificationService


@dataclass
class CareerServices:
    """The services exposed to callers, sharing one set of repositories."""

    matcher: Matcher
    ranker: Ranker
    workflow: ApplicationWorkflow
    notifications: NotificationService
    directory: ApplicationDirectory


def build_services(
    db_manager: DatabaseManager,
    settings: Optional[AppSettings] = None,
) -> CareerServices:
    """
    Build every service over repositories bound to ``db_manager``.

    Args:
        db_manager: Store handle shared by all repositories
        settings: Application settings (defaults to the global settings)

    Returns:
        CareerServices ready for use
    """
    settings = settings or get_settings()

    users = UserRepository(db_manager)
    jobs = JobRepository(db_manager)
    courses = CourseRepository(db_manager)
    course_applications = CourseApplicationRepository(db_manager)
    job_applications = JobApplicationRepository(db_manager)

    resolver = CandidateResolver(
        users,
        TranscriptRepository(db_manager),
        CertificateRepository(db_manager),
    )
    matcher = Matcher(resolver=resolver, jobs=jobs)
    ranker = Ranker(
        matcher,
        resolver,
        users,
        jobs,
        max_concurrency=settings.matching.max_concurrency,
    )

    notifications = NotificationService(
        NotificationRepository(db_manager),
        list_limit=settings.workflow.notification_list_limit,
    )
    workflow = ApplicationWorkflow(
        course_applications,
        job_applications,
        courses,
        jobs,
        users,
        notifications,
        settings=settings.workflow,
    )
    directory = ApplicationDirectory(
        course_applications,
        job_applications,
        courses,
        jobs,
        users,
    )

    return CareerServices(
        matcher=matcher,
        ranker=ranker,
        workflow=workflow,
        notifications=notifications,
        directory=directory,
    )
