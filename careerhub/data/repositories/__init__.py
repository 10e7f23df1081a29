"""
Database repositories for CareerHub data access.

This module provides repository classes for all document store
collections, implementing the repository pattern for clean data access.
"""

# Base repository
from .base import BaseRepository, store_errors

# Entity repositories
from .user_repository import UserRepository
from .academic_repository import CertificateRepository, TranscriptRepository
from .job_repository import CourseRepository, JobRepository
from .application_repository import CourseApplicationRepository, JobApplicationRepository
from .notification_repository import NotificationRepository

__all__ = [
    # Base
    "BaseRepository",
    "store_errors",
    # Accounts
    "UserRepository",
    # Academic
    "CertificateRepository",
    "TranscriptRepository",
    # Offerings
    "CourseRepository",
    "JobRepository",
    # Applications
    "CourseApplicationRepository",
    "JobApplicationRepository",
    # Notifications
    "NotificationRepository",
]
