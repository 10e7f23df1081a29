"""
Pydantic data models for CareerHub.

This module provides all document models stored in the document store
and the value objects passed between services.
"""

# Base models
from .base import BaseDocument, EmbeddedModel, PyObjectId, TimestampMixin, utcnow

# Account models
from .user import User

# Academic records
from .academic import Certificate, Transcript

# Offerings
from .job import Course, JobPosting

# Applications
from .application import BaseApplication, CourseApplication, JobApplication

# Notifications
from .notification import Notification, NotificationPayload

__all__ = [
    # Base
    "BaseDocument",
    "EmbeddedModel",
    "PyObjectId",
    "TimestampMixin",
    "utcnow",
    # Accounts
    "User",
    # Academic
    "Certificate",
    "Transcript",
    # Offerings
    "Course",
    "JobPosting",
    # Applications
    "BaseApplication",
    "CourseApplication",
    "JobApplication",
    # Notifications
    "Notification",
    "NotificationPayload",
]
