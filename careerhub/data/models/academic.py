"""
Academic record models for CareerHub.

Transcripts and certificates are uploaded by a student and owned by
exactly one student. Transcript verification is set by an external
verifier and only read here.
"""

from datetime import datetime
from typing import Optional

from careerhub.utils.constants import Collections

from .base import BaseDocument, PyObjectId


class Transcript(BaseDocument):
    """An academic transcript on file for a student."""

    student_id: PyObjectId
    file_name: Optional[str] = None
    file_url: Optional[str] = None
    is_verified: bool = False
    verified_at: Optional[datetime] = None

    class Settings:
        """MongoDB collection settings."""

        name = Collections.TRANSCRIPTS
        indexes = [[("student_id", 1), ("is_verified", 1)]]


class Certificate(BaseDocument):
    """A certificate on file for a student."""

    student_id: PyObjectId
    name: Optional[str] = None
    certificate_type: Optional[str] = None
    issuing_organization: Optional[str] = None
    issue_date: Optional[datetime] = None
    file_url: Optional[str] = None

    class Settings:
        """MongoDB collection settings."""

        name = Collections.CERTIFICATES
        indexes = ["student_id"]
