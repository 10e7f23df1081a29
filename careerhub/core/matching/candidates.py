"""
Candidate resolution for applicant matching.

A candidate is a student profile together with the transcripts and
certificates the student has on file. Sub-record reads are lenient: a
failure to load transcripts or certificates is logged and the candidate
is built without them, which the matcher scores as zero signal.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from bson import ObjectId

from careerhub.core.exceptions import UnavailableError
from careerhub.data.models import Certificate, Transcript, User
from careerhub.data.repositories import (
    CertificateRepository,
    TranscriptRepository,
    UserRepository,
)
from careerhub.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class Candidate:
    """A student profile resolved with its academic records."""

    profile: User
    transcripts: list[Transcript] = field(default_factory=list)
    certificates: list[Certificate] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.profile.id_str

    @property
    def display_name(self) -> str:
        return self.profile.display_name

    @property
    def has_verified_transcript(self) -> bool:
        return any(t.is_verified for t in self.transcripts)

    @property
    def certificate_count(self) -> int:
        return len(self.certificates)

    @property
    def has_work_experience(self) -> bool:
        return self.profile.has_work_experience


class CandidateResolver:
    """Builds Candidate aggregates from the document store."""

    def __init__(
        self,
        users: UserRepository,
        transcripts: TranscriptRepository,
        certificates: CertificateRepository,
    ):
        self._users = users
        self._transcripts = transcripts
        self._certificates = certificates

    def resolve(self, student_id: str | ObjectId) -> Optional[Candidate]:
        """
        Resolve one student id to a Candidate.

        Returns None if no student profile exists for the id.
        """
        profile = self._users.get_by_id(student_id)
        if profile is None or not profile.is_student:
            return None

        try:
            transcripts = self._transcripts.get_verified_for_student(profile.id)
        except UnavailableError as e:
            logger.warning(f"Transcripts unavailable for {profile.id}, scoring without them: {e}")
            transcripts = []

        try:
            certificates = self._certificates.get_for_student(profile.id)
        except UnavailableError as e:
            logger.warning(f"Certificates unavailable for {profile.id}, scoring without them: {e}")
            certificates = []

        return Candidate(profile=profile, transcripts=transcripts, certificates=certificates)

    def resolve_many(self, profiles: Iterable[User]) -> list[Candidate]:
        """
        Build candidates for many profiles with one query per record type.

        Order of the returned list follows the order of ``profiles``.
        """
        profiles = list(profiles)
        student_ids = [p.id for p in profiles if p.id is not None]

        try:
            transcripts_by_student = self._transcripts.get_verified_for_students(student_ids)
        except UnavailableError as e:
            logger.warning(f"Transcripts unavailable for candidate pool, scoring without them: {e}")
            transcripts_by_student = {}

        try:
            certificates_by_student = self._certificates.get_for_students(student_ids)
        except UnavailableError as e:
            logger.warning(f"Certificates unavailable for candidate pool, scoring without them: {e}")
            certificates_by_student = {}

        return [
            Candidate(
                profile=profile,
                transcripts=transcripts_by_student.get(profile.id_str, []),
                certificates=certificates_by_student.get(profile.id_str, []),
            )
            for profile in profiles
        ]

    async def resolve_async(self, profile: User) -> Candidate:
        """
        Load one profile's records asynchronously.

        A failed read gives zero signal for that record type, as in
        ``resolve``.
        """
        try:
            transcripts = await self._transcripts.get_verified_for_student_async(profile.id)
        except UnavailableError as e:
            logger.warning(f"Transcripts unavailable for {profile.id}, scoring without them: {e}")
            transcripts = []

        try:
            certificates = await self._certificates.get_for_student_async(profile.id)
        except UnavailableError as e:
            logger.warning(f"Certificates unavailable for {profile.id}, scoring without them: {e}")
            certificates = []

        return Candidate(profile=profile, transcripts=transcripts, certificates=certificates)
