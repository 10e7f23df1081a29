"""
Transcript and certificate repositories for CareerHub.

Both collections are keyed by the owning student. Batch lookups take a
list of student ids so the ranker can load a whole pool in one query
per collection.
"""

from collections import defaultdict
from typing import Iterable

from bson import ObjectId

from careerhub.data.models.academic import Certificate, Transcript
from careerhub.utils.constants import Collections

from .base import BaseRepository


def _group_by_student(records: list) -> dict[str, list]:
    grouped: dict[str, list] = defaultdict(list)
    for record in records:
        grouped[str(record.student_id)].append(record)
    return dict(grouped)


class TranscriptRepository(BaseRepository[Transcript]):
    """Repository for transcript records."""

    @property
    def collection_name(self) -> str:
        return Collections.TRANSCRIPTS

    @property
    def model_class(self) -> type[Transcript]:
        return Transcript

    def get_verified_for_student(self, student_id: str | ObjectId) -> list[Transcript]:
        """Get a student's verified transcripts."""
        return self.find(
            {"student_id": self._to_object_id(student_id), "is_verified": True},
            limit=0,
        )

    async def get_verified_for_student_async(self, student_id: str | ObjectId) -> list[Transcript]:
        """Get a student's verified transcripts asynchronously."""
        return await self.find_async(
            {"student_id": self._to_object_id(student_id), "is_verified": True},
            limit=0,
        )

    def get_verified_for_students(
        self, student_ids: Iterable[str | ObjectId]
    ) -> dict[str, list[Transcript]]:
        """Get verified transcripts for many students, grouped by student id."""
        ids = [self._to_object_id(i) for i in student_ids]
        if not ids:
            return {}
        transcripts = self.find(
            {"student_id": {"$in": ids}, "is_verified": True},
            limit=0,
        )
        return _group_by_student(transcripts)


class CertificateRepository(BaseRepository[Certificate]):
    """Repository for certificate records."""

    @property
    def collection_name(self) -> str:
        return Collections.CERTIFICATES

    @property
    def model_class(self) -> type[Certificate]:
        return Certificate

    def get_for_student(self, student_id: str | ObjectId) -> list[Certificate]:
        """Get every certificate a student has on file."""
        return self.find({"student_id": self._to_object_id(student_id)}, limit=0)

    async def get_for_student_async(self, student_id: str | ObjectId) -> list[Certificate]:
        """Get every certificate a student has on file asynchronously."""
        return await self.find_async({"student_id": self._to_object_id(student_id)}, limit=0)

    def get_for_students(
        self, student_ids: Iterable[str | ObjectId]
    ) -> dict[str, list[Certificate]]:
        """Get certificates for many students, grouped by student id."""
        ids = [self._to_object_id(i) for i in student_ids]
        if not ids:
            return {}
        certificates = self.find({"student_id": {"$in": ids}}, limit=0)
        return _group_by_student(certificates)
