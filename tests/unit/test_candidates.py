"""
Tests for careerhub.core.matching.candidates: CandidateResolver.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

from bson import ObjectId

from careerhub.core.exceptions import UnavailableError
from careerhub.core.matching import CandidateResolver
from careerhub.data.models import Certificate, User
from careerhub.utils.constants import UserType


class TestResolve:
    def test_loads_records(self, resolver, make_student, add_transcript, add_certificates):
        student = make_student()
        add_transcript(student.id)
        add_transcript(student.id, is_verified=False)
        add_certificates(student.id, 2)

        candidate = resolver.resolve(student.id_str)
        assert candidate.id == student.id_str
        assert candidate.has_verified_transcript is True
        assert len(candidate.transcripts) == 1
        assert candidate.certificate_count == 2

    def test_missing_or_non_student(self, resolver, make_account):
        assert resolver.resolve(ObjectId()) is None
        assert resolver.resolve(make_account(UserType.COMPANY, "Acme").id) is None

    def test_subrecord_failure_is_zero_signal(self, resolver, certificate_repo, make_student, add_transcript, monkeypatch):
        student = make_student()
        add_transcript(student.id)
        monkeypatch.setattr(certificate_repo, "get_for_student", MagicMock(side_effect=UnavailableError("find")))

        candidate = resolver.resolve(student.id)
        assert candidate.has_verified_transcript is True
        assert candidate.certificates == []


class TestResolveMany:
    def test_preserves_order_and_groups(self, resolver, make_student, add_certificates):
        a = make_student(display_name="A")
        b = make_student(display_name="B")
        add_certificates(b.id, 3)

        candidates = resolver.resolve_many([b, a])
        assert [c.display_name for c in candidates] == ["B", "A"]
        assert [c.certificate_count for c in candidates] == [3, 0]

    def test_empty_pool(self, resolver):
        assert resolver.resolve_many([]) == []


class TestResolveAsync:
    def test_loads_records(self):
        profile = User(_id=ObjectId(), display_name="Async")
        transcripts = MagicMock()
        transcripts.get_verified_for_student_async = AsyncMock(return_value=[])
        certificates = MagicMock()
        certificates.get_for_student_async = AsyncMock(return_value=[])

        resolver = CandidateResolver(MagicMock(), transcripts, certificates)
        candidate = asyncio.run(resolver.resolve_async(profile))
        assert candidate.profile is profile
        transcripts.get_verified_for_student_async.assert_awaited_once_with(profile.id)

    def test_subrecord_failure_is_zero_signal(self):
        profile = User(_id=ObjectId())
        transcripts = MagicMock()
        transcripts.get_verified_for_student_async = AsyncMock(side_effect=UnavailableError("find"))
        certificates = MagicMock()
        certificates.get_for_student_async = AsyncMock(return_value=[Certificate(student_id=profile.id)])

        resolver = CandidateResolver(MagicMock(), transcripts, certificates)
        candidate = asyncio.run(resolver.resolve_async(profile))
        assert candidate.has_verified_transcript is False
        assert candidate.certificate_count == 1
