"""
Candidate-job matcher.

Scores a student against a job posting from four independent signals,
each worth a fixed maximum:

- academic standing (a verified transcript on file)
- certificates (a fixed number of points each, capped)
- qualification match (the job declares a qualifications requirement)
- work experience (the profile carries an experience indicator)

The points are summed and clamped to [0, 100]; a candidate is qualified
at or above the qualification threshold. Matching only reads.
"""

from dataclasses import dataclass, field
from typing import Optional

from bson import ObjectId

from careerhub.core.exceptions import NotFoundError
from careerhub.data.models import JobPosting
from careerhub.data.repositories import JobRepository
from careerhub.utils.constants import (
    MATCH_DETAIL_ACADEMIC,
    MATCH_DETAIL_CERTIFICATES,
    MATCH_DETAIL_EXPERIENCE,
    MATCH_DETAIL_QUALIFICATIONS,
    MAX_SCORE,
    MIN_SCORE,
    POINTS_PER_CERTIFICATE,
    QUALIFICATION_THRESHOLD,
    SIGNAL_WEIGHTS,
)
from careerhub.utils.logger import get_logger

from .candidates import Candidate, CandidateResolver

logger = get_logger(__name__)


@dataclass
class MatchResult:
    """Result of matching one candidate to one job. Never persisted."""

    candidate_id: str
    score: int = 0
    qualified: bool = False
    match_details: list[str] = field(default_factory=list)

    # Contact info shown to the company reviewing applicants
    candidate_name: str = ""
    email: Optional[str] = None
    phone: Optional[str] = None


class Matcher:
    """
    Scores candidates against job postings.

    The weights default to SIGNAL_WEIGHTS. Resolving ids to records
    (``evaluate_by_id``) needs a candidate resolver and a job repository;
    ``evaluate`` works on already-resolved records.
    """

    def __init__(
        self,
        resolver: Optional[CandidateResolver] = None,
        jobs: Optional[JobRepository] = None,
        weights: Optional[dict[str, int]] = None,
    ):
        self._resolver = resolver
        self._jobs = jobs
        self.weights = weights or SIGNAL_WEIGHTS

    def evaluate(
        self,
        candidate: Optional[Candidate],
        job: Optional[JobPosting],
    ) -> MatchResult:
        """
        Match a resolved candidate against a resolved job posting.

        Args:
            candidate: Student profile with its academic records
            job: The job posting

        Returns:
            MatchResult with the bounded score and the reasons behind it

        Raises:
            NotFoundError: If either record is missing
        """
        if candidate is None:
            raise NotFoundError("candidate", None)
        if job is None:
            raise NotFoundError("job", None)

        score = 0
        details: list[str] = []

        if candidate.has_verified_transcript:
            score += self.weights["academic"]
            details.append(MATCH_DETAIL_ACADEMIC)

        certificate_count = candidate.certificate_count
        if certificate_count > 0:
            score += min(self.weights["certificates"], POINTS_PER_CERTIFICATE * certificate_count)
            details.append(MATCH_DETAIL_CERTIFICATES.format(count=certificate_count))

        # Presence check on the job side only; candidate skills are not compared
        if job.qualifications:
            score += self.weights["qualifications"]
            details.append(MATCH_DETAIL_QUALIFICATIONS)

        if candidate.has_work_experience:
            score += self.weights["experience"]
            details.append(MATCH_DETAIL_EXPERIENCE)

        score = max(MIN_SCORE, min(MAX_SCORE, int(round(score))))

        return MatchResult(
            candidate_id=candidate.id,
            score=score,
            qualified=score >= QUALIFICATION_THRESHOLD,
            match_details=details,
            candidate_name=candidate.display_name,
            email=candidate.profile.email,
            phone=candidate.profile.phone,
        )

    def evaluate_by_id(
        self,
        student_id: str | ObjectId,
        job_id: str | ObjectId,
    ) -> MatchResult:
        """
        Resolve a student and a job, then match them.

        Raises:
            NotFoundError: If the student or the job does not exist
        """
        if self._resolver is None or self._jobs is None:
            raise RuntimeError("Matcher was built without a candidate resolver and job repository")

        job = self._jobs.get_by_id(job_id)
        if job is None:
            raise NotFoundError("job", job_id)

        candidate = self._resolver.resolve(student_id)
        if candidate is None:
            raise NotFoundError("student", student_id)

        result = self.evaluate(candidate, job)
        logger.debug(f"Scored student {student_id} for job {job_id}: {result.score}")
        return result
