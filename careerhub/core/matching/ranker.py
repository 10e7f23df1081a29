"""
Qualified applicant ranking.

Every student is a candidate for every job. The ranker scores the whole
pool against one job, keeps the qualified candidates and sorts them by
score, highest first. Results are recomputed on every call.

Failure handling is per item: a candidate that cannot be evaluated is
logged and left out, while a missing job fails the whole ranking.
"""

import asyncio
from typing import Optional

from bson import ObjectId

from careerhub.core.exceptions import ForbiddenError, NotFoundError
from careerhub.data.models import JobPosting
from careerhub.data.repositories import JobRepository, UserRepository
from careerhub.utils.constants import AuditAction
from careerhub.utils.logger import audit_log, get_logger

from .candidates import CandidateResolver
from .matcher import Matcher, MatchResult

logger = get_logger(__name__)


class Ranker:
    """Ranks the student pool against a job posting."""

    def __init__(
        self,
        matcher: Matcher,
        resolver: CandidateResolver,
        users: UserRepository,
        jobs: JobRepository,
        max_concurrency: int = 10,
    ):
        """
        Initialize the ranker.

        Args:
            matcher: Scores a single candidate
            resolver: Loads candidates' academic records
            users: Source of the student pool
            jobs: Source of job postings
            max_concurrency: Upper bound on concurrent evaluations in the async path
        """
        self._matcher = matcher
        self._resolver = resolver
        self._users = users
        self._jobs = jobs
        self._max_concurrency = max_concurrency

    @staticmethod
    def sort_results(results: list[MatchResult]) -> list[MatchResult]:
        """
        Sort by score, highest first.

        The sort is stable, so ties keep the pool's enumeration order
        (ascending student id).
        """
        return sorted(results, key=lambda r: r.score, reverse=True)

    def _get_job(self, job_id: str | ObjectId) -> JobPosting:
        job = self._jobs.get_by_id(job_id)
        if job is None:
            raise NotFoundError("job", job_id)
        return job

    def rank_qualified(self, job_id: str | ObjectId) -> list[MatchResult]:
        """
        Rank qualified candidates for a job.

        Args:
            job_id: The job posting to rank for

        Returns:
            Qualified match results, most qualified first

        Raises:
            NotFoundError: If the job does not exist
        """
        return self._rank(self._get_job(job_id))

    def _rank(self, job: JobPosting) -> list[MatchResult]:
        job_id = job.id_str
        profiles = self._users.get_students()
        candidates = self._resolver.resolve_many(profiles)

        qualified: list[MatchResult] = []
        for candidate in candidates:
            try:
                result = self._matcher.evaluate(candidate, job)
            except Exception as e:
                logger.warning(f"Skipping candidate {candidate.id} for job {job_id}: {e}")
                continue
            if result.qualified:
                qualified.append(result)

        ranked = self.sort_results(qualified)
        self._audit(job_id, len(candidates), ranked)
        return ranked

    def rank_for_company(
        self,
        job_id: str | ObjectId,
        company_id: str | ObjectId,
    ) -> list[MatchResult]:
        """
        Rank qualified candidates for a job owned by the requesting company.

        Raises:
            NotFoundError: If the job does not exist
            ForbiddenError: If the job belongs to another company
        """
        job = self._get_job(job_id)
        if str(job.company_id) != str(company_id):
            raise ForbiddenError(
                "Job belongs to another company",
                {"job_id": str(job_id), "company_id": str(company_id)},
            )
        return self._rank(job)

    async def rank_qualified_async(
        self,
        job_id: str | ObjectId,
        timeout: Optional[float] = None,
    ) -> list[MatchResult]:
        """
        Rank qualified candidates, evaluating the pool concurrently.

        Each candidate's records are loaded and scored as its own task; a
        failed record read scores as zero signal, as in ``rank_qualified``. If
        ``timeout`` expires first, unfinished evaluations are cancelled and
        the ranking is built from the ones that completed.

        Raises:
            NotFoundError: If the job does not exist
        """
        job = await self._jobs.get_by_id_async(job_id)
        if job is None:
            raise NotFoundError("job", job_id)

        profiles = await self._users.get_students_async()
        if not profiles:
            return []

        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def evaluate(profile) -> MatchResult:
            async with semaphore:
                candidate = await self._resolver.resolve_async(profile)
                return self._matcher.evaluate(candidate, job)

        tasks = [asyncio.ensure_future(evaluate(profile)) for profile in profiles]
        done, pending = await asyncio.wait(tasks, timeout=timeout)

        if pending:
            logger.warning(
                f"Ranking for job {job_id} timed out; "
                f"{len(pending)} of {len(tasks)} candidates not evaluated"
            )
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        qualified: list[MatchResult] = []
        for profile, task in zip(profiles, tasks):
            if task not in done:
                continue
            error = task.exception()
            if error is not None:
                logger.warning(f"Skipping candidate {profile.id} for job {job_id}: {error}")
                continue
            result = task.result()
            if result.qualified:
                qualified.append(result)

        ranked = self.sort_results(qualified)
        self._audit(job_id, len(profiles), ranked)
        return ranked

    def _audit(self, job_id: str | ObjectId, pool_size: int, ranked: list[MatchResult]) -> None:
        audit_log(
            AuditAction.APPLICANTS_RANKED,
            {
                "job_id": str(job_id),
                "pool_size": pool_size,
                "qualified": len(ranked),
                "top_score": ranked[0].score if ranked else None,
            },
        )
