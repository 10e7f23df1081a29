"""Applicant matching and ranking module."""

from .candidates import Candidate, CandidateResolver
from .matcher import Matcher, MatchResult
from .ranker import Ranker

__all__ = [
    "Candidate",
    "CandidateResolver",
    "Matcher",
    "MatchResult",
    "Ranker",
]
