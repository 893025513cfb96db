"""Domain entities exposed for application layer use."""

from .candidate_profile import CandidateProfile
from .job_posting import JobPosting, JobStatus, SalaryRange
from .match import (
    NO_SIMILARITY_SCORE,
    MatchOutcome,
    MatchResult,
    MatchType,
    RetrievalHit,
)

__all__ = [
    # Jobs
    "JobPosting",
    "JobStatus",
    "SalaryRange",
    # Profiles
    "CandidateProfile",
    # Matches
    "NO_SIMILARITY_SCORE",
    "MatchOutcome",
    "MatchResult",
    "MatchType",
    "RetrievalHit",
]
