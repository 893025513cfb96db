"""Match results produced per request; never persisted."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional
from uuid import UUID

from app.domain.entities.job_posting import JobPosting, JobStatus, SalaryRange

# Sentinel score for rows where no similarity was computed
NO_SIMILARITY_SCORE = 0.0


class MatchType(str, Enum):
    """Which pipeline stage produced a result row."""

    SEMANTIC = "semantic"
    RECENT = "recent"
    KEYWORD = "keyword"


@dataclass
class RetrievalHit:
    """A job paired with its raw retrieval score."""

    job: JobPosting
    score: float = NO_SIMILARITY_SCORE
    match_type: MatchType = MatchType.SEMANTIC

    @property
    def job_id(self) -> UUID:
        return self.job.id


@dataclass
class MatchResult:
    """Job posting fields (minus the embedding) plus scoring and highlighting."""

    id: UUID
    title: str
    description: str
    skills: List[str]
    location: Optional[str]
    category: Optional[str]
    salary: SalaryRange
    status: JobStatus
    created_at: datetime
    score: float
    normalized_score: int
    matching_skills: List[str] = field(default_factory=list)
    match_type: MatchType = MatchType.SEMANTIC
    company_name: Optional[str] = None
    job_type: Optional[str] = None
    experience_level: Optional[str] = None

    @classmethod
    def from_hit(cls, hit: RetrievalHit, normalized_score: int, matching_skills: List[str]) -> "MatchResult":
        job = hit.job
        return cls(
            id=job.id,
            title=job.title,
            description=job.description,
            skills=list(job.skills),
            location=job.location,
            category=job.category,
            salary=job.salary,
            status=job.status,
            created_at=job.created_at,
            score=hit.score,
            normalized_score=normalized_score,
            matching_skills=matching_skills,
            match_type=hit.match_type,
            company_name=job.company_name,
            job_type=job.job_type,
            experience_level=job.experience_level,
        )


@dataclass
class MatchOutcome:
    """Result envelope for profile-based matching."""

    matches: List[MatchResult] = field(default_factory=list)
    semantic_count: int = 0
    fallback: bool = False
    message: str = ""

    @property
    def total(self) -> int:
        return len(self.matches)


__all__ = [
    "NO_SIMILARITY_SCORE",
    "MatchType",
    "RetrievalHit",
    "MatchResult",
    "MatchOutcome",
]
