"""
Match API Schemas

Request/response models for semantic job search and CV matching:
- Ranked job rows with raw and normalised scores
- Skill highlighting per row
- Match envelope with padding metadata
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.domain.entities.match import MatchOutcome, MatchResult


class SearchMode(str, Enum):
    """Text search execution modes"""
    SEMANTIC = "semantic"        # Embedding retrieval with keyword fallback
    KEYWORD = "keyword"          # Keyword matching only


class SalaryRangeResponse(BaseModel):
    """Advertised salary bounds"""
    min: Optional[float] = Field(None, description="Lower bound")
    max: Optional[float] = Field(None, description="Upper bound")
    currency: Optional[str] = Field(None, description="ISO currency code")


class MatchResultResponse(BaseModel):
    """One ranked job posting"""
    model_config = ConfigDict(use_enum_values=True)

    id: UUID = Field(..., description="Job identifier")
    title: str = Field(..., description="Job title")
    description: str = Field(default="", description="Job description")
    skills: List[str] = Field(default_factory=list, description="Required skills")
    location: Optional[str] = Field(None, description="Job location")
    category: Optional[str] = Field(None, description="Job category")
    salary: SalaryRangeResponse = Field(default_factory=SalaryRangeResponse)
    status: str = Field(..., description="Job status")
    company_name: Optional[str] = Field(None, description="Hiring company")
    job_type: Optional[str] = Field(None, description="Contract type")
    experience_level: Optional[str] = Field(None, description="Required experience level")
    created_at: datetime = Field(..., description="Posting creation time")

    score: float = Field(..., description="Raw similarity score (0 when not computed)")
    normalized_score: int = Field(..., ge=0, le=100, description="Similarity as a percentage")
    matching_skills: List[str] = Field(default_factory=list, description="Job skills found in the query or CV")
    match_type: str = Field(..., description="semantic, recent or keyword")

    @classmethod
    def from_domain(cls, result: MatchResult) -> "MatchResultResponse":
        return cls(
            id=result.id,
            title=result.title,
            description=result.description,
            skills=list(result.skills),
            location=result.location,
            category=result.category,
            salary=SalaryRangeResponse(
                min=result.salary.min,
                max=result.salary.max,
                currency=result.salary.currency,
            ),
            status=result.status.value,
            company_name=result.company_name,
            job_type=result.job_type,
            experience_level=result.experience_level,
            created_at=result.created_at,
            score=result.score,
            normalized_score=result.normalized_score,
            matching_skills=list(result.matching_skills),
            match_type=result.match_type.value,
        )


class MatchListResponse(BaseModel):
    """CV match envelope"""
    matches: List[MatchResultResponse] = Field(default_factory=list)
    total: int = Field(default=0, ge=0, description="Number of returned matches")
    semantic_count: int = Field(default=0, ge=0, description="Matches produced by vector retrieval")
    fallback: bool = Field(default=False, description="Whether recent listings were added")
    message: str = Field(default="", description="Human-readable status")

    @classmethod
    def from_domain(cls, outcome: MatchOutcome) -> "MatchListResponse":
        return cls(
            matches=[MatchResultResponse.from_domain(match) for match in outcome.matches],
            total=outcome.total,
            semantic_count=outcome.semantic_count,
            fallback=outcome.fallback,
            message=outcome.message,
        )


__all__ = [
    "SearchMode",
    "SalaryRangeResponse",
    "MatchResultResponse",
    "MatchListResponse",
]
