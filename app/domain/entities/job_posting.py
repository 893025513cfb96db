"""Pure domain representation of job postings consumed by the matcher."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional
from uuid import UUID


class JobStatus(str, Enum):
    """Lifecycle status for a job posting."""

    DRAFT = "draft"
    ACTIVE = "active"
    CLOSED = "closed"
    ARCHIVED = "archived"


@dataclass
class SalaryRange:
    """Advertised salary bounds."""

    min: Optional[float] = None
    max: Optional[float] = None
    currency: Optional[str] = None


@dataclass
class JobPosting:
    """
    Job posting as seen by the matching pipeline.

    Embeddings are written by the indexing process; the matcher only reads them.
    """

    id: UUID
    title: str
    description: str = ""
    skills: List[str] = field(default_factory=list)
    location: Optional[str] = None
    category: Optional[str] = None
    salary: SalaryRange = field(default_factory=SalaryRange)
    status: JobStatus = JobStatus.DRAFT
    embedding: Optional[List[float]] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    company_name: Optional[str] = None
    job_type: Optional[str] = None
    experience_level: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status == JobStatus.ACTIVE

    @property
    def has_embedding(self) -> bool:
        return bool(self.embedding)

    def is_retrievable(self) -> bool:
        """Only active postings carrying an embedding take part in vector retrieval."""
        return self.is_active and self.has_embedding

    def searchable_fields(self) -> List[str]:
        """Text fields scanned by keyword matching."""
        values = [self.title, self.description, self.category or ""]
        values.extend(self.skills)
        return [value for value in values if value]


__all__ = ["JobStatus", "SalaryRange", "JobPosting"]
