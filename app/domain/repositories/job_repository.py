"""Domain repository contracts for job postings (read side of the matcher)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from app.domain.entities.job_posting import JobPosting


class IJobRepository(ABC):
    """Read-only access to job postings needed by retrieval and padding."""

    @abstractmethod
    async def find_active_embedded(self) -> List[JobPosting]:
        """All active postings that carry a non-empty embedding."""
        raise NotImplementedError

    @abstractmethod
    async def count_active_embedded(self) -> int:
        """Number of active postings that carry a non-empty embedding."""
        raise NotImplementedError

    @abstractmethod
    async def find_recent_active(self, limit: int) -> List[JobPosting]:
        """Most recently created active postings, newest first."""
        raise NotImplementedError

    @abstractmethod
    async def search_active_by_terms(self, terms: List[str], limit: int) -> List[JobPosting]:
        """Active postings where any lowercase term occurs in title, description,
        category or a skill, in store order.

        Matching follows ``app.domain.services.lexical_matcher.job_matches_terms``.
        """
        raise NotImplementedError


__all__ = ["IJobRepository"]
