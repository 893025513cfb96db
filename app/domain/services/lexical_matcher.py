"""Keyword matching used when semantic search cannot run."""

from __future__ import annotations

from typing import List

from app.domain.entities.job_posting import JobPosting

MIN_TOKEN_LENGTH = 2


def build_search_terms(query: str) -> List[str]:
    """The full query plus each whitespace token of at least two characters, lowercased."""
    normalized = (query or "").strip().lower()
    if not normalized:
        return []

    terms = [normalized]
    for token in normalized.split():
        if len(token) >= MIN_TOKEN_LENGTH and token not in terms:
            terms.append(token)
    return terms


def job_matches_terms(job: JobPosting, terms: List[str]) -> bool:
    """
    True when any term occurs in the title, description, category or a skill.

    Reference rule for ``IJobRepository.search_active_by_terms``; the Postgres
    adapter expresses it as ILIKE clauses and in-memory stores call it directly.
    """
    if not terms:
        return False
    fields = [value.lower() for value in job.searchable_fields()]
    return any(term in value for term in terms for value in fields)


__all__ = ["MIN_TOKEN_LENGTH", "build_search_terms", "job_matches_terms"]
