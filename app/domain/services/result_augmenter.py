"""
Result augmentation for match lists.

Covers the post-retrieval steps shared by every CV matching call:
- Deduplication by job id
- Padding short lists with recent postings
- Skill highlighting against the source text
- Lightweight skill tagging for stored profiles
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Set
from uuid import UUID

from app.core.system_constants import SKILL_VOCABULARY
from app.domain.entities.job_posting import JobPosting
from app.domain.entities.match import NO_SIMILARITY_SCORE, MatchType, RetrievalHit


class ResultAugmenter:
    """Stateless helpers applied to retrieval output before it is returned."""

    def __init__(self, skill_vocabulary: Sequence[str] = SKILL_VOCABULARY, skill_tag_limit: int = 30):
        self.skill_vocabulary = tuple(skill_vocabulary)
        self.skill_tag_limit = skill_tag_limit

    @staticmethod
    def dedupe(results: Iterable[RetrievalHit]) -> List[RetrievalHit]:
        """Keep the first occurrence of each job id."""
        seen: Set[UUID] = set()
        unique: List[RetrievalHit] = []
        for hit in results:
            if hit.job_id in seen:
                continue
            seen.add(hit.job_id)
            unique.append(hit)
        return unique

    @staticmethod
    def pad(
        results: List[RetrievalHit],
        min_results: int,
        limit: int,
        recent_jobs: Iterable[JobPosting],
    ) -> List[RetrievalHit]:
        """
        Top up a short result list with recent postings.

        Padding only happens below ``min_results``; it fills up to ``limit``
        and never repeats a job already present.
        """
        padded = ResultAugmenter.dedupe(results)[:limit]
        if len(padded) >= min_results:
            return padded

        seen = {hit.job_id for hit in padded}
        for job in recent_jobs:
            if len(padded) >= limit:
                break
            if job.id in seen:
                continue
            padded.append(RetrievalHit(job=job, score=NO_SIMILARITY_SCORE, match_type=MatchType.RECENT))
            seen.add(job.id)
        return padded

    @staticmethod
    def highlight(source_text: str, job_skills: Sequence[str]) -> List[str]:
        """Skills whose lowercase form occurs in the source text, original order kept."""
        if not job_skills:
            return []
        haystack = (source_text or "").lower()
        return [skill for skill in job_skills if str(skill).lower() in haystack]

    def extract_skill_tags(self, text: str) -> List[str]:
        """Vocabulary terms contained in the text, deduplicated and capped."""
        haystack = (text or "").lower()
        tags: List[str] = []
        for term in self.skill_vocabulary:
            if term in tags:
                continue
            if term.lower() in haystack:
                tags.append(term)
            if len(tags) >= self.skill_tag_limit:
                break
        return tags


__all__ = ["ResultAugmenter"]
