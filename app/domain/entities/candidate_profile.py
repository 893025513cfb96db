"""Candidate profile aggregate: the persisted query side of CV matching."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from uuid import UUID

MAX_FILENAME_LENGTH = 255
MAX_SKILL_LENGTH = 100


@dataclass
class CandidateProfile:
    """
    One logical profile per user.

    Each upload replaces text, embedding and skills together; no history is kept.
    """

    user_id: UUID
    extracted_text: str
    embedding: List[float]
    extracted_skills: List[str] = field(default_factory=list)
    original_filename: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def from_upload(
        cls,
        user_id: UUID,
        text: str,
        embedding: List[float],
        skills: List[str],
        *,
        original_filename: Optional[str] = None,
        max_text_length: int = 30000,
    ) -> "CandidateProfile":
        """Build a profile from a freshly processed CV, enforcing storage bounds."""
        if not text or not text.strip():
            raise ValueError("Profile text cannot be empty")
        if not embedding:
            raise ValueError("Profile embedding cannot be empty")

        filename = original_filename.strip()[:MAX_FILENAME_LENGTH] if original_filename else None
        now = datetime.utcnow()
        return cls(
            user_id=user_id,
            extracted_text=text.strip()[:max_text_length],
            embedding=list(embedding),
            extracted_skills=[skill.strip()[:MAX_SKILL_LENGTH] for skill in skills if skill.strip()],
            original_filename=filename or None,
            created_at=now,
            updated_at=now,
        )

    @property
    def has_embedding(self) -> bool:
        return bool(self.embedding)


__all__ = ["CandidateProfile"]
