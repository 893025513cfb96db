"""Domain repository contracts for candidate profiles."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from app.domain.entities.candidate_profile import CandidateProfile


class ICandidateProfileRepository(ABC):
    """Persistence for the one-per-user candidate profile."""

    @abstractmethod
    async def upsert(self, profile: CandidateProfile) -> CandidateProfile:
        """Atomically create or overwrite the profile keyed by user id.

        Raises PersistenceError when the write fails.
        """
        raise NotImplementedError

    @abstractmethod
    async def find_latest_by_user(self, user_id: UUID) -> Optional[CandidateProfile]:
        """Return the user's profile, or None when nothing was uploaded yet."""
        raise NotImplementedError


__all__ = ["ICandidateProfileRepository"]
