"""Repository provider utilities."""

from __future__ import annotations

import asyncio

from app.database.sqlmodel_engine import get_sqlmodel_db_manager
from app.domain.repositories.candidate_profile_repository import ICandidateProfileRepository
from app.domain.repositories.job_repository import IJobRepository
from app.infrastructure.persistence.repositories import (
    PostgresCandidateProfileRepository,
    PostgresJobRepository,
)

_job_repository: IJobRepository | None = None
_candidate_profile_repository: ICandidateProfileRepository | None = None

_job_lock = asyncio.Lock()
_candidate_profile_lock = asyncio.Lock()


async def get_job_repository() -> IJobRepository:
    """Return the job posting repository."""
    global _job_repository

    if _job_repository is not None:
        return _job_repository

    async with _job_lock:
        if _job_repository is not None:
            return _job_repository

        _job_repository = PostgresJobRepository(get_sqlmodel_db_manager())
        return _job_repository


async def get_candidate_profile_repository() -> ICandidateProfileRepository:
    """Return the candidate profile repository."""
    global _candidate_profile_repository

    if _candidate_profile_repository is not None:
        return _candidate_profile_repository

    async with _candidate_profile_lock:
        if _candidate_profile_repository is not None:
            return _candidate_profile_repository

        _candidate_profile_repository = PostgresCandidateProfileRepository(get_sqlmodel_db_manager())
        return _candidate_profile_repository


async def reset_repositories() -> None:
    """Reset cached repositories (useful for tests)."""
    global _job_repository, _candidate_profile_repository
    async with _job_lock:
        _job_repository = None
    async with _candidate_profile_lock:
        _candidate_profile_repository = None


__all__ = [
    "get_job_repository",
    "get_candidate_profile_repository",
    "reset_repositories",
]
