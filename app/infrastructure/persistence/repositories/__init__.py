"""Repository implementations using PostgreSQL and domain mappers."""

from .candidate_profile_repository import PostgresCandidateProfileRepository
from .job_repository import PostgresJobRepository

__all__ = [
    "PostgresCandidateProfileRepository",
    "PostgresJobRepository",
]
