"""Domain repository abstractions."""

from .candidate_profile_repository import ICandidateProfileRepository
from .job_repository import IJobRepository

__all__ = [
    "ICandidateProfileRepository",
    "IJobRepository",
]
