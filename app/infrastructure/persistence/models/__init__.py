"""
Infrastructure persistence models module.

This module contains database table definitions following hexagonal architecture,
separated from domain models and business logic.
"""

from app.infrastructure.persistence.models.candidate_profile_table import (
    CandidateProfileTable,
)
from app.infrastructure.persistence.models.job_table import (
    JobTable,
)

__all__ = [
    "CandidateProfileTable",
    "JobTable",
]
