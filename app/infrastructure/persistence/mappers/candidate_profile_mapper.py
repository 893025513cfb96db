"""
Mapper between CandidateProfile domain entities and CandidateProfileTable persistence models.
"""

from __future__ import annotations

from typing import Any, Dict

from app.domain.entities.candidate_profile import CandidateProfile
from app.infrastructure.persistence.mappers.job_mapper import vector_to_list
from app.infrastructure.persistence.models.candidate_profile_table import CandidateProfileTable


class CandidateProfileMapper:
    """Maps between CandidateProfile domain entities and CandidateProfileTable rows."""

    @staticmethod
    def to_domain(table: CandidateProfileTable) -> CandidateProfile:
        """Convert CandidateProfileTable (persistence) to CandidateProfile (domain entity)."""
        return CandidateProfile(
            user_id=table.user_id,
            extracted_text=table.extracted_text,
            embedding=vector_to_list(table.embedding) or [],
            extracted_skills=list(table.extracted_skills or []),
            original_filename=table.original_filename,
            created_at=table.created_at,
            updated_at=table.updated_at,
        )

    @staticmethod
    def to_row(entity: CandidateProfile) -> Dict[str, Any]:
        """Column values written by an upsert; ``id`` and ``created_at`` are left to the insert."""
        return {
            "user_id": entity.user_id,
            "original_filename": entity.original_filename,
            "extracted_text": entity.extracted_text,
            "embedding": list(entity.embedding),
            "extracted_skills": list(entity.extracted_skills),
            "created_at": entity.created_at,
            "updated_at": entity.updated_at,
        }
