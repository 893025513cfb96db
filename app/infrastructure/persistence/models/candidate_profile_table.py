"""
SQLModel table for candidate profiles (one row per user).
"""

from typing import List, Optional
from uuid import UUID

from pgvector.sqlalchemy import Vector
from sqlalchemy import Column, String, Text
from sqlalchemy.dialects.postgresql import ARRAY, UUID as PostgreSQLUUID
from sqlmodel import Field

from app.core.system_constants import DEFAULT_EMBEDDING_DIMENSION
from app.infrastructure.persistence.models.base import TimestampedModel


class CandidateProfileTable(TimestampedModel, table=True):
    """Latest processed CV of a user."""
    __tablename__ = "candidate_profiles"

    user_id: UUID = Field(
        sa_column=Column(PostgreSQLUUID(as_uuid=True), nullable=False, unique=True, index=True),
        description="Owning user, provided by the gateway"
    )
    original_filename: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
    )
    extracted_text: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Cleaned CV text"
    )
    embedding: List[float] = Field(
        sa_column=Column(Vector(DEFAULT_EMBEDDING_DIMENSION), nullable=False),
        description="Embedding of the extracted text"
    )
    extracted_skills: List[str] = Field(
        default_factory=list,
        sa_column=Column(ARRAY(String(100)), nullable=False, default=list),
        description="Vocabulary skills found in the text"
    )


__all__ = ["CandidateProfileTable"]
