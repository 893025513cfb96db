"""
SQLModel table for job postings.

The ``embedding`` column is written by the indexing process; the matcher
only reads it, through the HNSW cosine index or a full scan.
"""

from typing import List, Optional

from pgvector.sqlalchemy import Vector
from sqlalchemy import Column, Float, Index, String, Text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlmodel import Field

from app.core.system_constants import DEFAULT_EMBEDDING_DIMENSION, JOB_EMBEDDING_INDEX_NAME
from app.infrastructure.persistence.models.base import TimestampedModel


class JobTable(TimestampedModel, table=True):
    """Job posting row, including its optional embedding."""
    __tablename__ = "jobs"

    title: str = Field(
        sa_column=Column(String(300), nullable=False),
        description="Job title"
    )
    description: str = Field(
        default="",
        sa_column=Column(Text, nullable=False, default=""),
        description="Job description"
    )
    skills: List[str] = Field(
        default_factory=list,
        sa_column=Column(ARRAY(String), nullable=False, default=list),
        description="Required skills in display order"
    )
    location: Optional[str] = Field(
        default=None,
        sa_column=Column(String(200), nullable=True),
    )
    category: Optional[str] = Field(
        default=None,
        sa_column=Column(String(100), nullable=True, index=True),
    )
    company_name: Optional[str] = Field(
        default=None,
        sa_column=Column(String(200), nullable=True),
    )
    job_type: Optional[str] = Field(
        default=None,
        sa_column=Column(String(50), nullable=True),
    )
    experience_level: Optional[str] = Field(
        default=None,
        sa_column=Column(String(50), nullable=True),
    )

    salary_min: Optional[float] = Field(default=None, sa_column=Column(Float, nullable=True))
    salary_max: Optional[float] = Field(default=None, sa_column=Column(Float, nullable=True))
    salary_currency: Optional[str] = Field(default=None, sa_column=Column(String(10), nullable=True))

    status: str = Field(
        default="draft",
        sa_column=Column(String(20), nullable=False, default="draft"),
        description="draft, active, closed or archived"
    )

    embedding: Optional[List[float]] = Field(
        default=None,
        sa_column=Column(Vector(DEFAULT_EMBEDDING_DIMENSION), nullable=True),
        description="all-MiniLM-L6-v2 embedding of the posting"
    )

    __table_args__ = (
        Index("ix_jobs_status_created_at", "status", "created_at"),
        Index(
            JOB_EMBEDDING_INDEX_NAME,
            "embedding",
            postgresql_using="hnsw",
            postgresql_with={"m": 16, "ef_construction": 64},
            postgresql_ops={"embedding": "vector_cosine_ops"},
        ),
    )


__all__ = ["JobTable"]
