"""
SQLModel base classes shared by persistence tables.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime
from sqlalchemy.sql import func
from sqlmodel import Field, SQLModel


class BaseModel(SQLModel):
    """Base SQLModel with common configuration."""

    model_config = {
        "arbitrary_types_allowed": True,
        "populate_by_name": True,
    }


class TimestampedModel(BaseModel):
    """
    Base table with UUID primary key and timestamps.

    Timestamps are naive UTC; the database fills them with now() when a
    statement omits them. Columns are declared through Field options so each
    table gets its own Column objects.
    """

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        description="Unique identifier"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_type=DateTime,
        sa_column_kwargs={"server_default": func.now()},
        nullable=False,
        index=True,
        description="Record creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_type=DateTime,
        sa_column_kwargs={"server_default": func.now()},
        nullable=False,
        description="Record last update timestamp"
    )


__all__ = ["BaseModel", "TimestampedModel"]
