"""PostgreSQL implementation of ICandidateProfileRepository using CandidateProfileMapper."""

from __future__ import annotations

from typing import Optional
from uuid import UUID, uuid4

import structlog
from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert

from app.database.sqlmodel_engine import SQLModelDatabaseManager, get_sqlmodel_db_manager
from app.domain.entities.candidate_profile import CandidateProfile
from app.domain.exceptions import PersistenceError
from app.domain.repositories.candidate_profile_repository import ICandidateProfileRepository
from app.infrastructure.persistence.mappers.candidate_profile_mapper import CandidateProfileMapper
from app.infrastructure.persistence.models.candidate_profile_table import CandidateProfileTable

logger = structlog.get_logger(__name__)

# Columns replaced on every upload; created_at is kept from the first insert
_UPSERT_COLUMNS = (
    "original_filename",
    "extracted_text",
    "embedding",
    "extracted_skills",
    "updated_at",
)


class PostgresCandidateProfileRepository(ICandidateProfileRepository):
    """PostgreSQL adapter implementation of ICandidateProfileRepository."""

    def __init__(self, db_manager: Optional[SQLModelDatabaseManager] = None):
        self._db_manager = db_manager

    def _get_db_manager(self) -> SQLModelDatabaseManager:
        if self._db_manager is None:
            self._db_manager = get_sqlmodel_db_manager()
        return self._db_manager

    async def upsert(self, profile: CandidateProfile) -> CandidateProfile:
        """Single-statement INSERT ... ON CONFLICT (user_id) DO UPDATE."""
        values = CandidateProfileMapper.to_row(profile)
        statement = pg_insert(CandidateProfileTable).values(id=uuid4(), **values)
        statement = statement.on_conflict_do_update(
            index_elements=["user_id"],
            set_={column: statement.excluded[column] for column in _UPSERT_COLUMNS},
        ).returning(CandidateProfileTable)

        try:
            async with self._get_db_manager().get_session() as session:
                row = (await session.scalars(statement)).one()
                saved = CandidateProfileMapper.to_domain(row)
        except Exception as e:
            logger.error("Failed to upsert candidate profile", user_id=str(profile.user_id), error=str(e))
            raise PersistenceError(f"Failed to save candidate profile: {str(e)}") from e

        return saved

    async def find_latest_by_user(self, user_id: UUID) -> Optional[CandidateProfile]:
        statement = (
            select(CandidateProfileTable)
            .where(CandidateProfileTable.user_id == user_id)
            .order_by(CandidateProfileTable.updated_at.desc())
            .limit(1)
        )
        try:
            async with self._get_db_manager().get_session() as session:
                row = (await session.scalars(statement)).first()
        except Exception as e:
            raise PersistenceError(f"Failed to load candidate profile: {str(e)}") from e

        return CandidateProfileMapper.to_domain(row) if row else None


__all__ = ["PostgresCandidateProfileRepository"]
