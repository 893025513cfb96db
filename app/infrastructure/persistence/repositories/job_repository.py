"""PostgreSQL implementation of IJobRepository using JobMapper."""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import exists, func, or_, select

from app.database.sqlmodel_engine import SQLModelDatabaseManager, get_sqlmodel_db_manager
from app.domain.entities.job_posting import JobPosting, JobStatus
from app.domain.repositories.job_repository import IJobRepository
from app.infrastructure.persistence.mappers.job_mapper import JobMapper
from app.infrastructure.persistence.models.job_table import JobTable


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class PostgresJobRepository(IJobRepository):
    """PostgreSQL adapter implementation of IJobRepository."""

    def __init__(self, db_manager: Optional[SQLModelDatabaseManager] = None):
        self._db_manager = db_manager

    def _get_db_manager(self) -> SQLModelDatabaseManager:
        if self._db_manager is None:
            self._db_manager = get_sqlmodel_db_manager()
        return self._db_manager

    @staticmethod
    def _active_embedded():
        return (
            JobTable.status == JobStatus.ACTIVE.value,
            JobTable.embedding.is_not(None),
        )

    async def find_active_embedded(self) -> List[JobPosting]:
        """All active jobs that carry an embedding, newest first."""
        statement = (
            select(JobTable)
            .where(*self._active_embedded())
            .order_by(JobTable.created_at.desc())
        )
        async with self._get_db_manager().get_session() as session:
            rows = (await session.scalars(statement)).all()
        return [JobMapper.to_domain(row) for row in rows]

    async def count_active_embedded(self) -> int:
        statement = select(func.count()).select_from(JobTable).where(*self._active_embedded())
        async with self._get_db_manager().get_session() as session:
            return int((await session.execute(statement)).scalar_one())

    async def find_recent_active(self, limit: int) -> List[JobPosting]:
        """Most recent active jobs, with or without an embedding."""
        if limit <= 0:
            return []
        statement = (
            select(JobTable)
            .where(JobTable.status == JobStatus.ACTIVE.value)
            .order_by(JobTable.created_at.desc())
            .limit(limit)
        )
        async with self._get_db_manager().get_session() as session:
            rows = (await session.scalars(statement)).all()
        return [JobMapper.to_domain(row) for row in rows]

    async def search_active_by_terms(self, terms: List[str], limit: int) -> List[JobPosting]:
        """Case-insensitive substring match of any term on title, description, category or a skill."""
        if not terms or limit <= 0:
            return []

        conditions = []
        for term in terms:
            pattern = _like_pattern(term)
            skill = func.unnest(JobTable.skills).column_valued("skill")
            conditions.extend([
                JobTable.title.ilike(pattern, escape="\\"),
                JobTable.description.ilike(pattern, escape="\\"),
                JobTable.category.ilike(pattern, escape="\\"),
                exists(select(skill).where(skill.ilike(pattern, escape="\\"))),
            ])

        statement = (
            select(JobTable)
            .where(JobTable.status == JobStatus.ACTIVE.value, or_(*conditions))
            .order_by(JobTable.created_at.desc())
            .limit(limit)
        )
        async with self._get_db_manager().get_session() as session:
            rows = (await session.scalars(statement)).all()
        return [JobMapper.to_domain(row) for row in rows]


__all__ = ["PostgresJobRepository"]
