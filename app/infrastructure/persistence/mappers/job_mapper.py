"""
Mapper between JobPosting domain entities and JobTable persistence models.
"""

from __future__ import annotations

from typing import Any, List, Optional

from app.domain.entities.job_posting import JobPosting, JobStatus, SalaryRange
from app.infrastructure.persistence.models.job_table import JobTable


def vector_to_list(value: Any) -> Optional[List[float]]:
    """pgvector returns numpy arrays; the domain works with plain float lists."""
    if value is None:
        return None
    return [float(component) for component in value]


class JobMapper:
    """Maps between JobPosting domain entities and JobTable persistence models."""

    @staticmethod
    def to_domain(table: JobTable) -> JobPosting:
        """Convert JobTable (persistence) to JobPosting (domain entity)."""
        try:
            status = JobStatus(table.status)
        except ValueError:
            status = JobStatus.DRAFT

        return JobPosting(
            id=table.id,
            title=table.title,
            description=table.description or "",
            skills=list(table.skills or []),
            location=table.location,
            category=table.category,
            salary=SalaryRange(
                min=table.salary_min,
                max=table.salary_max,
                currency=table.salary_currency,
            ),
            status=status,
            embedding=vector_to_list(table.embedding),
            created_at=table.created_at,
            company_name=table.company_name,
            job_type=table.job_type,
            experience_level=table.experience_level,
        )

    @staticmethod
    def to_table(entity: JobPosting) -> JobTable:
        """Convert JobPosting (domain entity) to JobTable (persistence)."""
        return JobTable(
            id=entity.id,
            title=entity.title,
            description=entity.description,
            skills=list(entity.skills),
            location=entity.location,
            category=entity.category,
            company_name=entity.company_name,
            job_type=entity.job_type,
            experience_level=entity.experience_level,
            salary_min=entity.salary.min,
            salary_max=entity.salary.max,
            salary_currency=entity.salary.currency,
            status=entity.status.value,
            embedding=list(entity.embedding) if entity.embedding else None,
            created_at=entity.created_at,
        )
