"""Tests for JobMapper and CandidateProfileMapper conversions."""

from datetime import datetime
from uuid import uuid4

import numpy as np
import pytest

from app.domain.entities.candidate_profile import CandidateProfile
from app.domain.entities.job_posting import JobPosting, JobStatus, SalaryRange
from app.infrastructure.persistence.mappers.candidate_profile_mapper import CandidateProfileMapper
from app.infrastructure.persistence.mappers.job_mapper import JobMapper, vector_to_list
from app.infrastructure.persistence.models.candidate_profile_table import CandidateProfileTable
from app.infrastructure.persistence.models.job_table import JobTable


def _table(**overrides) -> JobTable:
    values = {
        "id": uuid4(),
        "title": "Bare",
        "status": "active",
        "created_at": datetime(2026, 1, 1),
        "updated_at": datetime(2026, 1, 1),
    }
    values.update(overrides)
    return JobTable(**values)


@pytest.fixture
def job_posting() -> JobPosting:
    return JobPosting(
        id=uuid4(),
        title="Data Engineer",
        description="Pipelines",
        skills=["Spark", "SQL"],
        location="Remote",
        category="Engineering",
        salary=SalaryRange(min=50000, max=70000, currency="EUR"),
        status=JobStatus.ACTIVE,
        embedding=[0.1, 0.2, 0.3],
        created_at=datetime(2026, 3, 1, 9, 30),
        company_name="Acme",
        job_type="full_time",
        experience_level="senior",
    )


class TestVectorToList:

    def test_numpy_array_becomes_float_list(self):
        assert vector_to_list(np.array([1, 2], dtype=np.float32)) == [1.0, 2.0]

    def test_none_stays_none(self):
        assert vector_to_list(None) is None


class TestJobMapper:

    def test_round_trip_preserves_fields(self, job_posting):
        restored = JobMapper.to_domain(JobMapper.to_table(job_posting))

        assert restored == job_posting

    def test_unknown_status_maps_to_draft(self):
        table = _table(status="paused")

        assert JobMapper.to_domain(table).status == JobStatus.DRAFT

    def test_numpy_embedding_from_driver(self):
        table = _table(embedding=np.array([0.5, 0.5, 0.0]))

        assert JobMapper.to_domain(table).embedding == [0.5, 0.5, 0.0]

    def test_missing_optional_values(self):
        table = _table(description=None, skills=None)

        job = JobMapper.to_domain(table)

        assert job.description == ""
        assert job.skills == []
        assert job.embedding is None
        assert not job.is_retrievable()


class TestCandidateProfileMapper:

    def test_to_row_and_back(self):
        profile = CandidateProfile.from_upload(uuid4(), "Python CV text", [0.1, 0.2], ["Python"], original_filename="cv.docx")

        row = CandidateProfileMapper.to_row(profile)
        table = CandidateProfileTable(id=uuid4(), **row)
        restored = CandidateProfileMapper.to_domain(table)

        assert row["user_id"] == profile.user_id
        assert "id" not in row
        assert restored == profile
