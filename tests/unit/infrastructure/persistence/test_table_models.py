"""Tests for the SQLModel table definitions."""

from sqlmodel import SQLModel

from app.infrastructure.persistence.models import CandidateProfileTable, JobTable


class TestTimestampColumns:
    """Both tables inherit timestamps from TimestampedModel."""

    def test_tables_registered_on_shared_metadata(self):
        assert {"jobs", "candidate_profiles"} <= set(SQLModel.metadata.tables)

    def test_each_table_owns_its_timestamp_columns(self):
        jobs = JobTable.__table__
        profiles = CandidateProfileTable.__table__

        for column_name in ("created_at", "updated_at"):
            assert jobs.c[column_name] is not profiles.c[column_name]
            assert jobs.c[column_name].table is jobs
            assert profiles.c[column_name].table is profiles

    def test_timestamps_default_to_now_in_database(self):
        for table in (JobTable.__table__, CandidateProfileTable.__table__):
            for column_name in ("created_at", "updated_at"):
                column = table.c[column_name]
                assert column.nullable is False
                assert column.server_default is not None

    def test_created_at_is_indexed_per_table(self):
        index_names = {index.name for index in JobTable.__table__.indexes}
        index_names |= {index.name for index in CandidateProfileTable.__table__.indexes}

        assert "ix_jobs_created_at" in index_names
        assert "ix_candidate_profiles_created_at" in index_names

    def test_new_rows_get_python_side_timestamps(self):
        row = JobTable(title="Data Engineer")

        assert row.created_at is not None
        assert row.updated_at is not None
        assert row.id is not None
