"""Tests for the CandidateProfile aggregate."""

from uuid import uuid4

import pytest

from app.domain.entities.candidate_profile import MAX_FILENAME_LENGTH, CandidateProfile
from app.domain.entities.job_posting import JobPosting, JobStatus


class TestCandidateProfileFromUpload:

    def test_builds_profile(self):
        user_id = uuid4()

        profile = CandidateProfile.from_upload(
            user_id,
            "  Python developer  ",
            [0.1, 0.2, 0.3],
            ["Python", " ", "SQL"],
            original_filename="cv.pdf",
        )

        assert profile.user_id == user_id
        assert profile.extracted_text == "Python developer"
        assert profile.extracted_skills == ["Python", "SQL"]
        assert profile.original_filename == "cv.pdf"
        assert profile.has_embedding
        assert profile.created_at == profile.updated_at

    def test_truncates_text_and_filename(self):
        profile = CandidateProfile.from_upload(
            uuid4(),
            "x" * 50,
            [1.0],
            [],
            original_filename="f" * 400,
            max_text_length=10,
        )

        assert len(profile.extracted_text) == 10
        assert len(profile.original_filename) == MAX_FILENAME_LENGTH

    @pytest.mark.parametrize("text, embedding", [("", [1.0]), ("   ", [1.0]), ("text", [])])
    def test_rejects_empty_text_or_embedding(self, text, embedding):
        with pytest.raises(ValueError):
            CandidateProfile.from_upload(uuid4(), text, embedding, [])


class TestJobPostingRetrievability:

    def test_active_with_embedding_is_retrievable(self):
        job = JobPosting(id=uuid4(), title="A", status=JobStatus.ACTIVE, embedding=[1.0])

        assert job.is_retrievable()

    @pytest.mark.parametrize(
        "status, embedding",
        [(JobStatus.DRAFT, [1.0]), (JobStatus.CLOSED, [1.0]), (JobStatus.ACTIVE, None), (JobStatus.ACTIVE, [])],
    )
    def test_inactive_or_unembedded_is_not_retrievable(self, status, embedding):
        job = JobPosting(id=uuid4(), title="A", status=status, embedding=embedding)

        assert not job.is_retrievable()
