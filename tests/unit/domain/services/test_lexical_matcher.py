"""Tests for keyword term building and matching."""

from app.domain.services.lexical_matcher import build_search_terms, job_matches_terms
from tests.mocks.mock_repositories import make_job


class TestBuildSearchTerms:

    def test_full_query_first_then_tokens(self):
        assert build_search_terms("Python Developer") == ["python developer", "python", "developer"]

    def test_drops_single_character_tokens(self):
        assert build_search_terms("c developer") == ["c developer", "developer"]

    def test_single_word_query_not_repeated(self):
        assert build_search_terms("  Python ") == ["python"]

    def test_blank_query(self):
        assert build_search_terms("   ") == []


class TestJobMatchesTerms:

    def test_matches_title_case_insensitively(self):
        job = make_job("Senior PYTHON Engineer")

        assert job_matches_terms(job, ["python"])

    def test_matches_skill_and_category(self):
        job = make_job("Engineer", skills=["Kubernetes"], category="Infrastructure")

        assert job_matches_terms(job, ["kubernetes"])
        assert job_matches_terms(job, ["infra"])

    def test_no_match(self):
        job = make_job("Accountant", description="Ledgers and audits")

        assert not job_matches_terms(job, ["python"])
        assert not job_matches_terms(job, [])
