"""Domain services package."""

from .lexical_matcher import build_search_terms, job_matches_terms
from .result_augmenter import ResultAugmenter
from .score_normalizer import ScoreNormalizer, percentages_for, to_percentage

__all__ = [
    "ResultAugmenter",
    "ScoreNormalizer",
    "build_search_terms",
    "job_matches_terms",
    "percentages_for",
    "to_percentage",
]
