"""
Job Board Matching - Semantic job search and CV-to-job matching.

This package provides a FastAPI-based backend that ranks active job postings
against free-text queries and uploaded CVs, degrading from a pgvector index
to an exhaustive scan and finally to keyword matching.
"""

__version__ = "1.0.0"
