"""
API v1 Routes
"""

from .cv_match import router as cv_match_router
from .search import router as search_router

__all__ = [
    "cv_match_router",
    "search_router",
]
