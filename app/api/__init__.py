"""
HTTP surface of the job board matching service.

Routers are imported inside ``create_api_router`` so that importing ``app.api``
does not pull in the application and infrastructure layers.
"""

from fastapi import APIRouter

API_V1_PREFIX = "/api/v1"


def create_api_router() -> APIRouter:
    """Router carrying job search and CV matching under ``/api/v1``."""
    from app.api.v1.cv_match import router as cv_match_router
    from app.api.v1.search import router as search_router

    api_router = APIRouter(prefix=API_V1_PREFIX)
    api_router.include_router(search_router, tags=["search"])
    api_router.include_router(cv_match_router, tags=["cv"])
    return api_router


__all__ = ["API_V1_PREFIX", "create_api_router"]
