"""
Job Search API Endpoints

Free-text job search:
- Semantic retrieval over job embeddings with a relevance floor
- Keyword matching when semantic search cannot run, or on request
"""

from typing import List

import structlog
from fastapi import APIRouter, HTTPException, Query

from app.api.dependencies import MatchingServiceDep, map_domain_exception_to_http
from app.api.schemas.match_schemas import MatchResultResponse, SearchMode
from app.application.matching_service import TextSearchMode
from app.core.config import get_settings
from app.domain.exceptions import DomainException

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/jobs/search", tags=["search"])


@router.get("/semantic", response_model=List[MatchResultResponse])
async def semantic_job_search(
    matching_service: MatchingServiceDep,
    query: str = Query(default="", description="Free-text search query"),
    mode: SearchMode = Query(default=SearchMode.SEMANTIC, description="semantic or keyword"),
) -> List[MatchResultResponse]:
    """
    Search active job postings by meaning.

    - **semantic**: embedding similarity above the relevance floor; falls back
      to keyword matching when no embedding or no embedded jobs are available
    - **keyword**: case-insensitive keyword matching only
    """
    try:
        results = await matching_service.search_by_text(query, mode=TextSearchMode(mode.value))
        return [MatchResultResponse.from_domain(result) for result in results]
    except DomainException as domain_exc:
        raise map_domain_exception_to_http(domain_exc)
    except HTTPException:
        raise
    except Exception as exc:
        logger.error("Job search failed", error=str(exc))
        raise HTTPException(
            status_code=500,
            detail={
                "error": "search_failed",
                "message": "Search request could not be completed",
                "details": str(exc) if get_settings().exposes_error_details() else None,
            },
        )


__all__ = ["router"]
