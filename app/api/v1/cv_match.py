"""
CV Matching API Endpoints

Upload a CV and match it against active job postings:
- PDF and DOCX uploads (legacy DOC accepted, parsed best-effort)
- One stored profile per user, replaced on every upload
- Short match lists padded with recent listings
"""

from typing import Optional

import structlog
from fastapi import APIRouter, File, Form, HTTPException, Query, UploadFile

from app.api.dependencies import MatchingServiceDep, map_domain_exception_to_http
from app.api.schemas.match_schemas import MatchListResponse
from app.core.config import get_settings
from app.core.dependencies import CurrentUserIdDep
from app.domain.exceptions import DomainException, FileSizeExceededError

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/cv", tags=["cv"])


def _internal_error(error: str, message: str, exc: Exception) -> HTTPException:
    return HTTPException(
        status_code=500,
        detail={
            "error": error,
            "message": message,
            "details": str(exc) if get_settings().exposes_error_details() else None,
        },
    )


@router.post("/upload", response_model=MatchListResponse)
async def upload_cv_and_match(
    current_user_id: CurrentUserIdDep,
    matching_service: MatchingServiceDep,
    cv: Optional[UploadFile] = File(None, description="CV document (PDF or DOCX)"),
    limit: Optional[int] = Form(None, description="Maximum number of matches (default 20, max 50)"),
) -> MatchListResponse:
    """
    Upload a CV and get matching jobs.

    The CV text replaces the stored profile before matching; if it cannot be
    stored the request fails without returning matches.
    """
    file_bytes = b""
    media_type = None
    filename = None
    if cv is not None:
        max_size = get_settings().MAX_FILE_SIZE
        # Multipart parsing records the size, so oversized files are refused unread
        if cv.size is not None and cv.size > max_size:
            raise map_domain_exception_to_http(FileSizeExceededError(cv.size, max_size, cv.filename))
        file_bytes = await cv.read()
        media_type = (cv.content_type or "").split(";")[0].strip() or None
        filename = cv.filename

    try:
        outcome = await matching_service.match_from_upload(
            current_user_id,
            file_bytes,
            media_type,
            limit=limit,
            original_filename=filename,
        )
        return MatchListResponse.from_domain(outcome)
    except DomainException as domain_exc:
        raise map_domain_exception_to_http(domain_exc)
    except HTTPException:
        raise
    except Exception as exc:
        logger.error("CV upload failed", error=str(exc))
        raise _internal_error("upload_failed", "CV could not be processed", exc)


@router.get("/matches", response_model=MatchListResponse)
async def get_cv_matches(
    current_user_id: CurrentUserIdDep,
    matching_service: MatchingServiceDep,
    limit: Optional[int] = Query(None, description="Maximum number of matches (default 20, max 50)"),
) -> MatchListResponse:
    """Matches for the most recently uploaded CV, without a new upload."""
    try:
        outcome = await matching_service.match_from_profile(current_user_id, limit=limit)
        return MatchListResponse.from_domain(outcome)
    except DomainException as domain_exc:
        raise map_domain_exception_to_http(domain_exc)
    except HTTPException:
        raise
    except Exception as exc:
        logger.error("CV matching failed", error=str(exc))
        raise _internal_error("matching_failed", "Matches could not be retrieved", exc)


__all__ = ["router"]
