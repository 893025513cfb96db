"""
FastAPI Dependencies
"""

from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends, HTTPException, Request, status

from app.core.config import Settings, get_settings

logger = structlog.get_logger(__name__)


# Settings dependency
def get_settings_dependency() -> Settings:
    """Get application settings"""
    return get_settings()


async def get_current_user_id(
    request: Request,
    settings: Settings = Depends(get_settings_dependency),
) -> UUID:
    """
    Get the authenticated user id.

    Authentication happens at the upstream gateway, which forwards the
    caller's id in a trusted header.
    """
    raw_user_id = request.headers.get(settings.USER_ID_HEADER)
    if not raw_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )

    try:
        return UUID(raw_user_id.strip())
    except ValueError:
        logger.warning("Invalid user id header", header=settings.USER_ID_HEADER)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid user identity",
        )


CurrentUserIdDep = Annotated[UUID, Depends(get_current_user_id)]


__all__ = [
    "get_settings_dependency",
    "get_current_user_id",
    "CurrentUserIdDep",
]
