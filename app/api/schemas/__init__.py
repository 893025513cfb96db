"""
API Schemas - DTOs for REST API following hexagonal architecture.

This module contains all request/response models for the API layer.
These are separated from domain entities and persistence tables.
"""

from app.api.schemas.match_schemas import (
    MatchListResponse,
    MatchResultResponse,
    SalaryRangeResponse,
    SearchMode,
)

__all__ = [
    "MatchListResponse",
    "MatchResultResponse",
    "SalaryRangeResponse",
    "SearchMode",
]
