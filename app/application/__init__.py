"""Application layer entry points.

Holds orchestrators and use-case services that coordinate domain logic with adapters.

Note: Services are imported directly from their modules to avoid circular imports.
Use:
    from app.application.matching_service import MatchingApplicationService
"""
