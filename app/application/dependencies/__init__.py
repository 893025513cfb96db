"""Application service dependencies and factories."""

from .matching_dependencies import (
    IMatchingDependencyFactory,
    MatchingDependencies,
)

__all__ = [
    "IMatchingDependencyFactory",
    "MatchingDependencies",
]
