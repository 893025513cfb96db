"""Jobs, candidate profiles and match results, plus the ports and pure scoring services around them."""

from . import entities, exceptions, interfaces, repositories, services

__all__ = ["entities", "exceptions", "interfaces", "repositories", "services"]
