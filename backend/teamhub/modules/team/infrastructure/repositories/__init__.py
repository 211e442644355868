"""Repository implementations."""

from .in_memory_team_repository import InMemoryTeamRepository

__all__ = ["InMemoryTeamRepository"]
