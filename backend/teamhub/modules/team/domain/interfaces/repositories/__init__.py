"""Repository contracts."""

from .team_repository import ITeamRepository

__all__ = ["ITeamRepository"]
