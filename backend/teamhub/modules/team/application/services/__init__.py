"""Team use cases."""

from .team_service import TeamService

__all__ = ["TeamService"]
