"""Team aggregates."""

from .team import UNSET, Team, TeamState

__all__ = ["UNSET", "Team", "TeamState"]
