"""
Team Domain Layer

Pure domain model: no I/O and no logging. Expected failures are returned as
``TeamError`` values inside ``Result``.
"""

from .aggregates import Team, TeamState
from .entities.team import (
    DEFAULT_ROLE_PERMISSIONS,
    InvitationStatus,
    TeamError,
    TeamErrorCode,
    TeamInvitation,
    TeamMember,
    TeamPermission,
    TeamRole,
    parse_team_event,
)
from .interfaces.repositories import ITeamRepository
from .value_objects import TeamDescription, TeamName, TeamSettings

__all__ = [
    "DEFAULT_ROLE_PERMISSIONS",
    "ITeamRepository",
    "InvitationStatus",
    "Team",
    "TeamDescription",
    "TeamError",
    "TeamErrorCode",
    "TeamInvitation",
    "TeamMember",
    "TeamName",
    "TeamPermission",
    "TeamRole",
    "TeamSettings",
    "TeamState",
    "parse_team_event",
]
