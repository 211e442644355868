"""
Team Entity Constants

Limits, defaults and the role permission table.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .team_enums import ModerationLevel, TeamPermission, TeamRole


@dataclass(frozen=True)
class TeamLimits:
    """Team-specific limits."""

    MIN_NAME_LENGTH: int = 1
    MAX_NAME_LENGTH: int = 50
    MAX_DESCRIPTION_LENGTH: int = 500

    # Bounds for settings.max_members when it is set
    MIN_MAX_MEMBERS: int = 2
    MAX_MAX_MEMBERS: int = 1000

    INVITATION_EXPIRY_DAYS: int = 7


@dataclass(frozen=True)
class TeamDefaults:
    """Default values for team settings."""

    IS_PRIVATE: bool = False
    REQUIRES_APPROVAL: bool = False
    ALLOW_GUESTS: bool = False
    MAX_MEMBERS: int = 50
    MODERATION_LEVEL: ModerationLevel = ModerationLevel.BASIC
    DEFAULT_MEMBER_ROLE: TeamRole = TeamRole.MEMBER
    DEFAULT_INVITATION_ROLE: TeamRole = TeamRole.MEMBER


TEAM_LIMITS = TeamLimits()
TEAM_DEFAULTS = TeamDefaults()


PermissionTable = Mapping[TeamRole, frozenset[TeamPermission]]

OWNER_PERMISSIONS: frozenset[TeamPermission] = frozenset(TeamPermission)

ADMIN_PERMISSIONS: frozenset[TeamPermission] = frozenset(
    {
        TeamPermission.VIEW_TEAM,
        TeamPermission.EDIT_TEAM,
        TeamPermission.VIEW_MEMBERS,
        TeamPermission.ADD_MEMBERS,
        TeamPermission.REMOVE_MEMBERS,
        TeamPermission.CHANGE_MEMBER_ROLE,
        TeamPermission.VIEW_ACTIVITIES,
        TeamPermission.CREATE_ACTIVITY,
        TeamPermission.EDIT_ACTIVITY,
        TeamPermission.DELETE_ACTIVITY,
        TeamPermission.VIEW_SETTINGS,
        TeamPermission.EDIT_SETTINGS,
    }
)

MEMBER_PERMISSIONS: frozenset[TeamPermission] = frozenset(
    {
        TeamPermission.VIEW_TEAM,
        TeamPermission.VIEW_MEMBERS,
        TeamPermission.VIEW_ACTIVITIES,
        TeamPermission.VIEW_SETTINGS,
    }
)

GUEST_PERMISSIONS: frozenset[TeamPermission] = frozenset({TeamPermission.VIEW_TEAM})

DEFAULT_ROLE_PERMISSIONS: PermissionTable = MappingProxyType(
    {
        TeamRole.OWNER: OWNER_PERMISSIONS,
        TeamRole.ADMIN: ADMIN_PERMISSIONS,
        TeamRole.MEMBER: MEMBER_PERMISSIONS,
        TeamRole.GUEST: GUEST_PERMISSIONS,
    }
)


__all__ = [
    "ADMIN_PERMISSIONS",
    "DEFAULT_ROLE_PERMISSIONS",
    "GUEST_PERMISSIONS",
    "MEMBER_PERMISSIONS",
    "OWNER_PERMISSIONS",
    "PermissionTable",
    "TEAM_DEFAULTS",
    "TEAM_LIMITS",
    "TeamDefaults",
    "TeamLimits",
]
