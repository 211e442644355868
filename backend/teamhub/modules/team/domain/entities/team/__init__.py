"""
Team Entity Module

Exports team members, invitations, enums, errors, events and constants.
"""

from .team_constants import (
    DEFAULT_ROLE_PERMISSIONS,
    TEAM_DEFAULTS,
    TEAM_LIMITS,
    PermissionTable,
    TeamDefaults,
    TeamLimits,
)
from .team_enums import (
    InvitationStatus,
    ModerationLevel,
    PermissionCategory,
    TeamPermission,
    TeamRole,
)
from .team_errors import TeamError, TeamErrorCode
from .team_events import (
    TeamCreated,
    TeamDomainEvent,
    TeamEvent,
    TeamInvitationAccepted,
    TeamInvitationDeclined,
    TeamInvitationExpired,
    TeamInvitationSent,
    TeamMemberJoined,
    TeamMemberLeft,
    TeamMemberRoleChanged,
    TeamOwnershipTransferred,
    TeamUpdated,
    parse_team_event,
)
from .team_invitation import TeamInvitation
from .team_member import TeamMember

__all__ = [
    "DEFAULT_ROLE_PERMISSIONS",
    "TEAM_DEFAULTS",
    "TEAM_LIMITS",
    "InvitationStatus",
    "ModerationLevel",
    "PermissionCategory",
    "PermissionTable",
    "TeamCreated",
    "TeamDefaults",
    "TeamDomainEvent",
    "TeamError",
    "TeamErrorCode",
    "TeamEvent",
    "TeamInvitation",
    "TeamInvitationAccepted",
    "TeamInvitationDeclined",
    "TeamInvitationExpired",
    "TeamInvitationSent",
    "TeamLimits",
    "TeamMember",
    "TeamMemberJoined",
    "TeamMemberLeft",
    "TeamMemberRoleChanged",
    "TeamOwnershipTransferred",
    "TeamPermission",
    "TeamRole",
    "TeamUpdated",
    "parse_team_event",
]
