"""
Team Entity Enumerations

Enums with rich utility methods for team membership, permissions and
invitations.
"""

from enum import Enum
from typing import Any

from teamhub.core.result import Result, err, ok

from .team_errors import TeamError


class TeamRole(str, Enum):
    """Roles within a team."""

    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"
    GUEST = "guest"

    @property
    def display_name(self) -> str:
        """Get user-friendly display name."""
        return self.value.title()

    @property
    def description(self) -> str:
        descriptions = {
            TeamRole.OWNER: "Full control over the team, its settings and membership",
            TeamRole.ADMIN: "Manages members and settings but cannot delete the team",
            TeamRole.MEMBER: "Regular member who can view the team and its activities",
            TeamRole.GUEST: "Limited access, can only view the team",
        }
        return descriptions[self]

    def get_hierarchy_level(self) -> int:
        """Get hierarchy level (higher = more permissions)."""
        levels = {
            TeamRole.OWNER: 3,
            TeamRole.ADMIN: 2,
            TeamRole.MEMBER: 1,
            TeamRole.GUEST: 0,
        }
        return levels[self]

    def has_at_least_same_permission_as(self, other: "TeamRole") -> bool:
        return self.get_hierarchy_level() >= other.get_hierarchy_level()

    def can_manage_members(self) -> bool:
        return self in (TeamRole.OWNER, TeamRole.ADMIN)

    @classmethod
    def parse(cls, value: Any) -> Result["TeamRole", TeamError]:
        """Parse a role from its value or name, ignoring case."""
        if isinstance(value, TeamRole):
            return ok(value)
        if not isinstance(value, str):
            return err(TeamError.invalid_role(value))

        normalized = value.strip().lower()
        for role in cls:
            if role.value == normalized:
                return ok(role)
        return err(TeamError.invalid_role(value))

    @classmethod
    def assignable(cls) -> list["TeamRole"]:
        """Roles that can be granted through add/invite/role change."""
        return [cls.ADMIN, cls.MEMBER, cls.GUEST]


class PermissionCategory(str, Enum):
    """Grouping of team permissions."""

    BASIC = "basic"
    MEMBERS = "members"
    ACTIVITIES = "activities"
    ADMIN = "admin"

    @property
    def display_name(self) -> str:
        return self.value.title()


class TeamPermission(str, Enum):
    """Actions that can be granted to a team role."""

    VIEW_TEAM = "VIEW_TEAM"
    EDIT_TEAM = "EDIT_TEAM"
    DELETE_TEAM = "DELETE_TEAM"

    VIEW_MEMBERS = "VIEW_MEMBERS"
    ADD_MEMBERS = "ADD_MEMBERS"
    REMOVE_MEMBERS = "REMOVE_MEMBERS"
    CHANGE_MEMBER_ROLE = "CHANGE_MEMBER_ROLE"

    VIEW_ACTIVITIES = "VIEW_ACTIVITIES"
    CREATE_ACTIVITY = "CREATE_ACTIVITY"
    EDIT_ACTIVITY = "EDIT_ACTIVITY"
    DELETE_ACTIVITY = "DELETE_ACTIVITY"

    VIEW_SETTINGS = "VIEW_SETTINGS"
    EDIT_SETTINGS = "EDIT_SETTINGS"

    @property
    def category(self) -> PermissionCategory:
        return _PERMISSION_DETAILS[self][0]

    @property
    def label(self) -> str:
        return _PERMISSION_DETAILS[self][1]

    @property
    def description(self) -> str:
        return _PERMISSION_DETAILS[self][2]

    @classmethod
    def parse(cls, value: Any) -> Result["TeamPermission", TeamError]:
        if isinstance(value, TeamPermission):
            return ok(value)
        if isinstance(value, str):
            normalized = value.strip().upper()
            for permission in cls:
                if permission.value == normalized:
                    return ok(permission)
        return err(
            TeamError.invalid_settings(
                f"'{value}' is not a valid team permission", permission=str(value)
            )
        )

    @classmethod
    def in_category(cls, category: PermissionCategory) -> list["TeamPermission"]:
        return [p for p in cls if p.category is category]


_PERMISSION_DETAILS: dict[TeamPermission, tuple[PermissionCategory, str, str]] = {
    TeamPermission.VIEW_TEAM: (
        PermissionCategory.BASIC,
        "View team",
        "Can see the team and its basic information",
    ),
    TeamPermission.EDIT_TEAM: (
        PermissionCategory.BASIC,
        "Edit team",
        "Can change the team's name, description and settings",
    ),
    TeamPermission.DELETE_TEAM: (
        PermissionCategory.BASIC,
        "Delete team",
        "Can delete the team permanently",
    ),
    TeamPermission.VIEW_MEMBERS: (
        PermissionCategory.MEMBERS,
        "View members",
        "Can see the members of the team",
    ),
    TeamPermission.ADD_MEMBERS: (
        PermissionCategory.MEMBERS,
        "Invite members",
        "Can invite new members to the team",
    ),
    TeamPermission.REMOVE_MEMBERS: (
        PermissionCategory.MEMBERS,
        "Remove members",
        "Can remove members from the team",
    ),
    TeamPermission.CHANGE_MEMBER_ROLE: (
        PermissionCategory.MEMBERS,
        "Change member roles",
        "Can change the roles of members",
    ),
    TeamPermission.VIEW_ACTIVITIES: (
        PermissionCategory.ACTIVITIES,
        "View activities",
        "Can see the team's activities",
    ),
    TeamPermission.CREATE_ACTIVITY: (
        PermissionCategory.ACTIVITIES,
        "Create activities",
        "Can create new activities in the team",
    ),
    TeamPermission.EDIT_ACTIVITY: (
        PermissionCategory.ACTIVITIES,
        "Edit activities",
        "Can change existing activities",
    ),
    TeamPermission.DELETE_ACTIVITY: (
        PermissionCategory.ACTIVITIES,
        "Delete activities",
        "Can delete activities from the team",
    ),
    TeamPermission.VIEW_SETTINGS: (
        PermissionCategory.ADMIN,
        "View team settings",
        "Can see the team's settings",
    ),
    TeamPermission.EDIT_SETTINGS: (
        PermissionCategory.ADMIN,
        "Edit team settings",
        "Can change the team's settings",
    ),
}


class InvitationStatus(str, Enum):
    """Lifecycle of a team invitation."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    EXPIRED = "expired"

    @property
    def is_final(self) -> bool:
        return self is not InvitationStatus.PENDING

    def can_transition_to(self, target: "InvitationStatus") -> bool:
        return self is InvitationStatus.PENDING and target is not InvitationStatus.PENDING

    @classmethod
    def parse(cls, value: Any) -> Result["InvitationStatus", TeamError]:
        if isinstance(value, InvitationStatus):
            return ok(value)
        if isinstance(value, str):
            normalized = value.strip().lower()
            for status in cls:
                if status.value == normalized:
                    return ok(status)
        return err(
            TeamError.invalid_invitation_state(
                f"'{value}' is not a valid invitation status", status=str(value)
            )
        )


class ModerationLevel(str, Enum):
    """How strictly team communication is moderated."""

    NONE = "none"
    BASIC = "basic"
    STRICT = "strict"

    @classmethod
    def parse(cls, value: Any) -> Result["ModerationLevel", TeamError]:
        if isinstance(value, ModerationLevel):
            return ok(value)
        if isinstance(value, str):
            normalized = value.strip().lower()
            for level in cls:
                if level.value == normalized:
                    return ok(level)
        return err(
            TeamError.invalid_settings(
                f"'{value}' is not a valid moderation level",
                field="moderation_level",
            )
        )


__all__ = [
    "InvitationStatus",
    "ModerationLevel",
    "PermissionCategory",
    "TeamPermission",
    "TeamRole",
]
