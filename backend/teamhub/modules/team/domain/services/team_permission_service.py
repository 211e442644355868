"""
Team Permission Service

Pure permission queries over a role permission table. The table is passed in
so deployments can supply their own; ``DEFAULT_ROLE_PERMISSIONS`` is used
otherwise.
"""

from typing import TYPE_CHECKING

from ..entities.team.team_constants import DEFAULT_ROLE_PERMISSIONS, PermissionTable
from ..entities.team.team_enums import PermissionCategory, TeamPermission, TeamRole

if TYPE_CHECKING:
    from ..entities.team.team_member import TeamMember
    from ..value_objects.team_settings import TeamSettings


def role_has_permission(
    role: TeamRole,
    permission: TeamPermission,
    table: PermissionTable = DEFAULT_ROLE_PERMISSIONS,
) -> bool:
    """True when ``role`` is granted ``permission`` in ``table``."""
    return permission in table.get(role, frozenset())


def get_permissions_for_role(
    role: TeamRole, table: PermissionTable = DEFAULT_ROLE_PERMISSIONS
) -> frozenset[TeamPermission]:
    return frozenset(table.get(role, frozenset()))


def permissions_by_category(
    category: PermissionCategory | str,
) -> list[TeamPermission]:
    if isinstance(category, str) and not isinstance(category, PermissionCategory):
        category = PermissionCategory(category.lower())
    return TeamPermission.in_category(category)


def delegated_permissions(settings: "TeamSettings") -> frozenset[TeamPermission]:
    """Extra permissions the team's settings hand to plain members."""
    granted: set[TeamPermission] = set()
    if settings.permissions.members_can_invite:
        granted.add(TeamPermission.ADD_MEMBERS)
    if settings.permissions.members_can_remove:
        granted.add(TeamPermission.REMOVE_MEMBERS)
    if settings.permissions.members_can_change_roles:
        granted.add(TeamPermission.CHANGE_MEMBER_ROLE)
    return frozenset(granted)


class TeamPermissionService:
    """Domain service for team permission calculations."""

    def __init__(self, table: PermissionTable = DEFAULT_ROLE_PERMISSIONS):
        self.table = table

    def role_has_permission(self, role: TeamRole, permission: TeamPermission) -> bool:
        return role_has_permission(role, permission, self.table)

    def effective_permissions(
        self, role: TeamRole, settings: "TeamSettings | None" = None
    ) -> frozenset[TeamPermission]:
        """Role permissions plus, for MEMBERs, whatever the settings delegate."""
        permissions = get_permissions_for_role(role, self.table)
        if settings is not None and role is TeamRole.MEMBER:
            permissions = permissions | delegated_permissions(settings)
        return permissions

    def member_has_permission(
        self,
        member: "TeamMember",
        permission: TeamPermission,
        settings: "TeamSettings | None" = None,
    ) -> bool:
        return permission in self.effective_permissions(member.role, settings)

    def can_manage_member(self, actor: "TeamMember", target: "TeamMember") -> bool:
        """
        Check if ``actor`` may remove or re-role ``target``.

        Nobody manages the owner, and only the owner manages admins.
        """
        if target.is_owner:
            return False
        if actor.is_owner:
            return True
        return actor.role.get_hierarchy_level() > target.role.get_hierarchy_level()

    def can_assign_role(self, actor: "TeamMember", role: TeamRole) -> bool:
        """Roles can be granted up to the actor's own level, never OWNER."""
        if role is TeamRole.OWNER:
            return False
        if actor.is_owner:
            return True
        return actor.role.has_at_least_same_permission_as(role)


__all__ = [
    "TeamPermissionService",
    "delegated_permissions",
    "get_permissions_for_role",
    "permissions_by_category",
    "role_has_permission",
]
