"""Team domain services."""

from .team_permission_service import (
    TeamPermissionService,
    delegated_permissions,
    get_permissions_for_role,
    permissions_by_category,
    role_has_permission,
)

__all__ = [
    "TeamPermissionService",
    "delegated_permissions",
    "get_permissions_for_role",
    "permissions_by_category",
    "role_has_permission",
]
