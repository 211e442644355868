"""Test cases for roles, permissions and the permission service."""

from types import MappingProxyType

import pytest

from teamhub.modules.team.domain.entities.team.team_constants import (
    DEFAULT_ROLE_PERMISSIONS,
)
from teamhub.modules.team.domain.entities.team.team_enums import (
    PermissionCategory,
    TeamPermission,
    TeamRole,
)
from teamhub.modules.team.domain.entities.team.team_errors import TeamErrorCode
from teamhub.modules.team.domain.entities.team.team_member import TeamMember
from teamhub.modules.team.domain.services.team_permission_service import (
    TeamPermissionService,
    permissions_by_category,
    role_has_permission,
)
from teamhub.modules.team.domain.value_objects.team_settings import TeamSettings


class TestTeamRole:
    @pytest.mark.parametrize("raw", ["admin", "ADMIN", " Admin "])
    def test_parse_is_case_insensitive(self, raw):
        assert TeamRole.parse(raw).unwrap() is TeamRole.ADMIN

    def test_parse_unknown_role(self):
        result = TeamRole.parse("superuser")

        assert result.error.code is TeamErrorCode.INVALID_ROLE

    def test_hierarchy(self):
        assert TeamRole.OWNER.has_at_least_same_permission_as(TeamRole.ADMIN)
        assert TeamRole.ADMIN.has_at_least_same_permission_as(TeamRole.ADMIN)
        assert not TeamRole.GUEST.has_at_least_same_permission_as(TeamRole.MEMBER)

    def test_display(self):
        assert TeamRole.OWNER.display_name == "Owner"
        assert TeamRole.GUEST.description

    def test_owner_not_assignable(self):
        assert TeamRole.OWNER not in TeamRole.assignable()


class TestPermissionTable:
    def test_owner_has_every_permission(self):
        assert all(role_has_permission(TeamRole.OWNER, p) for p in TeamPermission)

    def test_admin_has_everything_but_delete(self):
        assert not role_has_permission(TeamRole.ADMIN, TeamPermission.DELETE_TEAM)
        assert DEFAULT_ROLE_PERMISSIONS[TeamRole.ADMIN] == frozenset(TeamPermission) - {
            TeamPermission.DELETE_TEAM
        }

    def test_member_permissions(self):
        assert DEFAULT_ROLE_PERMISSIONS[TeamRole.MEMBER] == {
            TeamPermission.VIEW_TEAM,
            TeamPermission.VIEW_MEMBERS,
            TeamPermission.VIEW_ACTIVITIES,
            TeamPermission.VIEW_SETTINGS,
        }

    def test_guest_only_views_team(self):
        assert DEFAULT_ROLE_PERMISSIONS[TeamRole.GUEST] == {TeamPermission.VIEW_TEAM}

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_ROLE_PERMISSIONS[TeamRole.GUEST] = frozenset()

    def test_injected_table(self):
        table = MappingProxyType({TeamRole.MEMBER: frozenset({TeamPermission.DELETE_TEAM})})

        assert role_has_permission(TeamRole.MEMBER, TeamPermission.DELETE_TEAM, table)
        assert not role_has_permission(TeamRole.OWNER, TeamPermission.VIEW_TEAM, table)


class TestTeamPermission:
    def test_metadata(self):
        assert TeamPermission.DELETE_TEAM.category is PermissionCategory.BASIC
        assert TeamPermission.EDIT_SETTINGS.label
        assert TeamPermission.ADD_MEMBERS.description

    def test_parse(self):
        assert TeamPermission.parse("view_team").unwrap() is TeamPermission.VIEW_TEAM
        assert TeamPermission.parse("fly").is_err()

    def test_permissions_by_category(self):
        members = permissions_by_category("members")

        assert TeamPermission.ADD_MEMBERS in members
        assert TeamPermission.VIEW_TEAM not in members


class TestTeamPermissionService:
    @pytest.fixture
    def service(self):
        return TeamPermissionService()

    def test_delegation_widens_member_permissions(self, service):
        settings = TeamSettings.create(
            permissions={"members_can_invite": True, "members_can_remove": True}
        ).unwrap()

        permissions = service.effective_permissions(TeamRole.MEMBER, settings)

        assert TeamPermission.ADD_MEMBERS in permissions
        assert TeamPermission.REMOVE_MEMBERS in permissions
        assert TeamPermission.CHANGE_MEMBER_ROLE not in permissions

    def test_delegation_does_not_apply_to_guests(self, service):
        settings = TeamSettings.create(permissions={"members_can_invite": True}).unwrap()

        assert TeamPermission.ADD_MEMBERS not in service.effective_permissions(
            TeamRole.GUEST, settings
        )

    def test_can_manage_member(self, service):
        owner = TeamMember(user_id="o", role=TeamRole.OWNER)
        admin = TeamMember(user_id="a", role=TeamRole.ADMIN)
        other_admin = TeamMember(user_id="a2", role=TeamRole.ADMIN)
        member = TeamMember(user_id="m", role=TeamRole.MEMBER)

        assert service.can_manage_member(owner, admin)
        assert service.can_manage_member(admin, member)
        assert not service.can_manage_member(admin, other_admin)
        assert not service.can_manage_member(admin, owner)
        assert not service.can_manage_member(member, member)

    def test_can_assign_role(self, service):
        owner = TeamMember(user_id="o", role=TeamRole.OWNER)
        admin = TeamMember(user_id="a", role=TeamRole.ADMIN)
        member = TeamMember(user_id="m", role=TeamRole.MEMBER)

        assert service.can_assign_role(owner, TeamRole.ADMIN)
        assert not service.can_assign_role(owner, TeamRole.OWNER)
        assert service.can_assign_role(admin, TeamRole.ADMIN)
        assert not service.can_assign_role(member, TeamRole.ADMIN)
