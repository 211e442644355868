"""
Team Service

Application service implementing the team use cases. Each use case loads the
team, authorizes the acting user, runs the aggregate operation, saves, and
only after a successful save publishes the accumulated events in order and
clears the aggregate's event log.
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from teamhub.core.config import Settings, get_settings
from teamhub.core.domain.contracts import IEventPublisher
from teamhub.core.domain.unique_id import UniqueId
from teamhub.core.logging import get_logger
from teamhub.core.result import Result, err, ok
from teamhub.modules.team.domain.aggregates.team import UNSET, Team
from teamhub.modules.team.domain.entities.team.team_constants import (
    DEFAULT_ROLE_PERMISSIONS,
    TEAM_DEFAULTS,
    PermissionTable,
)
from teamhub.modules.team.domain.entities.team.team_enums import TeamPermission, TeamRole
from teamhub.modules.team.domain.entities.team.team_errors import TeamError
from teamhub.modules.team.domain.entities.team.team_invitation import TeamInvitation
from teamhub.modules.team.domain.entities.team.team_member import TeamMember
from teamhub.modules.team.domain.interfaces.repositories.team_repository import (
    ITeamRepository,
)
from teamhub.modules.team.domain.services.team_permission_service import (
    TeamPermissionService,
)
from teamhub.modules.team.domain.value_objects.team_settings import TeamSettings

logger = get_logger(__name__)


class TeamService:
    """Use cases for creating teams and managing their membership."""

    def __init__(
        self,
        repository: ITeamRepository,
        publisher: IEventPublisher,
        settings: Settings | None = None,
        permissions: PermissionTable = DEFAULT_ROLE_PERMISSIONS,
    ):
        """Initialize team service.

        Args:
            repository: Team persistence
            publisher: Receives domain events after each successful save
            settings: Application settings, ``get_settings()`` when omitted
            permissions: Role permission table used for authorization
        """
        self.repository = repository
        self.publisher = publisher
        self.settings = settings or get_settings()
        self.permissions = permissions
        self.permission_service = TeamPermissionService(permissions)

    # =========================================================================
    # QUERIES
    # =========================================================================

    async def get_team(self, team_id: UniqueId | str) -> Result[Team, TeamError]:
        team = await self.repository.find_by_id(UniqueId.coerce(team_id))
        if team is None:
            return err(TeamError.team_not_found(team_id))
        return ok(team)

    async def get_teams_for_member(self, user_id: UniqueId | str) -> list[Team]:
        return await self.repository.find_by_member_id(UniqueId.coerce(user_id))

    async def get_pending_invitations(
        self, user_id: UniqueId | str
    ) -> list[TeamInvitation]:
        return await self.repository.find_pending_invitations(UniqueId.coerce(user_id))

    # =========================================================================
    # TEAM LIFECYCLE
    # =========================================================================

    async def create_team(
        self,
        name: str,
        owner_id: UniqueId | str,
        description: str | None = None,
        settings: TeamSettings | Mapping[str, Any] | None = None,
    ) -> Result[Team, TeamError]:
        """Create a team owned by ``owner_id`` and publish ``TeamCreated``."""
        created = Team.create(
            name=name, owner_id=owner_id, description=description, settings=settings
        )
        if created.is_err():
            logger.info(
                "Team creation rejected",
                owner_id=str(owner_id),
                error_code=created.error.code.value,
            )
            return created

        team = created.value
        persisted = await self._save_and_publish(team)
        if persisted.is_err():
            return persisted

        logger.info("Team created", team_id=str(team.id), owner_id=str(team.owner_id))
        return ok(team)

    async def update_team(
        self,
        team_id: UniqueId | str,
        actor_id: UniqueId | str,
        name: str = UNSET,
        description: str | None = UNSET,
        settings: TeamSettings | Mapping[str, Any] = UNSET,
    ) -> Result[Team, TeamError]:
        """Update details (EDIT_TEAM) and/or settings (EDIT_SETTINGS)."""
        loaded = await self.get_team(team_id)
        if loaded.is_err():
            return loaded
        team = loaded.value

        if name is not UNSET or description is not UNSET:
            allowed = self._authorize(team, actor_id, TeamPermission.EDIT_TEAM)
            if allowed.is_err():
                return allowed
        if settings is not UNSET:
            allowed = self._authorize(team, actor_id, TeamPermission.EDIT_SETTINGS)
            if allowed.is_err():
                return allowed

        return await self._apply(
            team, team.update(name=name, description=description, settings=settings)
        )

    async def delete_team(
        self, team_id: UniqueId | str, actor_id: UniqueId | str
    ) -> Result[None, TeamError]:
        loaded = await self.get_team(team_id)
        if loaded.is_err():
            return loaded
        team = loaded.value

        allowed = self._authorize(team, actor_id, TeamPermission.DELETE_TEAM)
        if allowed.is_err():
            return allowed

        deleted = await self.repository.delete(team.id)
        if deleted.is_ok():
            logger.info("Team deleted", team_id=str(team.id), actor_id=str(actor_id))
        return deleted

    async def transfer_ownership(
        self,
        team_id: UniqueId | str,
        actor_id: UniqueId | str,
        new_owner_id: UniqueId | str,
    ) -> Result[Team, TeamError]:
        """Only the current owner can hand the team over."""
        loaded = await self.get_team(team_id)
        if loaded.is_err():
            return loaded
        team = loaded.value

        if UniqueId.coerce(actor_id) != team.owner_id:
            return err(TeamError.insufficient_permissions(actor_id, "TRANSFER_OWNERSHIP"))

        return await self._apply(team, team.transfer_ownership(new_owner_id))

    # =========================================================================
    # MEMBERSHIP
    # =========================================================================

    async def add_member(
        self,
        team_id: UniqueId | str,
        actor_id: UniqueId | str,
        user_id: UniqueId | str,
        role: TeamRole | str = TEAM_DEFAULTS.DEFAULT_MEMBER_ROLE,
    ) -> Result[Team, TeamError]:
        loaded = await self.get_team(team_id)
        if loaded.is_err():
            return loaded
        team = loaded.value

        allowed = self._authorize(team, actor_id, TeamPermission.ADD_MEMBERS)
        if allowed.is_err():
            return allowed

        member = TeamMember.create(user_id, role)
        if member.is_err():
            return member

        assignable = self._check_assignable(team, actor_id, member.value.role)
        if assignable.is_err():
            return assignable

        return await self._apply(team, team.add_member(member.value))

    async def remove_member(
        self,
        team_id: UniqueId | str,
        actor_id: UniqueId | str,
        user_id: UniqueId | str,
    ) -> Result[Team, TeamError]:
        """Remove a member; any member may remove themselves."""
        loaded = await self.get_team(team_id)
        if loaded.is_err():
            return loaded
        team = loaded.value

        if UniqueId.coerce(actor_id) != UniqueId.coerce(user_id):
            allowed = self._authorize(team, actor_id, TeamPermission.REMOVE_MEMBERS)
            if allowed.is_err():
                return allowed
            manageable = self._check_manageable(team, actor_id, user_id)
            if manageable.is_err():
                return manageable

        return await self._apply(team, team.remove_member(user_id))

    async def change_member_role(
        self,
        team_id: UniqueId | str,
        actor_id: UniqueId | str,
        user_id: UniqueId | str,
        new_role: TeamRole | str,
    ) -> Result[Team, TeamError]:
        loaded = await self.get_team(team_id)
        if loaded.is_err():
            return loaded
        team = loaded.value

        allowed = self._authorize(team, actor_id, TeamPermission.CHANGE_MEMBER_ROLE)
        if allowed.is_err():
            return allowed

        role = TeamRole.parse(new_role)
        if role.is_err():
            return role

        manageable = self._check_manageable(team, actor_id, user_id)
        if manageable.is_err():
            return manageable
        assignable = self._check_assignable(team, actor_id, role.value)
        if assignable.is_err():
            return assignable

        return await self._apply(team, team.update_member_role(user_id, role.value))

    # =========================================================================
    # INVITATIONS
    # =========================================================================

    async def invite_member(
        self,
        team_id: UniqueId | str,
        actor_id: UniqueId | str,
        user_id: UniqueId | str,
        role: TeamRole | str = TEAM_DEFAULTS.DEFAULT_INVITATION_ROLE,
        email: str | None = None,
        expires_in_days: int | None = None,
    ) -> Result[TeamInvitation, TeamError]:
        """Invite a user; expiry defaults to ``settings.invitation_expiry_days``."""
        loaded = await self.get_team(team_id)
        if loaded.is_err():
            return loaded
        team = loaded.value

        allowed = self._authorize(team, actor_id, TeamPermission.ADD_MEMBERS)
        if allowed.is_err():
            return allowed

        invitation = TeamInvitation.create(
            team_id=team.id,
            user_id=user_id,
            invited_by=actor_id,
            role=role,
            email=email,
            expires_in_days=(
                self.settings.invitation_expiry_days
                if expires_in_days is None
                else expires_in_days
            ),
        )
        if invitation.is_err():
            return invitation

        assignable = self._check_assignable(team, actor_id, invitation.value.role)
        if assignable.is_err():
            return assignable

        applied = await self._apply(team, team.add_invitation(invitation.value))
        if applied.is_err():
            return applied
        return ok(invitation.value)

    async def respond_to_invitation(
        self,
        team_id: UniqueId | str,
        user_id: UniqueId | str,
        accept: bool,
        now: datetime | None = None,
    ) -> Result[Team, TeamError]:
        loaded = await self.get_team(team_id)
        if loaded.is_err():
            return loaded
        team = loaded.value

        return await self._apply(
            team, team.handle_invitation_response(user_id, accept, now)
        )

    async def expire_invitations(
        self, team_id: UniqueId | str, now: datetime | None = None
    ) -> Result[int, TeamError]:
        loaded = await self.get_team(team_id)
        if loaded.is_err():
            return loaded
        team = loaded.value

        expired = team.expire_invitations(now)
        if expired.is_err() or expired.value == 0:
            return expired

        persisted = await self._save_and_publish(team)
        if persisted.is_err():
            return persisted
        logger.info("Invitations expired", team_id=str(team.id), count=expired.value)
        return expired

    # =========================================================================
    # HELPER METHODS
    # =========================================================================

    def _authorize(
        self, team: Team, actor_id: UniqueId | str, permission: TeamPermission
    ) -> Result[None, TeamError]:
        if team.is_action_permitted(actor_id, permission, self.permissions):
            return ok()
        logger.warning(
            "Permission denied",
            team_id=str(team.id),
            actor_id=str(actor_id),
            permission=permission.value,
        )
        return err(TeamError.insufficient_permissions(actor_id, permission))

    def _check_manageable(
        self, team: Team, actor_id: UniqueId | str, user_id: UniqueId | str
    ) -> Result[None, TeamError]:
        actor = team.get_member(actor_id)
        target = team.get_member(user_id)
        # Unknown targets are reported by the aggregate as MEMBER_NOT_FOUND
        if target is None or actor is None:
            return ok()
        if target.is_owner:
            return ok()
        if self.permission_service.can_manage_member(actor, target):
            return ok()
        return err(TeamError.insufficient_permissions(actor_id, "MANAGE_MEMBER"))

    def _check_assignable(
        self, team: Team, actor_id: UniqueId | str, role: TeamRole
    ) -> Result[None, TeamError]:
        actor = team.get_member(actor_id)
        # OWNER is rejected by the aggregate with its own error code
        if actor is None or role is TeamRole.OWNER:
            return ok()
        if self.permission_service.can_assign_role(actor, role):
            return ok()
        return err(TeamError.insufficient_permissions(actor_id, f"ASSIGN_{role.name}"))

    async def _apply(
        self, team: Team, outcome: Result[Any, TeamError]
    ) -> Result[Team, TeamError]:
        if outcome.is_err():
            logger.info(
                "Team operation rejected",
                team_id=str(team.id),
                error_code=outcome.error.code.value,
            )
            return outcome

        if not team.has_events():
            return ok(team)

        persisted = await self._save_and_publish(team)
        if persisted.is_err():
            return persisted
        return ok(team)

    async def _save_and_publish(self, team: Team) -> Result[None, TeamError]:
        saved = await self.repository.save(team)
        if saved.is_err():
            logger.warning(
                "Team save failed",
                team_id=str(team.id),
                error_code=saved.error.code.value,
                pending_events=team.event_count(),
            )
            return saved

        events = team.get_domain_events()
        try:
            await self.publisher.publish_all(events)
        except Exception as e:
            # The save stands; the events stay on the aggregate for redelivery.
            logger.exception(
                "Team events not published",
                team_id=str(team.id),
                pending_events=len(events),
                event_ids=[event.event_id for event in events],
            )
            return err(
                TeamError.persistence_failed(
                    f"Team {team.id} was saved but its events were not published: {e}",
                    team_id=str(team.id),
                    saved=True,
                    unpublished_event_ids=[event.event_id for event in events],
                )
            )
        team.clear_events()

        logger.debug(
            "Team events published",
            team_id=str(team.id),
            event_types=[event.event_type for event in events],
        )
        return ok()


__all__ = ["TeamService"]
