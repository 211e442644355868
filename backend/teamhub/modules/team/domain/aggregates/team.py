"""
Team Aggregate

The team is the consistency boundary for membership, invitations and
settings. Every mutator follows the same shape:

1. build a candidate ``TeamState`` from the current one,
2. run the candidate through ``check_team_invariants``,
3. commit it and append events, or return ``Err`` leaving the team untouched.

Mutators never raise for expected failures; they return ``Result`` values.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any

from teamhub.core.domain.base import AggregateRoot, DomainEvent, utc_now
from teamhub.core.domain.unique_id import UniqueId
from teamhub.core.result import Result, err, ok

from ..entities.team.team_constants import DEFAULT_ROLE_PERMISSIONS, PermissionTable
from ..entities.team.team_enums import TeamPermission, TeamRole
from ..entities.team.team_errors import TeamError
from ..entities.team.team_events import (
    TeamCreated,
    TeamInvitationAccepted,
    TeamInvitationDeclined,
    TeamInvitationExpired,
    TeamInvitationSent,
    TeamMemberJoined,
    TeamMemberLeft,
    TeamMemberRoleChanged,
    TeamOwnershipTransferred,
    TeamUpdated,
)
from ..entities.team.team_invitation import TeamInvitation
from ..entities.team.team_member import TeamMember
from ..rules.team_invariants import check_team_invariants
from ..services.team_permission_service import TeamPermissionService
from ..value_objects.team_description import TeamDescription
from ..value_objects.team_name import TeamName
from ..value_objects.team_settings import TeamSettings


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


@dataclass(frozen=True)
class TeamState:
    """Immutable snapshot of everything the invariants range over."""

    name: TeamName
    owner_id: UniqueId
    description: TeamDescription | None = None
    members: tuple[TeamMember, ...] = ()
    invitations: tuple[TeamInvitation, ...] = ()
    settings: TeamSettings = field(default_factory=TeamSettings)

    def validate(self) -> Result[None, TeamError]:
        return check_team_invariants(
            self.owner_id, self.members, self.invitations, self.settings
        )

    def find_member(self, user_id: UniqueId) -> TeamMember | None:
        for member in self.members:
            if member.user_id == user_id:
                return member
        return None


class Team(AggregateRoot):
    """
    Team aggregate root.

    Create teams with ``Team.create`` and rebuild stored ones with
    ``Team.reconstitute``; both return a ``Result``.
    """

    def __init__(
        self,
        state: TeamState,
        entity_id: UniqueId | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        version: int = 0,
    ):
        super().__init__(entity_id, created_at, updated_at, version)
        self._state = state

    # =========================================================================
    # FACTORIES
    # =========================================================================

    @classmethod
    def create(
        cls,
        name: str,
        owner_id: UniqueId | str,
        description: str | None = None,
        members: Iterable[TeamMember] | None = None,
        settings: TeamSettings | Mapping[str, Any] | None = None,
        team_id: UniqueId | str | None = None,
        now: datetime | None = None,
    ) -> Result["Team", TeamError]:
        """
        Create a team with its owner as the single OWNER member.

        The owner membership is synthesized unless ``members`` already holds
        the owner with the OWNER role. Emits ``TeamCreated``.
        """
        if not UniqueId.is_valid(owner_id):
            return err(TeamError.invalid_owner(owner_id))
        owner = UniqueId.coerce(owner_id)

        name_result = TeamName.create(name)
        if name_result.is_err():
            return name_result

        description_result = _description_from(description)
        if description_result.is_err():
            return description_result

        settings_result = TeamSettings.from_value(settings)
        if settings_result.is_err():
            return settings_result

        now = now or utc_now()
        initial = list(members or ())
        supplied_owner = next((m for m in initial if m.user_id == owner), None)
        if supplied_owner is not None and supplied_owner.role is not TeamRole.OWNER:
            return err(
                TeamError.invalid_owner(
                    owner, "The owner must hold the OWNER role among initial members"
                )
            )
        if supplied_owner is None:
            initial.insert(0, TeamMember(user_id=owner, role=TeamRole.OWNER, joined_at=now))

        state = TeamState(
            name=name_result.value,
            owner_id=owner,
            description=description_result.value,
            members=tuple(initial),
            settings=settings_result.value,
        )
        valid = state.validate()
        if valid.is_err():
            return valid

        team = cls(
            state,
            entity_id=UniqueId.coerce(team_id) if team_id is not None else None,
            created_at=now,
            updated_at=now,
        )
        team._record(
            TeamCreated(
                aggregate_id=str(team.id),
                occurred_at=now,
                name=state.name.value,
                owner_id=str(owner),
                description=state.description.value if state.description else None,
                member_ids=[str(m.user_id) for m in state.members],
            )
        )
        return ok(team)

    @classmethod
    def reconstitute(
        cls,
        team_id: UniqueId | str,
        name: str,
        owner_id: UniqueId | str,
        members: Iterable[TeamMember],
        invitations: Iterable[TeamInvitation] = (),
        settings: TeamSettings | Mapping[str, Any] | None = None,
        description: str | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        version: int = 0,
    ) -> Result["Team", TeamError]:
        """Rebuild a stored team without emitting events."""
        if not UniqueId.is_valid(owner_id):
            return err(TeamError.invalid_owner(owner_id))

        name_result = TeamName.create(name)
        if name_result.is_err():
            return name_result
        description_result = _description_from(description)
        if description_result.is_err():
            return description_result
        settings_result = TeamSettings.from_value(settings)
        if settings_result.is_err():
            return settings_result

        state = TeamState(
            name=name_result.value,
            owner_id=UniqueId.coerce(owner_id),
            description=description_result.value,
            members=tuple(members),
            invitations=tuple(invitations),
            settings=settings_result.value,
        )
        valid = state.validate()
        if valid.is_err():
            return valid

        return ok(
            cls(
                state,
                entity_id=UniqueId.coerce(team_id),
                created_at=created_at,
                updated_at=updated_at,
                version=version,
            )
        )

    # =========================================================================
    # STATE ACCESS
    # =========================================================================

    @property
    def name(self) -> TeamName:
        return self._state.name

    @property
    def description(self) -> TeamDescription | None:
        return self._state.description

    @property
    def owner_id(self) -> UniqueId:
        return self._state.owner_id

    @property
    def members(self) -> tuple[TeamMember, ...]:
        return self._state.members

    @property
    def invitations(self) -> tuple[TeamInvitation, ...]:
        return self._state.invitations

    @property
    def settings(self) -> TeamSettings:
        return self._state.settings

    @property
    def state(self) -> TeamState:
        return self._state

    @property
    def member_count(self) -> int:
        return len(self._state.members)

    @property
    def is_full(self) -> bool:
        return not self.settings.allows_member_count(self.member_count + 1)

    @property
    def pending_invitations(self) -> tuple[TeamInvitation, ...]:
        return tuple(i for i in self._state.invitations if i.is_pending)

    def get_member(self, user_id: UniqueId | str | None) -> TeamMember | None:
        uid = _lookup_id(user_id)
        return None if uid is None else self._state.find_member(uid)

    def is_member(self, user_id: UniqueId | str | None) -> bool:
        return self.get_member(user_id) is not None

    def get_invitation(self, user_id: UniqueId | str | None) -> TeamInvitation | None:
        """The pending invitation for ``user_id``, else the most recent one."""
        uid = _lookup_id(user_id)
        if uid is None:
            return None
        matches = [i for i in self._state.invitations if i.user_id == uid]
        if not matches:
            return None
        pending = [i for i in matches if i.is_pending]
        if pending:
            return pending[0]
        return max(matches, key=lambda i: i.created_at)

    # =========================================================================
    # MEMBERSHIP
    # =========================================================================

    def add_member(self, member: TeamMember) -> Result[None, TeamError]:
        """Add ``member``. Emits ``TeamMemberJoined``."""
        if self._state.find_member(member.user_id) is not None:
            return err(TeamError.member_already_exists(member.user_id))
        if member.role is TeamRole.OWNER and member.user_id != self.owner_id:
            return err(TeamError.only_one_owner_allowed(member.user_id))
        if not self.settings.allows_member_count(self.member_count + 1):
            return err(
                TeamError.max_members_exceeded(
                    self.settings.max_members, self.member_count + 1
                )
            )

        candidate = replace(self._state, members=self._state.members + (member,))
        return self._commit(
            candidate,
            TeamMemberJoined(
                aggregate_id=str(self.id),
                user_id=str(member.user_id),
                role=member.role,
            ),
        )

    def remove_member(self, user_id: UniqueId | str) -> Result[None, TeamError]:
        """Remove a member. The owner can never be removed. Emits ``TeamMemberLeft``."""
        uid = UniqueId.coerce(user_id)
        member = self._state.find_member(uid)
        if member is None:
            return err(TeamError.member_not_found(uid))
        if uid == self.owner_id:
            return err(TeamError.cannot_remove_owner(uid))

        candidate = replace(
            self._state,
            members=tuple(m for m in self._state.members if m.user_id != uid),
        )
        return self._commit(
            candidate,
            TeamMemberLeft(aggregate_id=str(self.id), user_id=str(uid), role=member.role),
        )

    def update_member_role(
        self, user_id: UniqueId | str, new_role: TeamRole | str
    ) -> Result[None, TeamError]:
        """
        Change a member's role, keeping ``joined_at``.

        Assigning the current role again is a no-op without an event.
        """
        parsed = TeamRole.parse(new_role)
        if parsed.is_err():
            return parsed
        role = parsed.value

        uid = UniqueId.coerce(user_id)
        member = self._state.find_member(uid)
        if member is None:
            return err(TeamError.member_not_found(uid))
        if uid == self.owner_id:
            return err(TeamError.cannot_change_owner_role(uid))
        if role is TeamRole.OWNER:
            return err(TeamError.only_one_owner_allowed(uid))
        if role is member.role:
            return ok()

        candidate = replace(
            self._state,
            members=tuple(
                m.with_role(role) if m.user_id == uid else m for m in self._state.members
            ),
        )
        return self._commit(
            candidate,
            TeamMemberRoleChanged(
                aggregate_id=str(self.id),
                user_id=str(uid),
                old_role=member.role,
                new_role=role,
            ),
        )

    def transfer_ownership(self, new_owner_id: UniqueId | str) -> Result[None, TeamError]:
        """Make an existing member the owner; the previous owner becomes ADMIN."""
        uid = UniqueId.coerce(new_owner_id)
        if uid == self.owner_id:
            return err(TeamError.invalid_owner(uid, "User is already the team owner"))
        if self._state.find_member(uid) is None:
            return err(TeamError.member_not_found(uid))

        previous = self.owner_id
        members = []
        for m in self._state.members:
            if m.user_id == uid:
                members.append(m.with_role(TeamRole.OWNER))
            elif m.user_id == previous:
                members.append(m.with_role(TeamRole.ADMIN))
            else:
                members.append(m)

        candidate = replace(self._state, owner_id=uid, members=tuple(members))
        return self._commit(
            candidate,
            TeamOwnershipTransferred(
                aggregate_id=str(self.id),
                previous_owner_id=str(previous),
                new_owner_id=str(uid),
                previous_owner_role=TeamRole.ADMIN,
            ),
        )

    # =========================================================================
    # INVITATIONS
    # =========================================================================

    def add_invitation(self, invitation: TeamInvitation) -> Result[None, TeamError]:
        """Record a pending invitation. Emits ``TeamInvitationSent``."""
        if invitation.team_id != self.id:
            return err(
                TeamError.invalid_invitation_state(
                    "Invitation belongs to another team",
                    invitation_team_id=str(invitation.team_id),
                    team_id=str(self.id),
                )
            )
        if not invitation.is_pending:
            return err(TeamError.invitation_not_pending(invitation.id, invitation.status))
        if self._state.find_member(invitation.user_id) is not None:
            return err(TeamError.member_already_exists(invitation.user_id))
        if any(i.is_pending and i.user_id == invitation.user_id for i in self.invitations):
            return err(TeamError.invitation_already_exists(invitation.user_id))
        if invitation.role is TeamRole.GUEST and not self.settings.allow_guests:
            return err(
                TeamError.invalid_role(
                    TeamRole.GUEST, "This team does not allow guest members"
                )
            )

        candidate = replace(
            self._state, invitations=self._state.invitations + (invitation,)
        )
        return self._commit(
            candidate,
            TeamInvitationSent(
                aggregate_id=str(self.id),
                invitation_id=str(invitation.id),
                user_id=str(invitation.user_id),
                invited_by=str(invitation.invited_by),
                role=invitation.role,
                email=invitation.email,
                expires_at=invitation.expires_at,
            ),
        )

    def handle_invitation_response(
        self, user_id: UniqueId | str, accept: bool, now: datetime | None = None
    ) -> Result[None, TeamError]:
        """
        Accept or decline the user's pending invitation.

        Accepting moves the invitation to ``accepted`` and adds the member in
        one step, emitting ``TeamInvitationAccepted`` then ``TeamMemberJoined``.
        If the new membership would break an invariant nothing changes.
        """
        now = now or utc_now()
        uid = UniqueId.coerce(user_id)
        invitation = self.get_invitation(uid)
        if invitation is None:
            return err(TeamError.invitation_not_found(uid))

        transition = invitation.accept(now) if accept else invitation.decline(now)
        if transition.is_err():
            return transition
        answered = transition.value

        invitations = tuple(
            answered if i.id == invitation.id else i for i in self._state.invitations
        )

        if not accept:
            candidate = replace(self._state, invitations=invitations)
            return self._commit(
                candidate,
                TeamInvitationDeclined(
                    aggregate_id=str(self.id),
                    occurred_at=now,
                    invitation_id=str(invitation.id),
                    user_id=str(uid),
                ),
                at=now,
            )

        if self._state.find_member(uid) is not None:
            return err(TeamError.member_already_exists(uid))
        if not self.settings.allows_member_count(self.member_count + 1):
            return err(
                TeamError.max_members_exceeded(
                    self.settings.max_members, self.member_count + 1
                )
            )

        member = TeamMember(user_id=uid, role=answered.role, joined_at=now)
        candidate = replace(
            self._state,
            invitations=invitations,
            members=self._state.members + (member,),
        )
        return self._commit(
            candidate,
            TeamInvitationAccepted(
                aggregate_id=str(self.id),
                occurred_at=now,
                invitation_id=str(invitation.id),
                user_id=str(uid),
                role=answered.role,
            ),
            TeamMemberJoined(
                aggregate_id=str(self.id),
                occurred_at=now,
                user_id=str(uid),
                role=member.role,
            ),
            at=now,
        )

    def expire_invitations(self, now: datetime | None = None) -> Result[int, TeamError]:
        """
        Expire every pending invitation past its ``expires_at``.

        Emits one ``TeamInvitationExpired`` per invitation and returns how
        many were expired.
        """
        now = now or utc_now()
        invitations = []
        events: list[DomainEvent] = []
        for invitation in self._state.invitations:
            if invitation.is_pending and invitation.is_expired(now):
                expired = invitation.expire(now)
                if expired.is_err():
                    return expired
                invitations.append(expired.value)
                events.append(
                    TeamInvitationExpired(
                        aggregate_id=str(self.id),
                        occurred_at=now,
                        invitation_id=str(invitation.id),
                        user_id=str(invitation.user_id),
                    )
                )
            else:
                invitations.append(invitation)

        if not events:
            return ok(0)

        committed = self._commit(
            replace(self._state, invitations=tuple(invitations)), *events, at=now
        )
        if committed.is_err():
            return committed
        return ok(len(events))

    # =========================================================================
    # TEAM DETAILS
    # =========================================================================

    def update(
        self,
        name: str = UNSET,
        description: str | None = UNSET,
        settings: TeamSettings | Mapping[str, Any] = UNSET,
    ) -> Result[None, TeamError]:
        """
        Update name, description and/or settings.

        ``settings`` may be full ``TeamSettings`` or a mapping of changes
        applied on top of the current settings. Emits ``TeamUpdated`` only
        when something actually changed.
        """
        state = self._state
        changes: dict[str, Any] = {}

        if name is not UNSET:
            name_result = TeamName.create(name)
            if name_result.is_err():
                return name_result
            if name_result.value != state.name:
                state = replace(state, name=name_result.value)
                changes["name"] = name_result.value.value

        if description is not UNSET:
            description_result = _description_from(description)
            if description_result.is_err():
                return description_result
            if description_result.value != state.description:
                state = replace(state, description=description_result.value)
                changes["description"] = (
                    description_result.value.value if description_result.value else None
                )

        if settings is not UNSET:
            if isinstance(settings, TeamSettings):
                settings_result = settings.validated()
            elif isinstance(settings, Mapping):
                settings_result = state.settings.update(settings)
            else:
                settings_result = TeamSettings.from_value(settings)
            if settings_result.is_err():
                return settings_result
            if settings_result.value != state.settings:
                state = replace(state, settings=settings_result.value)
                changes["settings"] = settings_result.value.to_dict()

        if not changes:
            return ok()

        return self._commit(
            state,
            TeamUpdated(
                aggregate_id=str(self.id),
                changed_fields=list(changes),
                changes=changes,
            ),
        )

    # =========================================================================
    # PERMISSIONS
    # =========================================================================

    def can_manage_members(self, user_id: UniqueId | str | None) -> bool:
        """OWNER or ADMIN; False for non-members."""
        member = self.get_member(user_id)
        return member is not None and member.role.can_manage_members()

    def has_member_permission(
        self,
        user_id: UniqueId | str | None,
        permission: TeamPermission,
        table: PermissionTable = DEFAULT_ROLE_PERMISSIONS,
    ) -> bool:
        """Role table lookup; False for non-members."""
        member = self.get_member(user_id)
        if member is None:
            return False
        return TeamPermissionService(table).role_has_permission(member.role, permission)

    def is_action_permitted(
        self,
        user_id: UniqueId | str | None,
        permission: TeamPermission,
        table: PermissionTable = DEFAULT_ROLE_PERMISSIONS,
    ) -> bool:
        """Role table lookup widened by the settings' delegation flags for MEMBERs."""
        member = self.get_member(user_id)
        if member is None:
            return False
        return TeamPermissionService(table).member_has_permission(
            member, permission, self.settings
        )

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _commit(
        self, candidate: TeamState, *events: DomainEvent, at: datetime | None = None
    ) -> Result[None, TeamError]:
        valid = candidate.validate()
        if valid.is_err():
            return valid

        self._state = candidate
        self.mark_modified(at)
        for event in events:
            self._record(event)
        return ok()

    def __str__(self) -> str:
        return f"Team {self.name} ({self.member_count} members)"


def _description_from(value: str | None) -> Result[TeamDescription | None, TeamError]:
    if value is None:
        return ok(None)
    result = TeamDescription.create(value)
    if result.is_err():
        return result
    return ok(None if result.value.is_empty else result.value)



def _lookup_id(value: Any) -> UniqueId | None:
    """Identifier for read-only lookups; None and blank ids match nobody."""
    if isinstance(value, UniqueId):
        return value
    if value is None or not str(value).strip():
        return None
    return UniqueId(str(value))


__all__ = ["Team", "TeamState", "UNSET"]
