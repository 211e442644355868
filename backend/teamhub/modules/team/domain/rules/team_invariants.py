"""
Team Invariants

Structural rules that must hold for every committed team state. Aggregate
mutators build a candidate state and run it through ``check_team_invariants``
before committing, so a rejected operation never leaves a partial change.
"""

from collections.abc import Sequence

from teamhub.core.domain.unique_id import UniqueId
from teamhub.core.result import Result, err, ok

from ..entities.team.team_enums import InvitationStatus, TeamRole
from ..entities.team.team_errors import TeamError
from ..entities.team.team_invitation import TeamInvitation
from ..entities.team.team_member import TeamMember
from ..value_objects.team_settings import TeamSettings


def check_single_owner(
    owner_id: UniqueId, members: Sequence[TeamMember]
) -> Result[None, TeamError]:
    """Exactly one OWNER, and it is ``owner_id``."""
    owners = [m for m in members if m.role is TeamRole.OWNER]
    if not owners:
        return err(TeamError.invalid_owner(owner_id, "Team has no owner member"))
    if len(owners) > 1:
        extra = next((m for m in owners if m.user_id != owner_id), owners[1])
        return err(TeamError.only_one_owner_allowed(extra.user_id))
    if owners[0].user_id != owner_id:
        return err(TeamError.only_one_owner_allowed(owners[0].user_id))
    return ok()


def check_unique_members(members: Sequence[TeamMember]) -> Result[None, TeamError]:
    seen: set[UniqueId] = set()
    for member in members:
        if member.user_id in seen:
            return err(TeamError.member_already_exists(member.user_id))
        seen.add(member.user_id)
    return ok()


def check_member_ceiling(
    members: Sequence[TeamMember], settings: TeamSettings
) -> Result[None, TeamError]:
    if not settings.allows_member_count(len(members)):
        return err(TeamError.max_members_exceeded(settings.max_members, len(members)))
    return ok()


def check_guest_policy(
    members: Sequence[TeamMember], settings: TeamSettings
) -> Result[None, TeamError]:
    if settings.allow_guests:
        return ok()
    for member in members:
        if member.role is TeamRole.GUEST:
            return err(
                TeamError.invalid_role(
                    TeamRole.GUEST, "This team does not allow guest members"
                )
            )
    return ok()


def check_invitations(
    invitations: Sequence[TeamInvitation],
) -> Result[None, TeamError]:
    """``responded_at`` iff answered, and one pending invitation per user."""
    pending_users: set[UniqueId] = set()
    for invitation in invitations:
        answered = invitation.status is not InvitationStatus.PENDING
        if answered != (invitation.responded_at is not None):
            return err(
                TeamError.invalid_invitation_state(
                    "responded_at must be set exactly when an invitation is answered",
                    invitation_id=str(invitation.id),
                    status=invitation.status.value,
                )
            )
        if not answered:
            if invitation.user_id in pending_users:
                return err(TeamError.invitation_already_exists(invitation.user_id))
            pending_users.add(invitation.user_id)
    return ok()


def check_team_invariants(
    owner_id: UniqueId,
    members: Sequence[TeamMember],
    invitations: Sequence[TeamInvitation],
    settings: TeamSettings,
) -> Result[None, TeamError]:
    """Run every rule, returning the first violation."""
    for result in (
        check_unique_members(members),
        check_single_owner(owner_id, members),
        check_member_ceiling(members, settings),
        check_guest_policy(members, settings),
        check_invitations(invitations),
    ):
        if result.is_err():
            return result
    return ok()


__all__ = [
    "check_guest_policy",
    "check_invitations",
    "check_member_ceiling",
    "check_single_owner",
    "check_team_invariants",
    "check_unique_members",
]
