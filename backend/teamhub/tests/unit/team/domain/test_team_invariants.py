"""Test cases for the structural team invariants."""

from datetime import timedelta

from teamhub.core.domain.unique_id import UniqueId
from teamhub.modules.team.domain.entities.team.team_enums import InvitationStatus, TeamRole
from teamhub.modules.team.domain.entities.team.team_errors import TeamErrorCode
from teamhub.modules.team.domain.rules.team_invariants import (
    check_invitations,
    check_single_owner,
    check_team_invariants,
)
from teamhub.modules.team.domain.value_objects.team_settings import TeamSettings


def owner_and_members(member_factory, count=2):
    owner = member_factory(role=TeamRole.OWNER)
    return owner, [owner] + [member_factory() for _ in range(count)]


class TestSingleOwner:
    def test_valid(self, member_factory):
        owner, members = owner_and_members(member_factory)

        assert check_single_owner(owner.user_id, members).is_ok()

    def test_no_owner(self, member_factory):
        members = [member_factory(), member_factory()]

        result = check_single_owner(UniqueId("nobody"), members)

        assert result.error.code is TeamErrorCode.INVALID_OWNER

    def test_two_owners(self, member_factory):
        owner, members = owner_and_members(member_factory)
        usurper = member_factory(role=TeamRole.OWNER)

        result = check_single_owner(owner.user_id, members + [usurper])

        assert result.error.code is TeamErrorCode.ONLY_ONE_OWNER_ALLOWED
        assert result.error.details["user_id"] == str(usurper.user_id)

    def test_owner_member_must_match_owner_id(self, member_factory):
        _, members = owner_and_members(member_factory)

        result = check_single_owner(UniqueId("someone-else"), members)

        assert result.error.code is TeamErrorCode.ONLY_ONE_OWNER_ALLOWED


class TestTeamInvariants:
    def test_duplicate_members(self, member_factory):
        owner, members = owner_and_members(member_factory)
        duplicate = member_factory(user_id=members[1].user_id, role=TeamRole.ADMIN)

        result = check_team_invariants(
            owner.user_id, members + [duplicate], [], TeamSettings()
        )

        assert result.error.code is TeamErrorCode.MEMBER_ALREADY_EXISTS

    def test_member_ceiling(self, member_factory):
        owner, members = owner_and_members(member_factory, count=2)
        settings = TeamSettings.create(max_members=2).unwrap()

        result = check_team_invariants(owner.user_id, members, [], settings)

        assert result.error.code is TeamErrorCode.MAX_MEMBERS_EXCEEDED

    def test_guest_requires_allow_guests(self, member_factory):
        owner, members = owner_and_members(member_factory)
        members.append(member_factory(role=TeamRole.GUEST))

        blocked = check_team_invariants(owner.user_id, members, [], TeamSettings())
        allowed = check_team_invariants(
            owner.user_id, members, [], TeamSettings.create(allow_guests=True).unwrap()
        )

        assert blocked.error.code is TeamErrorCode.INVALID_ROLE
        assert allowed.is_ok()


class TestInvitationInvariants:
    def test_one_pending_invitation_per_user(self, invitation_factory):
        first = invitation_factory()
        second = invitation_factory(user_id=first.user_id)

        result = check_invitations([first, second])

        assert result.error.code is TeamErrorCode.INVITATION_ALREADY_EXISTS

    def test_answered_invitation_needs_responded_at(self, invitation_factory):
        broken = invitation_factory(status=InvitationStatus.ACCEPTED)

        result = check_invitations([broken])

        assert result.error.code is TeamErrorCode.INVALID_INVITATION_STATE

    def test_pending_invitation_cannot_have_responded_at(self, invitation_factory, now):
        broken = invitation_factory(responded_at=now + timedelta(hours=1))

        assert check_invitations([broken]).is_err()

    def test_answered_and_pending_for_same_user(self, invitation_factory, now):
        declined = invitation_factory(status=InvitationStatus.DECLINED, responded_at=now)
        pending = invitation_factory(user_id=declined.user_id)

        assert check_invitations([declined, pending]).is_ok()
