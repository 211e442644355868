"""Test cases for TeamInvitation transitions."""

from datetime import timedelta

import pytest

from teamhub.core.errors import ValidationError
from teamhub.modules.team.domain.entities.team.team_enums import InvitationStatus, TeamRole
from teamhub.modules.team.domain.entities.team.team_errors import TeamErrorCode
from teamhub.modules.team.domain.entities.team.team_invitation import TeamInvitation


class TestInvitationCreation:
    def test_defaults(self, now):
        invitation = TeamInvitation.create("t1", "u2", "u1", now=now).unwrap()

        assert invitation.is_pending
        assert invitation.role is TeamRole.MEMBER
        assert invitation.expires_at == now + timedelta(days=7)
        assert invitation.responded_at is None

    def test_explicit_expiry_wins(self, now):
        expires_at = now + timedelta(hours=2)

        invitation = TeamInvitation.create(
            "t1", "u2", "u1", expires_at=expires_at, now=now
        ).unwrap()

        assert invitation.expires_at == expires_at

    def test_never_expires(self, now):
        invitation = TeamInvitation.create(
            "t1", "u2", "u1", expires_in_days=None, now=now
        ).unwrap()

        assert not invitation.is_expired(now + timedelta(days=3650))

    def test_owner_role_rejected(self):
        result = TeamInvitation.create("t1", "u2", "u1", role=TeamRole.OWNER)

        assert result.error.code is TeamErrorCode.INVALID_ROLE

    @pytest.mark.parametrize("days", [0, -3])
    def test_expiry_must_be_positive(self, days):
        result = TeamInvitation.create("t1", "u2", "u1", expires_in_days=days)

        assert result.error.code is TeamErrorCode.INVALID_INVITATION_STATE

    def test_expiry_in_the_past(self, now):
        result = TeamInvitation.create(
            "t1", "u2", "u1", expires_at=now - timedelta(seconds=1), now=now
        )

        assert result.error.code is TeamErrorCode.INVALID_INVITATION_STATE

    def test_blank_email_dropped(self):
        assert TeamInvitation.create("t1", "u2", "u1", email="  ").unwrap().email is None


class TestInvitationFromText:
    def test_role_and_status_are_parsed(self, now):
        invitation = TeamInvitation(
            id="i1",
            team_id="t1",
            user_id="u2",
            invited_by="u1",
            role="admin",
            status="pending",
            created_at=now,
        )

        assert invitation.role is TeamRole.ADMIN
        assert invitation.status is InvitationStatus.PENDING
        assert invitation.is_pending

    def test_answered_status_from_text(self, now):
        invitation = TeamInvitation(
            id="i1", team_id="t1", user_id="u2", invited_by="u1", status="DECLINED"
        )

        assert not invitation.is_pending
        assert invitation.accept(now).error.code is TeamErrorCode.INVITATION_NOT_PENDING

    @pytest.mark.parametrize("field,value", [("role", "boss"), ("status", "maybe")])
    def test_unknown_text_raises(self, field, value):
        with pytest.raises(ValidationError) as exc:
            TeamInvitation(
                id="i1", team_id="t1", user_id="u2", invited_by="u1", **{field: value}
            )

        assert exc.value.details["field"] == field


class TestInvitationTransitions:
    def test_accept(self, invitation_factory, now):
        invitation = invitation_factory()

        accepted = invitation.accept(now).unwrap()

        assert accepted.status is InvitationStatus.ACCEPTED
        assert accepted.responded_at == now
        assert accepted == invitation
        assert invitation.is_pending

    def test_decline(self, invitation_factory, now):
        declined = invitation_factory().decline(now).unwrap()

        assert declined.status is InvitationStatus.DECLINED
        assert declined.responded_at == now

    def test_answer_twice(self, invitation_factory, now):
        accepted = invitation_factory().accept(now).unwrap()

        result = accepted.decline(now)

        assert result.error.code is TeamErrorCode.INVITATION_NOT_PENDING

    def test_accept_after_expiry(self, invitation_factory, now):
        invitation = invitation_factory()

        result = invitation.accept(invitation.expires_at)

        assert result.error.code is TeamErrorCode.INVITATION_EXPIRED

    def test_expire(self, invitation_factory, now):
        expired = invitation_factory().expire(now).unwrap()

        assert expired.status is InvitationStatus.EXPIRED
        assert expired.is_expired()
        assert expired.expire(now).error.code is TeamErrorCode.INVITATION_NOT_PENDING

    def test_status_transitions(self):
        assert InvitationStatus.PENDING.can_transition_to(InvitationStatus.ACCEPTED)
        assert not InvitationStatus.ACCEPTED.can_transition_to(InvitationStatus.DECLINED)
        assert InvitationStatus.EXPIRED.is_final
