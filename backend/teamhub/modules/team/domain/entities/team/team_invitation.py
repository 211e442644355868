"""
Team Invitation

An invitation for a user to join a team. Invitations are immutable: every
transition returns a new invitation wrapped in a ``Result`` and the team
aggregate swaps it in.

Status moves only from ``pending`` to one of ``accepted``, ``declined`` or
``expired``. ``responded_at`` is set exactly when the status leaves
``pending``.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import Any

from teamhub.core.domain.base import ValueObject, utc_now
from teamhub.core.domain.unique_id import UniqueId
from teamhub.core.errors import ValidationError
from teamhub.core.result import Result, err, ok

from .team_constants import TEAM_DEFAULTS, TEAM_LIMITS
from .team_enums import InvitationStatus, TeamRole
from .team_errors import TeamError


@dataclass(frozen=True, eq=False)
class TeamInvitation(ValueObject):
    """Invitation value object. Identity is the invitation ``id``."""

    id: UniqueId
    team_id: UniqueId
    user_id: UniqueId
    invited_by: UniqueId
    role: TeamRole = TeamRole.MEMBER
    email: str | None = None
    status: InvitationStatus = InvitationStatus.PENDING
    expires_at: datetime | None = None
    created_at: datetime = field(default_factory=utc_now)
    responded_at: datetime | None = None

    def __post_init__(self):
        for name in ("id", "team_id", "user_id", "invited_by"):
            object.__setattr__(self, name, UniqueId.coerce(getattr(self, name)))
        for name, parser in (("role", TeamRole.parse), ("status", InvitationStatus.parse)):
            parsed = parser(getattr(self, name))
            if parsed.is_err():
                raise ValidationError(parsed.error.message, field=name)
            object.__setattr__(self, name, parsed.value)

    @classmethod
    def create(
        cls,
        team_id: UniqueId | str,
        user_id: UniqueId | str,
        invited_by: UniqueId | str,
        role: TeamRole | str = TEAM_DEFAULTS.DEFAULT_INVITATION_ROLE,
        email: str | None = None,
        expires_at: datetime | None = None,
        expires_in_days: int | None = TEAM_LIMITS.INVITATION_EXPIRY_DAYS,
        now: datetime | None = None,
    ) -> Result["TeamInvitation", TeamError]:
        """
        Create a pending invitation.

        ``expires_at`` wins over ``expires_in_days``; pass both as ``None`` for
        an invitation that never expires. Inviting someone as OWNER is rejected
        because ownership only moves through an explicit transfer.
        """
        parsed = TeamRole.parse(role)
        if parsed.is_err():
            return parsed
        if parsed.value is TeamRole.OWNER:
            return err(
                TeamError.invalid_role(
                    TeamRole.OWNER, "Users cannot be invited as team owner"
                )
            )

        created_at = now or utc_now()
        if expires_at is None and expires_in_days is not None:
            if expires_in_days < 1:
                return err(
                    TeamError.invalid_invitation_state(
                        "Invitation expiry must be at least one day",
                        expires_in_days=expires_in_days,
                    )
                )
            expires_at = created_at + timedelta(days=expires_in_days)

        if expires_at is not None and expires_at <= created_at:
            return err(
                TeamError.invalid_invitation_state(
                    "Invitation cannot expire before it is created",
                    expires_at=expires_at.isoformat(),
                )
            )

        if email is not None:
            email = email.strip() or None

        return ok(
            cls(
                id=UniqueId(),
                team_id=UniqueId.coerce(team_id),
                user_id=UniqueId.coerce(user_id),
                invited_by=UniqueId.coerce(invited_by),
                role=parsed.value,
                email=email,
                expires_at=expires_at,
                created_at=created_at,
            )
        )

    @property
    def is_pending(self) -> bool:
        return self.status is InvitationStatus.PENDING

    def is_expired(self, now: datetime | None = None) -> bool:
        """Expired either explicitly or by being pending past ``expires_at``."""
        if self.status is InvitationStatus.EXPIRED:
            return True
        if not self.is_pending or self.expires_at is None:
            return False
        return (now or utc_now()) >= self.expires_at

    def accept(self, now: datetime | None = None) -> Result["TeamInvitation", TeamError]:
        return self._respond(InvitationStatus.ACCEPTED, now)

    def decline(self, now: datetime | None = None) -> Result["TeamInvitation", TeamError]:
        return self._respond(InvitationStatus.DECLINED, now)

    def expire(self, now: datetime | None = None) -> Result["TeamInvitation", TeamError]:
        return self._transition(InvitationStatus.EXPIRED, now or utc_now())

    def _respond(
        self, target: InvitationStatus, now: datetime | None
    ) -> Result["TeamInvitation", TeamError]:
        now = now or utc_now()
        if self.is_pending and self.is_expired(now):
            return err(TeamError.invitation_expired(self.id))
        return self._transition(target, now)

    def _transition(
        self, target: InvitationStatus, now: datetime
    ) -> Result["TeamInvitation", TeamError]:
        if not self.status.can_transition_to(target):
            return err(TeamError.invitation_not_pending(self.id, self.status))
        return ok(replace(self, status=target, responded_at=now))

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, TeamInvitation):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return f"Invitation {self.id} for {self.user_id} ({self.status.value})"


__all__ = ["TeamInvitation"]
