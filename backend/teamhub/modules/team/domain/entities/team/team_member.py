"""
Team Member

A user's membership in a team. Members are immutable; a role change produces
a new member with the same ``user_id`` and ``joined_at``.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any

from teamhub.core.domain.base import ValueObject, utc_now
from teamhub.core.domain.unique_id import UniqueId
from teamhub.core.errors import ValidationError
from teamhub.core.result import Result, ok

from .team_enums import TeamRole
from .team_errors import TeamError


@dataclass(frozen=True, eq=False)
class TeamMember(ValueObject):
    """Membership value object. Identity is the ``user_id``."""

    user_id: UniqueId
    role: TeamRole = TeamRole.MEMBER
    joined_at: datetime = field(default_factory=utc_now)

    def __post_init__(self):
        object.__setattr__(self, "user_id", UniqueId.coerce(self.user_id))
        role = TeamRole.parse(self.role)
        if role.is_err():
            raise ValidationError(role.error.message, field="role")
        object.__setattr__(self, "role", role.value)

    @classmethod
    def create(
        cls,
        user_id: UniqueId | str,
        role: TeamRole | str = TeamRole.MEMBER,
        joined_at: datetime | None = None,
    ) -> Result["TeamMember", TeamError]:
        """Create a member, parsing ``role`` when given as text."""
        parsed = TeamRole.parse(role)
        if parsed.is_err():
            return parsed

        return ok(
            cls(
                user_id=UniqueId.coerce(user_id),
                role=parsed.value,
                joined_at=joined_at or utc_now(),
            )
        )

    def with_role(self, role: TeamRole) -> "TeamMember":
        return replace(self, role=role)

    @property
    def is_owner(self) -> bool:
        return self.role is TeamRole.OWNER

    @property
    def is_admin(self) -> bool:
        """Owner or admin."""
        return self.role in (TeamRole.OWNER, TeamRole.ADMIN)

    @property
    def is_guest(self) -> bool:
        return self.role is TeamRole.GUEST

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, TeamMember):
            return NotImplemented
        return self.user_id == other.user_id

    def __hash__(self) -> int:
        return hash(self.user_id)

    def __str__(self) -> str:
        return f"{self.user_id} ({self.role.value})"


__all__ = ["TeamMember"]
