"""
Team Entity Errors

Expected failures of team operations. They are returned inside ``Err`` rather
than raised, so each carries a closed ``code`` plus enough context for the
caller to render or log it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TeamErrorCode(str, Enum):
    """Closed set of team failure kinds."""

    INVALID_OWNER = "INVALID_OWNER"
    INVALID_ROLE = "INVALID_ROLE"
    MEMBER_ALREADY_EXISTS = "MEMBER_ALREADY_EXISTS"
    MEMBER_NOT_FOUND = "MEMBER_NOT_FOUND"
    ONLY_ONE_OWNER_ALLOWED = "ONLY_ONE_OWNER_ALLOWED"
    CANNOT_REMOVE_OWNER = "CANNOT_REMOVE_OWNER"
    CANNOT_CHANGE_OWNER_ROLE = "CANNOT_CHANGE_OWNER_ROLE"
    NAME_TOO_SHORT = "NAME_TOO_SHORT"
    NAME_TOO_LONG = "NAME_TOO_LONG"
    DESCRIPTION_TOO_LONG = "DESCRIPTION_TOO_LONG"
    MAX_MEMBERS_EXCEEDED = "MAX_MEMBERS_EXCEEDED"

    INVALID_SETTINGS = "INVALID_SETTINGS"
    INVITATION_NOT_FOUND = "INVITATION_NOT_FOUND"
    INVITATION_ALREADY_EXISTS = "INVITATION_ALREADY_EXISTS"
    INVITATION_NOT_PENDING = "INVITATION_NOT_PENDING"
    INVITATION_EXPIRED = "INVITATION_EXPIRED"
    INVALID_INVITATION_STATE = "INVALID_INVITATION_STATE"

    # Raised by the application layer and repositories
    TEAM_NOT_FOUND = "TEAM_NOT_FOUND"
    INSUFFICIENT_PERMISSIONS = "INSUFFICIENT_PERMISSIONS"
    PERSISTENCE_FAILED = "PERSISTENCE_FAILED"
    CONCURRENCY_CONFLICT = "CONCURRENCY_CONFLICT"

    @property
    def is_not_found(self) -> bool:
        return self in (
            TeamErrorCode.TEAM_NOT_FOUND,
            TeamErrorCode.MEMBER_NOT_FOUND,
            TeamErrorCode.INVITATION_NOT_FOUND,
        )

    @property
    def is_retryable(self) -> bool:
        return self is TeamErrorCode.CONCURRENCY_CONFLICT


@dataclass(frozen=True)
class TeamError:
    """A team operation failure."""

    code: TeamErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"code": self.code.value, "message": self.message}
        if self.details:
            data["details"] = dict(self.details)
        return data

    # Constructors

    @classmethod
    def invalid_owner(cls, owner_id: Any = None, reason: str | None = None) -> "TeamError":
        return cls(
            TeamErrorCode.INVALID_OWNER,
            reason or "Team owner id is missing or invalid",
            {"owner_id": _s(owner_id)},
        )

    @classmethod
    def invalid_role(cls, role: Any, reason: str | None = None) -> "TeamError":
        return cls(
            TeamErrorCode.INVALID_ROLE,
            reason or f"'{role}' is not a valid team role",
            {"role": _s(role)},
        )

    @classmethod
    def member_already_exists(cls, user_id: Any) -> "TeamError":
        return cls(
            TeamErrorCode.MEMBER_ALREADY_EXISTS,
            f"User {user_id} is already a member of the team",
            {"user_id": _s(user_id)},
        )

    @classmethod
    def member_not_found(cls, user_id: Any) -> "TeamError":
        return cls(
            TeamErrorCode.MEMBER_NOT_FOUND,
            f"User {user_id} is not a member of the team",
            {"user_id": _s(user_id)},
        )

    @classmethod
    def only_one_owner_allowed(cls, user_id: Any) -> "TeamError":
        return cls(
            TeamErrorCode.ONLY_ONE_OWNER_ALLOWED,
            "A team can only have one owner",
            {"user_id": _s(user_id)},
        )

    @classmethod
    def cannot_remove_owner(cls, owner_id: Any) -> "TeamError":
        return cls(
            TeamErrorCode.CANNOT_REMOVE_OWNER,
            "The team owner cannot be removed",
            {"owner_id": _s(owner_id)},
        )

    @classmethod
    def cannot_change_owner_role(cls, owner_id: Any) -> "TeamError":
        return cls(
            TeamErrorCode.CANNOT_CHANGE_OWNER_ROLE,
            "The team owner's role cannot be changed",
            {"owner_id": _s(owner_id)},
        )

    @classmethod
    def name_too_short(cls, min_length: int) -> "TeamError":
        return cls(
            TeamErrorCode.NAME_TOO_SHORT,
            f"Team name must be at least {min_length} characters",
            {"min_length": min_length},
        )

    @classmethod
    def name_too_long(cls, max_length: int, length: int) -> "TeamError":
        return cls(
            TeamErrorCode.NAME_TOO_LONG,
            f"Team name cannot exceed {max_length} characters",
            {"max_length": max_length, "length": length},
        )

    @classmethod
    def description_too_long(cls, max_length: int, length: int) -> "TeamError":
        return cls(
            TeamErrorCode.DESCRIPTION_TOO_LONG,
            f"Team description cannot exceed {max_length} characters",
            {"max_length": max_length, "length": length},
        )

    @classmethod
    def max_members_exceeded(cls, max_members: int, member_count: int) -> "TeamError":
        return cls(
            TeamErrorCode.MAX_MEMBERS_EXCEEDED,
            f"Team cannot have more than {max_members} members",
            {"max_members": max_members, "member_count": member_count},
        )

    @classmethod
    def invalid_settings(cls, reason: str, **details: Any) -> "TeamError":
        return cls(TeamErrorCode.INVALID_SETTINGS, reason, details)

    @classmethod
    def invitation_not_found(cls, user_id: Any) -> "TeamError":
        return cls(
            TeamErrorCode.INVITATION_NOT_FOUND,
            f"No invitation found for user {user_id}",
            {"user_id": _s(user_id)},
        )

    @classmethod
    def invitation_already_exists(cls, user_id: Any) -> "TeamError":
        return cls(
            TeamErrorCode.INVITATION_ALREADY_EXISTS,
            f"User {user_id} already has a pending invitation",
            {"user_id": _s(user_id)},
        )

    @classmethod
    def invitation_not_pending(cls, invitation_id: Any, status: Any) -> "TeamError":
        return cls(
            TeamErrorCode.INVITATION_NOT_PENDING,
            f"Invitation has already been {_s(status)}",
            {"invitation_id": _s(invitation_id), "status": _s(status)},
        )

    @classmethod
    def invitation_expired(cls, invitation_id: Any) -> "TeamError":
        return cls(
            TeamErrorCode.INVITATION_EXPIRED,
            "Invitation has expired",
            {"invitation_id": _s(invitation_id)},
        )

    @classmethod
    def invalid_invitation_state(cls, reason: str, **details: Any) -> "TeamError":
        return cls(TeamErrorCode.INVALID_INVITATION_STATE, reason, details)

    @classmethod
    def team_not_found(cls, team_id: Any) -> "TeamError":
        return cls(
            TeamErrorCode.TEAM_NOT_FOUND,
            f"Team {team_id} not found",
            {"team_id": _s(team_id)},
        )

    @classmethod
    def insufficient_permissions(cls, user_id: Any, permission: Any) -> "TeamError":
        return cls(
            TeamErrorCode.INSUFFICIENT_PERMISSIONS,
            f"User {user_id} is not allowed to {_s(permission)}",
            {"user_id": _s(user_id), "permission": _s(permission)},
        )

    @classmethod
    def persistence_failed(cls, reason: str, **details: Any) -> "TeamError":
        return cls(TeamErrorCode.PERSISTENCE_FAILED, reason, details)

    @classmethod
    def concurrency_conflict(
        cls, team_id: Any, expected_version: int, actual_version: int
    ) -> "TeamError":
        return cls(
            TeamErrorCode.CONCURRENCY_CONFLICT,
            f"Team {team_id} was modified concurrently",
            {
                "team_id": _s(team_id),
                "expected_version": expected_version,
                "actual_version": actual_version,
            },
        )


def _s(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


__all__ = ["TeamError", "TeamErrorCode"]
