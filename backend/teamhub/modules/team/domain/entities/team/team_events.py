"""
Team Entity Events

Domain events emitted by the Team aggregate. Every event is a frozen
pydantic model whose ``event_type`` is pinned with a ``Literal``, which makes
``TeamEvent`` a discriminated union that can be rebuilt from stored dicts.
"""

from datetime import datetime
from typing import Annotated, Any, Literal, Union

from pydantic import Field, TypeAdapter

from teamhub.core.domain.base import DomainEvent

from .team_enums import TeamRole


class TeamDomainEvent(DomainEvent):
    """Base class for all team events; ``aggregate_id`` is the team id."""

    @property
    def team_id(self) -> str:
        return self.aggregate_id


# =============================================================================
# Team Lifecycle Events
# =============================================================================


class TeamCreated(TeamDomainEvent):
    """Event raised when a new team is created."""

    event_type: Literal["TeamCreated"] = "TeamCreated"
    name: str
    owner_id: str
    description: str | None = None
    member_ids: list[str] = Field(default_factory=list)


class TeamUpdated(TeamDomainEvent):
    """Event raised when name, description or settings change."""

    event_type: Literal["TeamUpdated"] = "TeamUpdated"
    changed_fields: list[str]
    changes: dict[str, Any] = Field(default_factory=dict)


# =============================================================================
# Membership Events
# =============================================================================


class TeamMemberJoined(TeamDomainEvent):
    """Event raised when a user becomes a member."""

    event_type: Literal["TeamMemberJoined"] = "TeamMemberJoined"
    user_id: str
    role: TeamRole


class TeamMemberLeft(TeamDomainEvent):
    """Event raised when a member is removed or leaves."""

    event_type: Literal["TeamMemberLeft"] = "TeamMemberLeft"
    user_id: str
    role: TeamRole


class TeamMemberRoleChanged(TeamDomainEvent):
    """Event raised when a member's role changes."""

    event_type: Literal["TeamMemberRoleChanged"] = "TeamMemberRoleChanged"
    user_id: str
    old_role: TeamRole
    new_role: TeamRole


class TeamOwnershipTransferred(TeamDomainEvent):
    """Event raised when ownership moves to another member."""

    event_type: Literal["TeamOwnershipTransferred"] = "TeamOwnershipTransferred"
    previous_owner_id: str
    new_owner_id: str
    previous_owner_role: TeamRole = TeamRole.ADMIN


# =============================================================================
# Invitation Events
# =============================================================================


class TeamInvitationSent(TeamDomainEvent):
    event_type: Literal["TeamInvitationSent"] = "TeamInvitationSent"
    invitation_id: str
    user_id: str
    invited_by: str
    role: TeamRole
    email: str | None = None
    expires_at: datetime | None = None


class TeamInvitationAccepted(TeamDomainEvent):
    event_type: Literal["TeamInvitationAccepted"] = "TeamInvitationAccepted"
    invitation_id: str
    user_id: str
    role: TeamRole


class TeamInvitationDeclined(TeamDomainEvent):
    event_type: Literal["TeamInvitationDeclined"] = "TeamInvitationDeclined"
    invitation_id: str
    user_id: str


class TeamInvitationExpired(TeamDomainEvent):
    event_type: Literal["TeamInvitationExpired"] = "TeamInvitationExpired"
    invitation_id: str
    user_id: str


TeamEvent = Annotated[
    Union[
        TeamCreated,
        TeamUpdated,
        TeamMemberJoined,
        TeamMemberLeft,
        TeamMemberRoleChanged,
        TeamOwnershipTransferred,
        TeamInvitationSent,
        TeamInvitationAccepted,
        TeamInvitationDeclined,
        TeamInvitationExpired,
    ],
    Field(discriminator="event_type"),
]

_team_event_adapter: TypeAdapter[TeamEvent] = TypeAdapter(TeamEvent)


def parse_team_event(data: dict[str, Any]) -> TeamDomainEvent:
    """
    Rebuild a team event from its ``to_dict()`` form.

    Raises:
        pydantic.ValidationError: If ``event_type`` is unknown or fields are invalid
    """
    return _team_event_adapter.validate_python(data)


__all__ = [
    "TeamCreated",
    "TeamDomainEvent",
    "TeamEvent",
    "TeamInvitationAccepted",
    "TeamInvitationDeclined",
    "TeamInvitationExpired",
    "TeamInvitationSent",
    "TeamMemberJoined",
    "TeamMemberLeft",
    "TeamMemberRoleChanged",
    "TeamOwnershipTransferred",
    "TeamUpdated",
    "parse_team_event",
]
