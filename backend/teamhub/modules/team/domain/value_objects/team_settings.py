"""
Team Settings Value Object

Privacy, capacity, notification, communication and delegation settings of a
team. Settings are immutable; ``update`` validates a partial mapping and
returns new settings.

Usage Example:
    settings = TeamSettings.create(max_members=10, allow_guests=True).unwrap()
    stricter = settings.update(
        {"communications": {"moderation_level": "strict"}}
    ).unwrap()
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from typing import Any

from teamhub.core.domain.base import ValueObject
from teamhub.core.result import Result, err, ok

from ..entities.team.team_constants import TEAM_DEFAULTS, TEAM_LIMITS
from ..entities.team.team_enums import ModerationLevel
from ..entities.team.team_errors import TeamError


@dataclass(frozen=True)
class NotificationSettings(ValueObject):
    new_members: bool = True
    member_left: bool = True
    role_changes: bool = True
    activity_updates: bool = True


@dataclass(frozen=True)
class CommunicationSettings(ValueObject):
    enable_chat: bool = True
    enable_forums: bool = False
    moderation_level: ModerationLevel = TEAM_DEFAULTS.MODERATION_LEVEL


@dataclass(frozen=True)
class PermissionSettings(ValueObject):
    """Delegation flags and content rules."""

    # What plain MEMBERs may do on top of the role table
    members_can_invite: bool = False
    members_can_remove: bool = False
    members_can_change_roles: bool = False

    restrict_file_sharing: bool = False
    allow_external_links: bool = True
    require_approval_for_posts: bool = False


_SECTIONS: dict[str, type[ValueObject]] = {
    "notifications": NotificationSettings,
    "communications": CommunicationSettings,
    "permissions": PermissionSettings,
}

_FLAGS = ("is_private", "requires_approval", "allow_guests")


@dataclass(frozen=True)
class TeamSettings(ValueObject):
    """Value object for team settings."""

    is_private: bool = TEAM_DEFAULTS.IS_PRIVATE
    requires_approval: bool = TEAM_DEFAULTS.REQUIRES_APPROVAL
    allow_guests: bool = TEAM_DEFAULTS.ALLOW_GUESTS
    max_members: int | None = TEAM_DEFAULTS.MAX_MEMBERS
    notifications: NotificationSettings = field(default_factory=NotificationSettings)
    communications: CommunicationSettings = field(default_factory=CommunicationSettings)
    permissions: PermissionSettings = field(default_factory=PermissionSettings)

    @classmethod
    def default(cls) -> "TeamSettings":
        return cls()

    @classmethod
    def create(cls, **overrides: Any) -> Result["TeamSettings", TeamError]:
        """Defaults with ``overrides`` applied and validated."""
        return cls.default().update(overrides)

    @classmethod
    def from_value(cls, value: "TeamSettings | Mapping[str, Any] | None") -> Result["TeamSettings", TeamError]:
        """Accept settings, a mapping of overrides, or ``None`` for defaults."""
        if value is None:
            return ok(cls.default())
        if isinstance(value, TeamSettings):
            return value.validated()
        if isinstance(value, Mapping):
            return cls.create(**value)
        return err(
            TeamError.invalid_settings(
                f"Settings must be TeamSettings or a mapping, got {type(value).__name__}"
            )
        )

    def update(self, changes: Mapping[str, Any]) -> Result["TeamSettings", TeamError]:
        """Return new settings with ``changes`` applied; unknown keys are rejected."""
        values: dict[str, Any] = {}

        for key, value in changes.items():
            if key in _FLAGS:
                if not isinstance(value, bool):
                    return err(_not_bool(key, value))
                values[key] = value

            elif key == "max_members":
                values[key] = value

            elif key in _SECTIONS:
                section = _merge_section(getattr(self, key), key, value)
                if section.is_err():
                    return section
                values[key] = section.value

            else:
                return err(
                    TeamError.invalid_settings(f"Unknown setting '{key}'", field=key)
                )

        return replace(self, **values).validated()

    def validated(self) -> Result["TeamSettings", TeamError]:
        max_members = self.max_members
        if max_members is not None:
            if isinstance(max_members, bool) or not isinstance(max_members, int):
                return err(
                    TeamError.invalid_settings(
                        "max_members must be an integer", field="max_members"
                    )
                )
            if not TEAM_LIMITS.MIN_MAX_MEMBERS <= max_members <= TEAM_LIMITS.MAX_MAX_MEMBERS:
                return err(
                    TeamError.invalid_settings(
                        f"max_members must be between {TEAM_LIMITS.MIN_MAX_MEMBERS} "
                        f"and {TEAM_LIMITS.MAX_MAX_MEMBERS}",
                        field="max_members",
                        value=max_members,
                    )
                )
        return ok(self)

    def allows_member_count(self, count: int) -> bool:
        return self.max_members is None or count <= self.max_members

    def __str__(self) -> str:
        return (
            f"TeamSettings(private={self.is_private}, "
            f"max_members={self.max_members}, allow_guests={self.allow_guests})"
        )


def _merge_section(
    current: ValueObject, name: str, value: Any
) -> Result[ValueObject, TeamError]:
    section_type = _SECTIONS[name]
    if isinstance(value, section_type):
        value = value.to_dict()
    if not isinstance(value, Mapping):
        return err(
            TeamError.invalid_settings(f"'{name}' must be a mapping", field=name)
        )

    known = {f.name for f in fields(section_type)}
    values: dict[str, Any] = {}
    for key, item in value.items():
        if key not in known:
            return err(
                TeamError.invalid_settings(
                    f"Unknown setting '{name}.{key}'", field=f"{name}.{key}"
                )
            )
        if key == "moderation_level":
            parsed = ModerationLevel.parse(item)
            if parsed.is_err():
                return parsed
            values[key] = parsed.value
        elif not isinstance(item, bool):
            return err(_not_bool(f"{name}.{key}", item))
        else:
            values[key] = item

    return ok(replace(current, **values))


def _not_bool(key: str, value: Any) -> TeamError:
    return TeamError.invalid_settings(
        f"'{key}' must be a boolean, got {type(value).__name__}", field=key
    )


__all__ = [
    "CommunicationSettings",
    "NotificationSettings",
    "PermissionSettings",
    "TeamSettings",
]
