"""Team value objects."""

from .team_description import TeamDescription
from .team_name import TeamName
from .team_settings import (
    CommunicationSettings,
    NotificationSettings,
    PermissionSettings,
    TeamSettings,
)

__all__ = [
    "CommunicationSettings",
    "NotificationSettings",
    "PermissionSettings",
    "TeamDescription",
    "TeamName",
    "TeamSettings",
]
