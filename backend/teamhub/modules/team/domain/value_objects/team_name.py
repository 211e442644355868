"""
Team Name Value Object

Encapsulates and validates team names.
"""

from dataclasses import dataclass

from teamhub.core.domain.base import ValueObject
from teamhub.core.errors import ValidationError
from teamhub.core.result import Result, err, ok

from ..entities.team.team_constants import TEAM_LIMITS
from ..entities.team.team_errors import TeamError


@dataclass(frozen=True)
class TeamName(ValueObject):
    """Value object for team names. Surrounding whitespace is not kept."""

    value: str

    def __post_init__(self):
        failure = self.validate(self.value)
        if failure is not None:
            raise ValidationError(failure.message, field="name")

    @staticmethod
    def validate(value: str) -> TeamError | None:
        if not isinstance(value, str):
            return TeamError.name_too_short(TEAM_LIMITS.MIN_NAME_LENGTH)

        length = len(value.strip())
        if length < TEAM_LIMITS.MIN_NAME_LENGTH:
            return TeamError.name_too_short(TEAM_LIMITS.MIN_NAME_LENGTH)
        if length > TEAM_LIMITS.MAX_NAME_LENGTH:
            return TeamError.name_too_long(TEAM_LIMITS.MAX_NAME_LENGTH, length)
        return None

    @classmethod
    def create(cls, value: str) -> Result["TeamName", TeamError]:
        failure = cls.validate(value)
        if failure is not None:
            return err(failure)
        return ok(cls(value.strip()))

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"TeamName('{self.value}')"
