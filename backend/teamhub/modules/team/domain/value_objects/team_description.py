"""Team Description Value Object."""

from dataclasses import dataclass

from teamhub.core.domain.base import ValueObject
from teamhub.core.errors import ValidationError
from teamhub.core.result import Result, err, ok

from ..entities.team.team_constants import TEAM_LIMITS
from ..entities.team.team_errors import TeamError


@dataclass(frozen=True)
class TeamDescription(ValueObject):
    """Free-text team description, at most ``MAX_DESCRIPTION_LENGTH`` characters."""

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise ValidationError("Team description must be a string", field="description")
        if len(self.value) > TEAM_LIMITS.MAX_DESCRIPTION_LENGTH:
            raise ValidationError(
                f"Team description cannot exceed {TEAM_LIMITS.MAX_DESCRIPTION_LENGTH} characters",
                field="description",
            )

    @classmethod
    def create(cls, value: str) -> Result["TeamDescription", TeamError]:
        text = (value or "").strip()
        if len(text) > TEAM_LIMITS.MAX_DESCRIPTION_LENGTH:
            return err(
                TeamError.description_too_long(
                    TEAM_LIMITS.MAX_DESCRIPTION_LENGTH, len(text)
                )
            )
        return ok(cls(text))

    @property
    def is_empty(self) -> bool:
        return not self.value

    def __str__(self) -> str:
        return self.value
