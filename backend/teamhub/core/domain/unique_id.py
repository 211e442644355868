"""Opaque identifier value object."""

from dataclasses import dataclass, field
from typing import Any
from uuid import uuid4

from teamhub.core.errors import ValidationError


@dataclass(frozen=True, slots=True)
class UniqueId:
    """
    Opaque, comparable identifier.

    ``UniqueId()`` generates a fresh UUID4 string; ``UniqueId("u1")`` wraps an
    existing identifier. Equality and hashing use the string value only, so
    identifiers from different sources compare equal when their text matches.
    """

    value: str = field(default_factory=lambda: str(uuid4()))

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise ValidationError(
                f"UniqueId value must be a string, got {type(self.value).__name__}",
                field="value",
            )

        stripped = self.value.strip()
        if not stripped:
            raise ValidationError("UniqueId cannot be empty", field="value")

        if stripped != self.value:
            object.__setattr__(self, "value", stripped)

    @classmethod
    def generate(cls) -> "UniqueId":
        return cls()

    @classmethod
    def coerce(cls, value: Any) -> "UniqueId":
        """Accept an existing ``UniqueId`` or anything with a string form."""
        if isinstance(value, UniqueId):
            return value
        if value is None:
            raise ValidationError("UniqueId cannot be None", field="value")
        return cls(str(value))

    @classmethod
    def is_valid(cls, value: Any) -> bool:
        if isinstance(value, UniqueId):
            return True
        return isinstance(value, str) and bool(value.strip())

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"UniqueId({self.value!r})"


__all__ = ["UniqueId"]
