"""Explicit success/failure values.

Domain operations report expected failures by returning ``Err(error)`` rather
than raising. Callers branch on ``is_ok()`` / ``is_err()`` and read ``value``
or ``error``; ``unwrap()`` on the wrong side is a programmer error and raises
``UnwrapError``.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from teamhub.core.errors import UnwrapError

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result wrapping ``value``."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_err(self) -> Any:
        raise UnwrapError(f"Called unwrap_err on Ok({self.value!r})")

    def unwrap_or(self, default: Any) -> T:
        return self.value

    def map(self, func: Callable[[T], U]) -> "Ok[U]":
        return Ok(func(self.value))

    def and_then(self, func: Callable[[T], "Result[U, Any]"]) -> "Result[U, Any]":
        return func(self.value)


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed result wrapping ``error``."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> Any:
        raise UnwrapError(
            f"Called unwrap on Err({self.error!r})",
            details={"error": str(self.error)},
        )

    def unwrap_err(self) -> E:
        return self.error

    def unwrap_or(self, default: U) -> U:
        return default

    def map(self, func: Callable[[Any], Any]) -> "Err[E]":
        return self

    def and_then(self, func: Callable[[Any], Any]) -> "Err[E]":
        return self


Result = Union[Ok[T], Err[E]]


def ok(value: T = None) -> Ok[T]:
    """Build a successful result. ``ok()`` stands for ``Ok(None)``."""
    return Ok(value)


def err(error: E) -> Err[E]:
    """Build a failed result."""
    return Err(error)


__all__ = ["Err", "Ok", "Result", "err", "ok"]
