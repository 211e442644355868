"""Enums used by settings and logging."""

import logging
from enum import Enum


class Environment(Enum):
    """Deployment environment, read from ``TEAMHUB_ENVIRONMENT``."""

    DEVELOPMENT = "dev"
    TESTING = "test"
    STAGING = "staging"
    PRODUCTION = "prod"

    @property
    def is_production(self) -> bool:
        return self is Environment.PRODUCTION


class LogLevel(Enum):
    # Values are the stdlib logging levels so ordering comes for free.
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @property
    def level_name(self) -> str:
        return self.name

    @property
    def priority(self) -> int:
        return self.value

    @classmethod
    def from_string(cls, text: str) -> "LogLevel":
        """Parse a level name such as ``"debug"`` or ``"WARNING"``."""
        try:
            return cls[text.strip().upper()]
        except KeyError:
            raise ValueError(f"Invalid log level: {text}") from None

    def to_logging_level(self) -> int:
        return self.value


class LogFormat(Enum):
    JSON = "json"
    CONSOLE = "console"

    def __str__(self) -> str:
        return self.value


__all__ = ["Environment", "LogFormat", "LogLevel"]
