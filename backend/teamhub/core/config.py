"""Settings read from ``TEAMHUB_*`` environment variables.

A ``.env`` file, when present, seeds variables that the process environment
does not already define. Values are converted and range-checked once, when
``Settings`` is built; ``get_settings`` caches the result.
"""

import os
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any

from teamhub.core.enums import Environment, LogFormat, LogLevel
from teamhub.core.errors import ConfigurationError

ENV_PREFIX = "TEAMHUB_"

_BOOLEANS = {
    "true": True,
    "1": True,
    "yes": True,
    "on": True,
    "false": False,
    "0": False,
    "no": False,
    "off": False,
}


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"":
        return text[1:-1]
    return text


def read_env_file(path: str | os.PathLike) -> dict[str, str]:
    """Parse ``KEY=value`` lines; blank lines and ``#`` comments are skipped."""
    pairs: dict[str, str] = {}
    for line in Path(path).read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if sep:
            pairs[key.strip()] = _unquote(value.strip())
    return pairs


class EnvironmentLoader:
    """
    Typed access to prefixed environment variables.

    Every getter takes the key without the prefix, a default used when the
    variable is unset or blank, and raises ``ConfigurationError`` naming the
    full variable when the value cannot be used.
    """

    def __init__(self, env_file: str | None = ".env", prefix: str = ENV_PREFIX):
        self.env_file = env_file
        self.prefix = prefix
        if env_file and os.path.isfile(env_file):
            self._seed_from(env_file)

    def _seed_from(self, env_file: str) -> None:
        try:
            pairs = read_env_file(env_file)
        except OSError as e:
            raise ConfigurationError(f"Cannot read {env_file}: {e}") from e
        for key, value in pairs.items():
            os.environ.setdefault(key, value)

    def _invalid(self, key: str, problem: str) -> ConfigurationError:
        name = f"{self.prefix}{key}"
        return ConfigurationError(f"{name} {problem}", config_key=name)

    def get_string(
        self, key: str, default: str | None = None, required: bool = False
    ) -> str | None:
        value = (os.environ.get(f"{self.prefix}{key}") or "").strip()
        if value:
            return value
        if required and default is None:
            raise self._invalid(key, "is required but not set")
        return default

    def get_integer(
        self,
        key: str,
        default: int | None = None,
        required: bool = False,
        min_value: int | None = None,
        max_value: int | None = None,
    ) -> int | None:
        raw = self.get_string(key, required=required and default is None)
        if raw is None:
            return default
        try:
            value = int(raw)
        except ValueError as e:
            raise self._invalid(key, f"must be an integer, got {raw!r}") from e

        if min_value is not None and value < min_value:
            raise self._invalid(key, f"must be >= {min_value}")
        if max_value is not None and value > max_value:
            raise self._invalid(key, f"must be <= {max_value}")
        return value

    def get_boolean(
        self, key: str, default: bool | None = None, required: bool = False
    ) -> bool | None:
        raw = self.get_string(key, required=required and default is None)
        if raw is None:
            return default
        try:
            return _BOOLEANS[raw.lower()]
        except KeyError:
            raise self._invalid(key, f"must be a boolean, got {raw!r}") from None

    def get_enum(
        self,
        key: str,
        enum_class: type[Enum],
        default: Enum | None = None,
        required: bool = False,
    ) -> Any:
        """Match ``raw`` against member values first, then names ignoring case."""
        raw = self.get_string(key, required=required and default is None)
        if raw is None:
            return default

        by_name = {member.name: member for member in enum_class}
        for member in enum_class:
            if member.value == raw:
                return member
        if raw.upper() in by_name:
            return by_name[raw.upper()]

        allowed = ", ".join(name.lower() for name in by_name)
        raise self._invalid(key, f"must be one of: {allowed}; got {raw!r}")


class Settings:
    """
    Typed settings for the package.

        settings = Settings(env_file=None)
        settings.invitation_expiry_days  # 7 unless TEAMHUB_INVITATION_EXPIRY_DAYS
    """

    def __init__(self, env_file: str | None = ".env"):
        env = EnvironmentLoader(env_file)

        self.environment = env.get_enum("ENVIRONMENT", Environment, Environment.DEVELOPMENT)
        self.log_level = env.get_enum("LOG_LEVEL", LogLevel, LogLevel.INFO)
        self.log_format = env.get_enum("LOG_FORMAT", LogFormat, LogFormat.JSON)

        self.invitation_expiry_days = env.get_integer(
            "INVITATION_EXPIRY_DAYS", 7, min_value=1, max_value=365
        )
        self.event_bus_fail_fast = env.get_boolean("EVENT_BUS_FAIL_FAST", False)

        if self.environment.is_production and self.log_level is LogLevel.DEBUG:
            raise ConfigurationError(
                "Debug logging is not allowed in production",
                config_key=f"{ENV_PREFIX}LOG_LEVEL",
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            "environment": self.environment.value,
            "log_level": self.log_level.level_name,
            "log_format": self.log_format.value,
            "invitation_expiry_days": self.invitation_expiry_days,
            "event_bus_fail_fast": self.event_bus_fail_fast,
        }


@lru_cache
def get_settings(env_file: str | None = ".env") -> Settings:
    """Build ``Settings`` once per ``env_file``; tests clear the cache."""
    return Settings(env_file)


__all__ = ["ENV_PREFIX", "EnvironmentLoader", "Settings", "get_settings", "read_env_file"]
