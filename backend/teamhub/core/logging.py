# ruff: noqa: A005
"""Structured logging on top of structlog.

Modules obtain a logger with ``get_logger(__name__)`` and log key/value events,
e.g. ``logger.info("team_created", team_id=team_id)``. The domain layer does
not log; the application service and the event bus do.
"""

import logging
import sys
from dataclasses import dataclass
from typing import Any

import structlog

from teamhub.core.enums import Environment, LogFormat, LogLevel
from teamhub.core.errors import ConfigurationError

MIN_MESSAGE_LENGTH = 1000

_CALLSITE_PARAMETERS = (
    structlog.processors.CallsiteParameter.FILENAME,
    structlog.processors.CallsiteParameter.LINENO,
    structlog.processors.CallsiteParameter.FUNC_NAME,
)


@dataclass
class LogConfig:
    """
    How log records are rendered.

    The environment wins over explicit ``format`` and ``enable_caller_info``
    values: development and testing render to the console, production renders
    JSON and never logs below INFO.
    """

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.JSON
    environment: Environment = Environment.DEVELOPMENT
    enable_timestamps: bool = True
    enable_caller_info: bool = False
    enable_exception_info: bool = True
    max_message_length: int = 10000

    def __post_init__(self):
        self.validate()
        self.apply_environment_defaults()

    def validate(self) -> None:
        if not isinstance(self.level, LogLevel):
            raise ConfigurationError(f"Invalid log level: {self.level!r}", config_key="level")
        if self.max_message_length < MIN_MESSAGE_LENGTH:
            raise ConfigurationError(
                f"max_message_length must be at least {MIN_MESSAGE_LENGTH}",
                config_key="max_message_length",
            )

    def apply_environment_defaults(self) -> None:
        env = self.environment
        if env is Environment.PRODUCTION:
            self.level = max(self.level, LogLevel.INFO, key=lambda lvl: lvl.priority)
            self.format = LogFormat.JSON
            self.enable_caller_info = False
        elif env in (Environment.DEVELOPMENT, Environment.TESTING):
            self.format = LogFormat.CONSOLE
            self.enable_caller_info = env is Environment.DEVELOPMENT

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level.level_name,
            "format": self.format.value,
            "environment": self.environment.value,
            "enable_timestamps": self.enable_timestamps,
            "enable_caller_info": self.enable_caller_info,
            "enable_exception_info": self.enable_exception_info,
        }


def _truncating(limit: int):
    """Processor that cuts overly long event messages."""

    def processor(_logger, _method, event_dict):
        event = event_dict.get("event")
        if isinstance(event, str) and len(event) > limit:
            event_dict["event"] = event[:limit] + "...[truncated]"
        return event_dict

    return processor


class LoggerFactory:
    """Owns the structlog configuration built from a ``LogConfig``."""

    def __init__(self, config: LogConfig):
        self.config = config
        self._configured = False

    @property
    def is_configured(self) -> bool:
        return self._configured

    def build_processors(self) -> list[Any]:
        """Return the processor chain; the renderer is always last."""
        cfg = self.config
        chain: list[Any] = [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            _truncating(cfg.max_message_length),
        ]
        if cfg.enable_timestamps:
            chain.append(structlog.processors.TimeStamper(fmt="iso", utc=True))
        if cfg.enable_caller_info:
            chain.append(
                structlog.processors.CallsiteParameterAdder(parameters=list(_CALLSITE_PARAMETERS))
            )
        if cfg.enable_exception_info:
            chain += [structlog.processors.StackInfoRenderer(), structlog.processors.format_exc_info]
        chain.append(structlog.processors.UnicodeDecoder())
        chain.append(self._renderer())
        return chain

    def _renderer(self) -> Any:
        if self.config.format is LogFormat.JSON:
            return structlog.processors.JSONRenderer()
        return structlog.dev.ConsoleRenderer(colors=False)

    def configure_logging(self) -> None:
        if self._configured:
            return

        level = self.config.level.to_logging_level()
        structlog.configure(
            processors=self.build_processors(),
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
        logging.getLogger("teamhub").setLevel(level)
        self._configured = True

    def get_logger(self, name: str) -> structlog.stdlib.BoundLogger:
        self.configure_logging()
        return structlog.get_logger(name)


_factory: LoggerFactory | None = None


def configure_logging(config: LogConfig | None = None) -> LoggerFactory:
    """
    Install a logging configuration for the whole process.

    Args:
        config: Explicit configuration. Derived from ``get_settings()`` when
            omitted.

    Returns:
        LoggerFactory: The factory ``get_logger`` now delegates to.
    """
    global _factory  # noqa: PLW0603

    if config is None:
        from teamhub.core.config import get_settings

        settings = get_settings()
        config = LogConfig(
            level=settings.log_level,
            format=settings.log_format,
            environment=settings.environment,
        )

    _factory = LoggerFactory(config)
    _factory.configure_logging()
    return _factory


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    if _factory is None:
        configure_logging()
    return _factory.get_logger(name)


def log_context(**values: Any) -> None:
    """Bind values to every log line emitted in the current context."""
    structlog.contextvars.bind_contextvars(**values)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


__all__ = [
    "LogConfig",
    "LoggerFactory",
    "clear_context",
    "configure_logging",
    "get_logger",
    "log_context",
]
