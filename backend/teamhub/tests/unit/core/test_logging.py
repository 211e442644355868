"""Test cases for logging configuration."""

import pytest
import structlog

from teamhub.core.enums import Environment, LogFormat, LogLevel
from teamhub.core.errors import ConfigurationError
from teamhub.core.logging import LogConfig, LoggerFactory, get_logger


class TestLogConfig:
    def test_production_forces_json_and_info(self):
        config = LogConfig(
            level=LogLevel.DEBUG,
            format=LogFormat.CONSOLE,
            environment=Environment.PRODUCTION,
        )

        assert config.level is LogLevel.INFO
        assert config.format is LogFormat.JSON
        assert config.enable_caller_info is False

    def test_testing_uses_console(self):
        config = LogConfig(environment=Environment.TESTING)

        assert config.format is LogFormat.CONSOLE
        assert config.to_dict()["environment"] == "test"

    def test_rejects_short_message_limit(self):
        with pytest.raises(ConfigurationError):
            LogConfig(max_message_length=10)


class TestLoggerFactory:
    def test_json_renderer_is_last_processor(self):
        factory = LoggerFactory(LogConfig(environment=Environment.PRODUCTION))

        processors = factory.build_processors()

        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_renderer_for_development(self):
        factory = LoggerFactory(LogConfig(environment=Environment.DEVELOPMENT))

        processors = factory.build_processors()

        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
        assert any(
            isinstance(p, structlog.processors.CallsiteParameterAdder) for p in processors
        )

    def test_get_logger_returns_bound_logger(self):
        logger = get_logger("teamhub.tests")

        logger.info("logging works", answer=42)

    def test_long_messages_are_truncated(self):
        config = LogConfig(environment=Environment.TESTING, max_message_length=1000)
        truncate = LoggerFactory(config).build_processors()[5]

        event = truncate(None, "info", {"event": "x" * 1500})

        assert event["event"] == "x" * 1000 + "...[truncated]"


class TestLogLevel:
    def test_from_string_is_case_insensitive(self):
        assert LogLevel.from_string(" debug ") is LogLevel.DEBUG

    def test_from_string_rejects_unknown(self):
        with pytest.raises(ValueError):
            LogLevel.from_string("loud")

    def test_priority_matches_stdlib(self):
        assert LogLevel.WARNING.to_logging_level() == 30
        assert LogLevel.ERROR.level_name == "ERROR"
