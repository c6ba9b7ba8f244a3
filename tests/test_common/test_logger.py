"""
Tests for structured logging setup.
"""

import structlog

from adtags.common.config import LoggingSettings, Settings
from adtags.common.logger import AppContext, build_processors


def test_app_context_stamps_events() -> None:
    processor = AppContext("AdTags", "test")

    event = processor(None, "info", {"event": "Footer tag rendered"})

    assert event == {"event": "Footer tag rendered", "app": "AdTags", "env": "test"}


def test_app_context_keeps_explicit_values() -> None:
    event = AppContext("AdTags", "test")(None, "info", {"event": "x", "env": "prod"})

    assert event["env"] == "prod"


def test_json_format_renders_json() -> None:
    settings = Settings(env="prod", logging=LoggingSettings(format="json"))

    processors = build_processors(settings)

    assert isinstance(processors[1], AppContext)
    assert processors[1].env == "prod"
    assert isinstance(processors[-1], structlog.processors.JSONRenderer)


def test_console_format_renders_console() -> None:
    settings = Settings(env="dev", logging=LoggingSettings(format="console"))

    processors = build_processors(settings)

    assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
