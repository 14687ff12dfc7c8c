import io
import json
import logging
from typing import Generator

import pytest
import structlog
from structlog.testing import capture_logs

from hooter import Hooter
from hooter.core.config import HooterSettings
from hooter.core.logging import LIBRARY_LOGGER, bound_context, configure_logging, get_logger


@pytest.fixture
def library_logger() -> Generator[logging.Logger, None, None]:
    """Restore the library logger and structlog defaults after a test."""
    library = logging.getLogger(LIBRARY_LOGGER)
    handlers = list(library.handlers)
    level = library.level
    yield library
    for handler in list(library.handlers):
        if handler not in handlers:
            library.removeHandler(handler)
    library.setLevel(level)
    if hasattr(library, "_hooter_handler"):
        del library._hooter_handler
    structlog.reset_defaults()


def test_library_is_silent_without_configuration(capsys):
    """Test that hooks and toots print nothing unless the host opts in."""
    bus = Hooter()
    bus.hook("a", lambda event: None)
    bus.toot_sync("a")
    bus.toot_sync("zzz")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""


def test_library_logger_has_null_handler():
    handlers = logging.getLogger(LIBRARY_LOGGER).handlers
    assert any(isinstance(handler, logging.NullHandler) for handler in handlers)


def test_get_logger_is_backed_by_stdlib_logger():
    with capture_logs() as logs:
        get_logger("hooter.test").info("hello", answer=42)

    assert logs == [{"event": "hello", "answer": 42, "log_level": "info"}]


def test_configure_logging_renders_json(library_logger):
    """Test that records reach the attached handler as JSON."""
    stream = io.StringIO()
    configure_logging(
        HooterSettings(environment="production", log_format="json", log_level="DEBUG"),
        handler=logging.StreamHandler(stream),
    )

    Hooter().toot_sync("user.created")

    record = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert record["event"] == "No hooks matched"
    assert record["event_type"] == "user.created"
    assert record["level"] == "debug"
    assert record["logger"] == "hooter.core.bus.hooter"


def test_configure_logging_respects_level(library_logger):
    stream = io.StringIO()
    configure_logging(
        HooterSettings(environment="production", log_format="json", log_level="WARNING"),
        handler=logging.StreamHandler(stream),
    )

    Hooter().toot_sync("user.created")

    assert stream.getvalue() == ""


def test_configure_logging_replaces_previous_handler(library_logger):
    settings = HooterSettings(log_format="console", log_level="DEBUG")

    first = configure_logging(settings, handler=logging.StreamHandler(io.StringIO()))
    second = configure_logging(settings, handler=logging.StreamHandler(io.StringIO()))

    assert first not in library_logger.handlers
    assert second in library_logger.handlers
    assert second not in logging.getLogger().handlers


def test_bound_context_binds_and_unbinds():
    with bound_context(bus="billing"):
        assert structlog.contextvars.get_contextvars()["bus"] == "billing"

    assert "bus" not in structlog.contextvars.get_contextvars()
