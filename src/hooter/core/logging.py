"""Structured logging for Hooter.

Hooter is a library, so it never configures output on import. Records go
through stdlib loggers under the "hooter" namespace, which carries a
NullHandler; they stay silent until the host either configures stdlib
logging itself or calls configure_logging().
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor

from hooter.core.config import get_settings

LIBRARY_LOGGER = "hooter"


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger backed by the stdlib logger of the same name.

    Processors are resolved lazily from the structlog configuration in
    effect when the logger is used, so configure_logging() and
    structlog.testing.capture_logs() apply to module-level loggers too.
    """
    return structlog.wrap_logger(
        logging.getLogger(name or LIBRARY_LOGGER),
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def configure_logging(
    settings: Any | None = None,
    handler: logging.Handler | None = None,
) -> logging.Handler:
    """Opt in to Hooter's log output.

    Routes structlog through the stdlib and attaches one handler to the
    "hooter" logger, leaving the root logger alone. Calling it again
    replaces the handler installed by the previous call.

    Args:
        settings: Optional settings instance. If not provided, will load from environment.
        handler: Handler to format and attach. Defaults to a stderr stream handler.

    Returns:
        The attached handler.
    """
    if settings is None:
        settings = get_settings()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.is_development or settings.log_format == "console":
        renderers: list[Processor] = [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.dev.ConsoleRenderer(
                colors=False,
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ]
    else:
        renderers = [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=False,
    )

    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(processors=renderers))

    library_logger = logging.getLogger(LIBRARY_LOGGER)
    previous = getattr(library_logger, "_hooter_handler", None)
    if previous is not None:
        library_logger.removeHandler(previous)
    library_logger.addHandler(handler)
    library_logger._hooter_handler = handler  # type: ignore[attr-defined]
    library_logger.setLevel(getattr(logging, settings.log_level))

    return handler


def bound_context(**kwargs: Any) -> Any:
    """Bind context variables to every record logged inside the block.

    Example:
        with bound_context(bus="billing"):
            bus.toot("charged", 42)
    """
    return structlog.contextvars.bound_contextvars(**kwargs)
