"""Structured logging for taskparse.

Events are emitted with structlog and rendered through the standard library
logger named "taskparse", so an application embedding the parser keeps
control of levels. Output goes to stderr by default: the command line front
end prints its results as JSON on stdout.

Parse events are logged at debug level; a parse never logs above it.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, TextIO

import structlog

from taskparse.config import Settings
from taskparse.config import settings as default_settings

if TYPE_CHECKING:
    from structlog.typing import Processor

PACKAGE_LOGGER = "taskparse"

_handler: logging.Handler | None = None
_configured = False


class _StderrHandler(logging.StreamHandler):  # type: ignore[type-arg]
    """Writes to the current sys.stderr, even after it has been replaced."""

    @property  # type: ignore[override]
    def stream(self) -> TextIO:
        return sys.stderr

    @stream.setter
    def stream(self, value: TextIO) -> None:
        pass


def _level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def _processors(format: str, colors: bool) -> list[Processor]:
    shared: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if format.lower() == "json":
        return [
            *shared,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [*shared, structlog.dev.ConsoleRenderer(colors=colors)]


def configure_logging(
    level: str = "INFO",
    format: str = "json",
    stream: TextIO | None = None,
) -> None:
    """Configure structured logging for taskparse.

    Safe to call repeatedly: the handler installed by the previous call is
    replaced, so level, format and stream all follow the latest call.

    Args:
        level: Log level name; unknown names fall back to INFO.
        format: "json" for machine-readable lines, "text" for a console view.
        stream: Destination; defaults to stderr.

    Example:
        ```python
        from taskparse.logging import configure_logging, get_logger

        configure_logging(level="DEBUG", format="text")
        get_logger(__name__).debug("task_parsed", title="Buy groceries")
        ```
    """
    global _handler, _configured

    log_level = _level(level)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if _handler is not None:
        package_logger.removeHandler(_handler)
    _handler = logging.StreamHandler(stream) if stream is not None else _StderrHandler()
    _handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(_handler)
    package_logger.setLevel(log_level)
    package_logger.propagate = False

    structlog.configure(
        processors=_processors(format, colors=(stream or sys.stderr).isatty()),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _configured = True


def configure_from_settings(settings: Settings) -> None:
    """Apply the log level and format from ``settings``."""
    configure_logging(level=settings.log_level, format=settings.log_format)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger, configuring from the global settings on first use.

    Args:
        name: Logger name, normally the calling module's ``__name__``.
    """
    if not _configured:
        configure_from_settings(default_settings)

    return structlog.get_logger(name)  # type: ignore[no-any-return]


def bind_context(**kwargs: object) -> None:
    """Bind key-value pairs to every subsequent event in this context.

    Useful for caller-supplied ids, e.g. the chat or session a message
    came from.
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()


def unbind_context(*keys: str) -> None:
    """Remove specific keys from the logging context."""
    structlog.contextvars.unbind_contextvars(*keys)


@contextmanager
def log_context(**kwargs: object) -> Iterator[None]:
    """Bind context for the duration of a ``with`` block.

    Previously bound values for the same keys are restored on exit.
    """
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield


logger = get_logger(PACKAGE_LOGGER)
