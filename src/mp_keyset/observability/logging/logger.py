"""Observability – Logger protocol and get_logger helper."""
from __future__ import annotations

from typing import Any, Protocol

import structlog


class Logger(Protocol):
    """Minimal logger protocol satisfied by structlog bound loggers."""

    def debug(self, event: str, **kw: Any) -> None: ...
    def info(self, event: str, **kw: Any) -> None: ...
    def warning(self, event: str, **kw: Any) -> None: ...
    def error(self, event: str, **kw: Any) -> None: ...


def get_logger(name: str | None = None, **initial_values: Any) -> Logger:
    """Return a structlog logger named *name* with *initial_values* bound.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs bound on every event of the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


__all__ = ["Logger", "get_logger"]
