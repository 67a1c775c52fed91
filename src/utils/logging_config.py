"""Structured logging configuration.

Every module logs through structlog with ISO timestamps and JSON lines.
Output is routed through the standard logging tree, so the host application
decides handlers and levels; unconfigured, warnings and above go to stderr.
"""

from __future__ import annotations

from typing import Any

import structlog

_configured = False


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger with structured output.
    """
    global _configured
    if not _configured:
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.add_log_level,
                structlog.processors.JSONRenderer(),
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        _configured = True
    return structlog.get_logger(name)
