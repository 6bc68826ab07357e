"""Structured logging for the workspace store, codec and HTTP surface."""

from __future__ import annotations

import logging
from typing import Any

import structlog


_configured = False


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level or "INFO").strip().upper(), logging.INFO)


def configure_logging(
    level: str | int = "INFO",
    json_logs: bool = False,
    *,
    force: bool = False,
) -> None:
    """Route structlog events through a level filter to stdout.

    Later calls are no-ops unless `force` is set; both startup and the API
    lifespan call this.
    """
    global _configured
    if _configured and not force:
        return

    log_level = _resolve_level(level)
    logging.basicConfig(level=log_level, format="%(message)s", force=force)

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]
    if json_logs:
        processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=not force,
    )
    _configured = True
