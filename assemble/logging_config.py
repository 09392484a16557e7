"""Structured logging for assemble.

The container emits structlog events (``entry_registered``,
``entry_resolved``, ``singleton_cache_hit`` and friends) and never configures
logging itself. Applications call ``configure_logging`` once at startup:

    from assemble.logging_config import configure_logging
    from assemble.settings import AssembleSettings

    configure_logging(AssembleSettings.from_env())
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from .settings import AssembleSettings

_SHARED_PROCESSORS: tuple[structlog.types.Processor, ...] = (
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
)


def _handler(log_file: Path | None) -> logging.Handler:
    if log_file is None:
        return logging.StreamHandler(sys.stderr)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(log_file, encoding="utf-8")


def configure_logging(
    settings: AssembleSettings | None = None,
    log_file: Path | None = None,
) -> None:
    """Route container events through stdlib logging.

    Reconfiguring replaces (and closes) the handler installed by the previous
    call.

    Args:
        settings: Source of ``log_level`` and ``json_logs`` (defaults if None)
        log_file: Append to this file instead of stderr
    """
    if settings is None:
        from .settings import AssembleSettings

        settings = AssembleSettings()

    handler = _handler(log_file)
    logging.basicConfig(
        format="%(message)s",
        handlers=[handler],
        level=settings.log_level,
        force=True,
    )

    if settings.json_logs:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        colors = log_file is None and sys.stderr.isatty()
        renderer = structlog.dev.ConsoleRenderer(colors=colors)

    structlog.configure(
        processors=[*_SHARED_PROCESSORS, renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
