"""
Container settings.

Defaults suit a single container shared by a whole application. Values can
also be loaded from the environment:

    ASSEMBLE_DETECT_CYCLES=0     # let cycles recurse until RecursionError
    ASSEMBLE_THREAD_SAFE=false   # skip the container lock
    ASSEMBLE_LOG_LEVEL=DEBUG
    ASSEMBLE_LOG_JSON=1
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

_TRUE_VALUES = ("1", "true", "yes")


def _env_flag(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = environ.get(name)
    if raw is None:
        return default
    return raw.strip().strip('"').strip("'").lower() in _TRUE_VALUES


@dataclass
class AssembleSettings:
    """Runtime behaviour of a container."""

    # Resolution
    detect_cycles: bool = True
    thread_safe: bool = True

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False

    def __post_init__(self):
        level = self.log_level.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {self.log_level}")
        self.log_level = level

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AssembleSettings:
        """Load settings from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``

        Returns:
            AssembleSettings instance
        """
        if environ is None:
            environ = os.environ

        return cls(
            detect_cycles=_env_flag(environ, "ASSEMBLE_DETECT_CYCLES", True),
            thread_safe=_env_flag(environ, "ASSEMBLE_THREAD_SAFE", True),
            log_level=environ.get("ASSEMBLE_LOG_LEVEL", "INFO").strip(),
            json_logs=_env_flag(environ, "ASSEMBLE_LOG_JSON", False),
        )
