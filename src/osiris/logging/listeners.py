"""
External listeners receiving a copy of every (level, message) pair.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

from .levels import LogLevel

# Marks records produced by a listener so the interceptors do not loop them back
FORWARDED_KEY = "osiris_forwarded"

TRACE_LEVEL_NUM = 5

_STDLIB_LEVELS: dict[LogLevel, int] = {
    LogLevel.TRACE: TRACE_LEVEL_NUM,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFORMATION: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.CRITICAL: logging.CRITICAL,
}

_STRUCTLOG_METHODS: dict[LogLevel, str] = {
    LogLevel.TRACE: "debug",
    LogLevel.DEBUG: "debug",
    LogLevel.INFORMATION: "info",
    LogLevel.WARNING: "warning",
    LogLevel.ERROR: "error",
    LogLevel.CRITICAL: "critical",
}


@runtime_checkable
class LogListener(Protocol):
    """Anything that can receive a (level, message) pair."""

    def log(self, level: LogLevel, message: str) -> None: ...


def to_stdlib_level(level: LogLevel) -> int | None:
    """Map a ``LogLevel`` to a stdlib level number, ``None`` for ``NONE``."""
    return _STDLIB_LEVELS.get(level)


def from_stdlib_level(levelno: int) -> LogLevel:
    if levelno >= logging.CRITICAL:
        return LogLevel.CRITICAL
    if levelno >= logging.ERROR:
        return LogLevel.ERROR
    if levelno >= logging.WARNING:
        return LogLevel.WARNING
    if levelno >= logging.INFO:
        return LogLevel.INFORMATION
    if levelno >= logging.DEBUG:
        return LogLevel.DEBUG
    return LogLevel.TRACE


class StdlibListener:
    """Forward records to a standard library ``logging.Logger``."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def log(self, level: LogLevel, message: str) -> None:
        levelno = to_stdlib_level(level)
        if levelno is None:
            return
        self.logger.log(levelno, message, extra={FORWARDED_KEY: True})


class StructlogListener:
    """Forward records to a structlog logger."""

    def __init__(self, logger: Any):
        self.logger = logger

    def log(self, level: LogLevel, message: str) -> None:
        method = _STRUCTLOG_METHODS.get(level)
        if method is None:
            return
        getattr(self.logger, method)(message, **{FORWARDED_KEY: True})
