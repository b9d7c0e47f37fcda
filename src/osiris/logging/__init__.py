"""
Osiris logging pipeline.

Formats records and emits them to the console and, optionally, to a dated
log file plus ``latest.txt``; forwards every (level, message) pair to
registered listeners; reclaims old log files in the background and reports
uncaught exceptions.

Design Pattern: one ``Log`` handle owning configuration, listeners and a
single lock; sinks and listeners are plain strategy objects.
"""

from .core import Log, configure_logging, get_logger, log
from .formatters import CallerInfo, LogRecord, bracket_tag, format_record
from .hooks import EventHook, ExceptionHook
from .interceptors import RedirectStdLibHandler, RouteToLog, configure_structlog, intercept_stdlib_logging
from .levels import ConsoleColor, DetailLevel, LogLevel
from .listeners import LogListener, StdlibListener, StructlogListener
from .retention import AgeRule, RetentionManager, run_cleanup

__all__ = [
    "AgeRule",
    "CallerInfo",
    "ConsoleColor",
    "DetailLevel",
    "EventHook",
    "ExceptionHook",
    "Log",
    "LogLevel",
    "LogListener",
    "LogRecord",
    "RedirectStdLibHandler",
    "RetentionManager",
    "RouteToLog",
    "StdlibListener",
    "StructlogListener",
    "bracket_tag",
    "configure_logging",
    "configure_structlog",
    "format_record",
    "get_logger",
    "intercept_stdlib_logging",
    "log",
    "run_cleanup",
]
