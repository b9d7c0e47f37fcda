"""
Interceptors for routing standard library and structlog events into a ``Log``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import structlog
from structlog.processors import CallsiteParameter, CallsiteParameterAdder
from structlog.typing import EventDict, WrappedLogger

from .formatters import CallerInfo, bracket_tag
from .listeners import FORWARDED_KEY, TRACE_LEVEL_NUM, from_stdlib_level
from .levels import LogLevel

if TYPE_CHECKING:
    from .core import Log

_EXC_FORMATTER = logging.Formatter()


class RedirectStdLibHandler(logging.Handler):
    """
    Redirect standard library logging records to a ``Log``.
    The logger name becomes the record tag and the caller comes from the record.
    """

    def __init__(self, log: "Log", level: int = logging.NOTSET):
        super().__init__(level)
        self.log = log

    def filter(self, record: logging.LogRecord) -> Any:
        # Runs before the handler lock is taken; records a StdlibListener
        # produced under the Log lock must never wait on it
        if getattr(record, FORWARDED_KEY, False):
            return False
        return super().filter(record)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = record.getMessage()
            if record.exc_info and record.exc_info[1] is not None:
                exc_text = _EXC_FORMATTER.formatException(record.exc_info)
                msg = f"{msg}\n{exc_text}"

            caller = CallerInfo(name=record.funcName, path=record.pathname, line=record.lineno)
            self.log.custom(
                from_stdlib_level(record.levelno),
                msg,
                bracket_tag(self._simplify_logger_name(record.name)),
                caller=caller,
            )
        except Exception:
            self.handleError(record)

    @staticmethod
    def _simplify_logger_name(name: str) -> str:
        """Keep at most the last two dotted parts: ``a.b.c.d`` -> ``c.d``."""
        if not name:
            return "stdlib"
        parts = name.split(".")
        if len(parts) <= 2:
            return name
        return ".".join(parts[-2:])


def intercept_stdlib_logging(log: "Log", level: int = TRACE_LEVEL_NUM) -> RedirectStdLibHandler:
    """Replace the root logger handlers with a ``RedirectStdLibHandler``."""
    logging.addLevelName(TRACE_LEVEL_NUM, "TRACE")
    handler = RedirectStdLibHandler(log)
    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.setLevel(level)
    root_logger.addHandler(handler)
    return handler


_STRUCTLOG_LEVELS: dict[str, LogLevel] = {
    "trace": LogLevel.TRACE,
    "debug": LogLevel.DEBUG,
    "info": LogLevel.INFORMATION,
    "warning": LogLevel.WARNING,
    "warn": LogLevel.WARNING,
    "error": LogLevel.ERROR,
    "exception": LogLevel.ERROR,
    "critical": LogLevel.CRITICAL,
    "fatal": LogLevel.CRITICAL,
}

_CALLSITE_KEYS = ("func_name", "pathname", "lineno")
_EXCLUDED_KEYS = {"event", "level", "_name", "logger", "timestamp", *_CALLSITE_KEYS}


class RouteToLog:
    """
    Final structlog processor: emit the event through a ``Log`` and drop it.

    Extra keys are appended to the message as ``key=value`` pairs.
    """

    def __init__(self, log: "Log"):
        self.log = log

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        if event_dict.pop(FORWARDED_KEY, False):
            raise structlog.DropEvent

        level_name = str(event_dict.get("level", method_name)).lower()
        level = _STRUCTLOG_LEVELS.get(level_name, LogLevel.INFORMATION)

        message = str(event_dict.get("event", ""))
        extras = [f"{k}={v}" for k, v in event_dict.items() if k not in _EXCLUDED_KEYS]
        if extras:
            message = f"{message} " + " ".join(extras)

        caller = CallerInfo(
            name=str(event_dict.get("func_name", "")),
            path=str(event_dict.get("pathname", "")),
            line=int(event_dict.get("lineno", 0) or 0),
        )
        name = event_dict.get("_name") or event_dict.get("logger")
        self.log.custom(level, message, bracket_tag(str(name)) if name else None, caller=caller)
        raise structlog.DropEvent


def configure_structlog(log: "Log", level: int = logging.DEBUG) -> None:
    """Route every structlog logger through ``log``."""
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        CallsiteParameterAdder(
            [CallsiteParameter.FUNC_NAME, CallsiteParameter.PATHNAME, CallsiteParameter.LINENO],
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        RouteToLog(log),
    ]
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )
