from osiris.logging import (
    AgeRule,
    CallerInfo,
    ConsoleColor,
    DetailLevel,
    Log,
    LogLevel,
    LogListener,
    configure_logging,
    get_logger,
    log,
)

__version__ = "0.1.0"

__all__ = [
    "AgeRule",
    "CallerInfo",
    "ConsoleColor",
    "DetailLevel",
    "Log",
    "LogLevel",
    "LogListener",
    "configure_logging",
    "get_logger",
    "log",
]
