"""
Severity levels, detail levels and console colors.
"""

from __future__ import annotations

from enum import Enum, IntEnum


class DetailLevel(IntEnum):
    """How much metadata accompanies each formatted record."""

    # Message (and tag) only
    NONE = 0
    # Timestamp, level code and tag
    BASIC = 1
    # Timestamp, caller information, level code and tag
    DETAILED = 2

    @classmethod
    def parse(cls, value: object) -> "DetailLevel":
        """Accept an enum member, an int or a case-insensitive member name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and not value.strip().isdigit():
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown detail level: {value!r}") from None
        return cls(int(value))  # type: ignore[call-overload]


class LogLevel(IntEnum):
    """Severity of a log record. ``NONE`` is the disabling sentinel."""

    TRACE = 0
    DEBUG = 1
    INFORMATION = 2
    WARNING = 3
    ERROR = 4
    CRITICAL = 5
    NONE = 6

    @property
    def short_code(self) -> str:
        return short_code(self)

    @property
    def colors(self) -> tuple["ConsoleColor", "ConsoleColor"]:
        return level_colors(self)


class ConsoleColor(Enum):
    """The sixteen classic console colors, valued by ANSI foreground code."""

    BLACK = 30
    DARK_BLUE = 34
    DARK_GREEN = 32
    DARK_CYAN = 36
    DARK_RED = 31
    DARK_MAGENTA = 35
    DARK_YELLOW = 33
    GRAY = 37
    DARK_GRAY = 90
    BLUE = 94
    GREEN = 92
    CYAN = 96
    RED = 91
    MAGENTA = 95
    YELLOW = 93
    WHITE = 97

    @property
    def foreground(self) -> str:
        return f"\x1b[{self.value}m"

    @property
    def background(self) -> str:
        return f"\x1b[{self.value + 10}m"


RESET = "\x1b[0m"

_SHORT_CODES: dict[LogLevel, str] = {
    LogLevel.TRACE: "TRAC",
    LogLevel.DEBUG: "DBUG",
    LogLevel.INFORMATION: "INFO",
    LogLevel.WARNING: "WARN",
    LogLevel.ERROR: "ERRR",
    LogLevel.CRITICAL: "CRIT",
    LogLevel.NONE: "NONE",
}

# (background, foreground)
_LEVEL_COLORS: dict[LogLevel, tuple[ConsoleColor, ConsoleColor]] = {
    LogLevel.TRACE: (ConsoleColor.BLACK, ConsoleColor.BLUE),
    LogLevel.DEBUG: (ConsoleColor.BLACK, ConsoleColor.CYAN),
    LogLevel.INFORMATION: (ConsoleColor.BLACK, ConsoleColor.GREEN),
    LogLevel.WARNING: (ConsoleColor.BLACK, ConsoleColor.YELLOW),
    LogLevel.ERROR: (ConsoleColor.BLACK, ConsoleColor.RED),
    LogLevel.CRITICAL: (ConsoleColor.DARK_RED, ConsoleColor.WHITE),
    LogLevel.NONE: (ConsoleColor.BLACK, ConsoleColor.GRAY),
}


def short_code(level: LogLevel) -> str:
    """Return the four-letter code for ``level``.

    Raises:
        ValueError: ``level`` is not a ``LogLevel`` member.
    """
    try:
        return _SHORT_CODES[level]
    except (KeyError, TypeError):
        raise ValueError(f"LogLevel enum invalid: {level!r}") from None


def level_colors(level: LogLevel) -> tuple[ConsoleColor, ConsoleColor]:
    """Return the (background, foreground) display colors for ``level``."""
    try:
        return _LEVEL_COLORS[level]
    except (KeyError, TypeError):
        raise ValueError(f"LogLevel enum invalid: {level!r}") from None
