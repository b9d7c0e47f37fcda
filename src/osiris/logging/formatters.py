"""
Record model, formatter and color utilities.
"""

from __future__ import annotations

import inspect
import os
from dataclasses import dataclass, field
from datetime import datetime

from .levels import RESET, ConsoleColor, DetailLevel, LogLevel, short_code


@dataclass(frozen=True)
class CallerInfo:
    """Where a log call originated."""

    name: str
    path: str
    line: int

    @classmethod
    def capture(cls, stacklevel: int = 1) -> "CallerInfo":
        """Capture the caller of the function invoking ``capture``.

        ``stacklevel`` counts frames above that function, the same way
        ``logging.Logger.log`` does.
        """
        frame = inspect.currentframe()
        try:
            for _ in range(stacklevel + 1):
                if frame is None or frame.f_back is None:
                    break
                frame = frame.f_back
            if frame is None:
                return cls(name="", path="", line=0)
            return cls(name=frame.f_code.co_name, path=frame.f_code.co_filename, line=frame.f_lineno)
        finally:
            del frame

    def render(self) -> str:
        return f"<{os.path.basename(self.path)}@{self.name}:{self.line}> "


@dataclass(frozen=True)
class LogRecord:
    """A single log call, built per call and discarded after emission."""

    level: LogLevel
    message: str
    caller: CallerInfo
    tag: str | None = None
    timestamp: datetime = field(default_factory=datetime.now)


def bracket_tag(name: str) -> str:
    """Render ``name`` as the conventional ``|name| `` tag prefix."""
    return f"|{name}| " if name else ""


def format_record(record: LogRecord, detail_level: DetailLevel, datetime_format: str) -> str:
    """Build the output line for ``record`` without a trailing newline.

    Fields, in order: ``(timestamp) `` from BASIC, ``<file@operation:line> ``
    from DETAILED, ``[CODE] `` from BASIC, then the raw tag and the message.
    """
    output = ""
    if detail_level >= DetailLevel.BASIC:
        output += f"({record.timestamp.strftime(datetime_format)}) "
    if detail_level >= DetailLevel.DETAILED:
        output += record.caller.render()
    if detail_level >= DetailLevel.BASIC:
        output += f"[{short_code(record.level)}] "
    output += record.tag or ""
    output += record.message
    return output


def colorize(text: str, bg: ConsoleColor, fg: ConsoleColor) -> str:
    """Wrap ``text`` in background/foreground codes followed by a reset."""
    return f"{bg.background}{fg.foreground}{text}{RESET}"
