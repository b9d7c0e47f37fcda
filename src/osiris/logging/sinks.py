"""
Console and file sinks.
"""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path
from typing import Any

from .formatters import colorize
from .levels import ConsoleColor

LATEST_FILE_NAME = "latest.txt"
DEFAULT_FILE_NAME_FORMAT = "%Y-%m-%d_%H:%M:%S.txt"


class ConsoleSink:
    """Colored console output.

    Args:
        stream: Output stream (default: the current sys.stdout)
        use_color: Force color on or off. ``None`` enables color only on a TTY.
    """

    def __init__(self, stream: Any = None, use_color: bool | None = None):
        self._stream = stream
        self._use_color = use_color

    @property
    def stream(self) -> Any:
        return self._stream if self._stream is not None else sys.stdout

    @property
    def use_color(self) -> bool:
        if self._use_color is not None:
            return self._use_color
        return bool(getattr(self.stream, "isatty", lambda: False)())

    def with_color(self, use_color: bool | None) -> "ConsoleSink":
        return ConsoleSink(self._stream, use_color=use_color)

    def write(self, text: str, bg: ConsoleColor, fg: ConsoleColor) -> None:
        stream = self.stream
        if self.use_color:
            stream.write(colorize(text, bg, fg))
        else:
            stream.write(text)
        stream.write("\n")
        stream.flush()


class DatedFileSink:
    """One dated log file per run plus a ``latest.txt`` mirror.

    Every record is appended to both files (UTF-8, one record per line).
    """

    def __init__(self, folder: str | Path, file_name: str):
        self._folder = Path(folder)
        self._file_name = file_name

    @classmethod
    def for_now(cls, folder: str | Path, file_name_format: str = DEFAULT_FILE_NAME_FORMAT) -> "DatedFileSink":
        return cls(folder, datetime.now().strftime(file_name_format))

    @property
    def folder(self) -> Path:
        return self._folder

    @property
    def path(self) -> Path:
        return self._folder / self._file_name

    @property
    def latest_path(self) -> Path:
        return self._folder / LATEST_FILE_NAME

    def reset(self) -> None:
        """Create the folder and truncate both files."""
        self._folder.mkdir(parents=True, exist_ok=True)
        self.path.write_text("", encoding="utf-8")
        self.latest_path.write_text("", encoding="utf-8")

    def write(self, text: str) -> None:
        """Append ``text`` to both files.

        Both appends are attempted; the first failure is raised afterwards.
        """
        error: OSError | None = None
        for target in (self.path, self.latest_path):
            try:
                with open(target, "a", encoding="utf-8") as f:
                    f.write(text + "\n")
            except OSError as exc:
                error = error or exc
        if error is not None:
            raise error
