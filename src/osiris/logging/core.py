"""
Core logging facade and lifecycle.
"""

from __future__ import annotations

import threading
import traceback
from datetime import timedelta
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

from .formatters import CallerInfo, LogRecord, format_record
from .hooks import EventHook, ExceptionHook
from .levels import ConsoleColor, DetailLevel, LogLevel, level_colors
from .listeners import LogListener
from .retention import DEFAULT_CLEANUP_INTERVAL, AgeRule, RetentionManager
from .sinks import DEFAULT_FILE_NAME_FORMAT, ConsoleSink, DatedFileSink

if TYPE_CHECKING:
    from osiris.config.logging import LoggingSettings

DEFAULT_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S.%f"


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(_name=name or "root")


class Log:
    """
    Process-wide logging handle.

    Owns the configuration, the listener set and a single re-entrant lock.
    Every emission (format, console, files, listeners) and every
    configuration change runs under that lock, so concurrent log calls
    never interleave.

    Args:
        stream: Console stream (default: stdout)
        use_color: Force console color on/off. ``None`` enables it on a TTY.
        file_name_format: ``strftime`` pattern for the per-run log file name.
        cleanup_interval: Period of the retention pass.
        age_rule: Direction of the age-based retention comparison.
    """

    def __init__(
        self,
        *,
        stream: Any = None,
        use_color: bool | None = None,
        file_name_format: str = DEFAULT_FILE_NAME_FORMAT,
        cleanup_interval: timedelta = DEFAULT_CLEANUP_INTERVAL,
        age_rule: AgeRule = AgeRule.FUTURE,
    ):
        self._lock = threading.RLock()
        self._console = ConsoleSink(stream, use_color=use_color)
        self._file: DatedFileSink | None = None
        self._listeners: list[LogListener] = []

        self._detail_level = DetailLevel.DETAILED
        self._datetime_format = DEFAULT_DATETIME_FORMAT
        self._initialized = False
        self._log_folder = ""
        self._max_log_files = -1
        self._max_log_age = timedelta(0)

        self.file_name_format = file_name_format
        self.cleanup_interval = cleanup_interval
        self.age_rule = age_rule

        self._retention: RetentionManager | None = None
        self._exception_hook = ExceptionHook(self)
        self.on_unhandled_exception = EventHook()

    # =========================================================================
    # Configuration
    # =========================================================================

    @property
    def detail_level(self) -> DetailLevel:
        return self._detail_level

    @detail_level.setter
    def detail_level(self, value: DetailLevel) -> None:
        with self._lock:
            self._detail_level = DetailLevel.parse(value)

    @property
    def datetime_format(self) -> str:
        return self._datetime_format

    @datetime_format.setter
    def datetime_format(self, value: str) -> None:
        with self._lock:
            self._datetime_format = value

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def log_folder(self) -> str:
        return self._log_folder

    @property
    def log_to_file(self) -> bool:
        return bool(self._log_folder)

    @property
    def log_file_path(self) -> Path | None:
        return self._file.path if self._file else None

    @property
    def latest_file_path(self) -> Path | None:
        return self._file.latest_path if self._file else None

    @property
    def max_log_files(self) -> int:
        return self._max_log_files

    @property
    def max_log_age(self) -> timedelta:
        return self._max_log_age

    @property
    def retention(self) -> RetentionManager | None:
        return self._retention

    @property
    def listeners(self) -> tuple[LogListener, ...]:
        return tuple(self._listeners)

    @property
    def console(self) -> ConsoleSink:
        return self._console

    def initialize(
        self,
        log_folder: str | Path | None = None,
        max_log_files: int = -1,
        max_log_age: timedelta | None = None,
    ) -> None:
        """
        Apply the configuration and start the file and hook subsystems.

        A repeated call fully resets: the previous retention thread is stopped,
        the previous exception hook removed, fresh files truncated.

        Args:
            log_folder: Folder for log files. Empty or ``None`` disables file logging.
            max_log_files: Keep at most this many files. <= 0 means unlimited.
            max_log_age: Age limit for log files. ``None`` or zero means unlimited.

        Raises:
            OSError: The folder or the log files could not be created.
        """
        # Nothing changes until the files exist
        folder = str(log_folder or "")
        sink = None
        if folder:
            sink = DatedFileSink.for_now(folder, self.file_name_format)
            sink.reset()

        self._stop_retention()
        with self._lock:
            self._exception_hook.uninstall()
            self._initialized = True
            self._log_folder = folder
            self._file = sink
            self._max_log_files = max_log_files
            self._max_log_age = max_log_age or timedelta(0)

            if self.log_to_file:
                self._retention = RetentionManager(
                    self._log_folder,
                    self._max_log_files,
                    self._max_log_age,
                    self._report_cleanup_failure,
                    interval=self.cleanup_interval,
                    age_rule=self.age_rule,
                    on_scan_error=self._report_scan_failure,
                )
                self._retention.start()

            self._exception_hook.install()

    def configure(self, settings: "LoggingSettings") -> None:
        """Copy presentation options from ``settings`` (does not initialize)."""
        with self._lock:
            self._detail_level = settings.detail_level
            self._datetime_format = settings.datetime_format
            self._console = self._console.with_color(settings.console_color)
            self.file_name_format = settings.file_name_format
            self.cleanup_interval = settings.cleanup_interval
            self.age_rule = settings.age_rule

    def shutdown(self, timeout: float | None = 5.0) -> None:
        """Stop the retention thread and remove the exception hook."""
        self._stop_retention(timeout)
        with self._lock:
            self._exception_hook.uninstall()

    def _stop_retention(self, timeout: float | None = 5.0) -> None:
        with self._lock:
            retention, self._retention = self._retention, None
        # Joined outside the lock: the thread may be waiting on it to report a failure
        if retention is not None:
            retention.stop(timeout)

    # =========================================================================
    # Listeners
    # =========================================================================

    def add_logger(self, listener: LogListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_logger(self, listener: LogListener) -> bool:
        """Remove the first registration of ``listener`` (by identity)."""
        with self._lock:
            for i, existing in enumerate(self._listeners):
                if existing is listener:
                    del self._listeners[i]
                    return True
            return False

    # =========================================================================
    # Logging Functions
    # =========================================================================

    def trace(self, message: str, tag: str | None = None, *, caller: CallerInfo | None = None) -> None:
        self._log(LogLevel.TRACE, message, tag, caller or CallerInfo.capture())

    def debug(self, message: str, tag: str | None = None, *, caller: CallerInfo | None = None) -> None:
        self._log(LogLevel.DEBUG, message, tag, caller or CallerInfo.capture())

    def info(self, message: str, tag: str | None = None, *, caller: CallerInfo | None = None) -> None:
        self._log(LogLevel.INFORMATION, message, tag, caller or CallerInfo.capture())

    def warning(self, message: str, tag: str | None = None, *, caller: CallerInfo | None = None) -> None:
        self._log(LogLevel.WARNING, message, tag, caller or CallerInfo.capture())

    def error(self, message: str, tag: str | None = None, *, caller: CallerInfo | None = None) -> None:
        self._log(LogLevel.ERROR, message, tag, caller or CallerInfo.capture())

    def critical(self, message: str, tag: str | None = None, *, caller: CallerInfo | None = None) -> None:
        self._log(LogLevel.CRITICAL, message, tag, caller or CallerInfo.capture())

    def custom(
        self,
        level: LogLevel,
        message: str,
        tag: str | None = None,
        bg: ConsoleColor | None = None,
        fg: ConsoleColor | None = None,
        *,
        caller: CallerInfo | None = None,
    ) -> None:
        """Log at ``level`` with optional color overrides."""
        self._log(level, message, tag, caller or CallerInfo.capture(), bg, fg)

    def log_exception(
        self,
        exc: BaseException,
        level: LogLevel = LogLevel.ERROR,
        *,
        caller: CallerInfo | None = None,
    ) -> None:
        """Log the exception message, then its traceback when there is one."""
        caller = caller or CallerInfo.capture()
        with self._lock:
            self._log(level, str(exc) or type(exc).__name__, None, caller)
            if exc.__traceback__ is None:
                return
            self._log(level, "".join(traceback.format_tb(exc.__traceback__)).rstrip("\n"), None, caller)

    def _log(
        self,
        level: LogLevel,
        message: str,
        tag: str | None,
        caller: CallerInfo,
        bg: ConsoleColor | None = None,
        fg: ConsoleColor | None = None,
    ) -> None:
        with self._lock:
            default_bg, default_fg = level_colors(level)
            record = LogRecord(level=LogLevel(level), message=message, caller=caller, tag=tag)
            output = format_record(record, self._detail_level, self._datetime_format)

            # Console
            self._console.write(
                output,
                bg if bg is not None else default_bg,
                fg if fg is not None else default_fg,
            )

            # Files, if applicable
            if self.log_to_file and self._file is not None:
                self._file.write(output)

            # Attached listeners
            for listener in tuple(self._listeners):
                listener.log(record.level, message)

    # =========================================================================
    # Retention callbacks
    # =========================================================================

    def _report_cleanup_failure(self, path: Path, exc: OSError) -> None:
        self.warning(f"Failed to clean up log file '{path.resolve()}'")
        self.log_exception(exc, LogLevel.WARNING)

    def _report_scan_failure(self, exc: OSError) -> None:
        self.warning(f"Failed to scan log folder '{self._log_folder}'")
        self.log_exception(exc, LogLevel.WARNING)


# =============================================================================
# Default instance
# =============================================================================

log = Log()


def configure_logging(settings: "LoggingSettings | None" = None, target: Log | None = None) -> Log:
    """
    Configure and initialize a ``Log`` from settings.

    Args:
        settings: Logging settings (default: ``osiris.config.settings.logging``)
        target: Log handle to configure (default: the module-level ``log``)

    Returns:
        The initialized handle.
    """
    if settings is None:
        from osiris.config import settings as app_settings

        settings = app_settings.logging
    target = target or log

    target.configure(settings)
    target.initialize(settings.folder, settings.max_files, settings.max_age)

    if settings.intercept_stdlib:
        from .interceptors import intercept_stdlib_logging

        intercept_stdlib_logging(target)

    return target
