"""
Log file retention: periodic deletion of log files by age and by count.
"""

from __future__ import annotations

import os
import threading
from datetime import datetime, timedelta
from enum import Enum
from pathlib import Path
from typing import Callable

DEFAULT_CLEANUP_INTERVAL = timedelta(minutes=30)

ErrorCallback = Callable[[Path, OSError], None]


class AgeRule(str, Enum):
    """Which side of the age threshold gets deleted.

    ``FUTURE`` keeps the historical comparison (creation time later than
    ``now + max_age``), which only matches files dated in the future.
    ``PAST`` deletes files created before ``now - max_age``.
    """

    FUTURE = "future"
    PAST = "past"


def creation_time(path: Path) -> datetime:
    """Best-effort creation time: ``st_birthtime`` where available, else ``st_ctime``."""
    st = path.stat()
    return datetime.fromtimestamp(getattr(st, "st_birthtime", st.st_ctime))


def _list_files(folder: Path) -> list[Path]:
    return [p for p in folder.iterdir() if p.is_file()]


def _by_mtime(files: list[Path]) -> list[Path]:
    """Oldest first; files that vanished since listing are left out."""
    stamped: list[tuple[float, Path]] = []
    for path in files:
        try:
            stamped.append((path.stat().st_mtime, path))
        except FileNotFoundError:
            continue
    stamped.sort(key=lambda item: item[0])
    return [path for _, path in stamped]


def _is_expired(path: Path, max_log_age: timedelta, age_rule: AgeRule, now: datetime) -> bool:
    created = creation_time(path)
    if age_rule is AgeRule.PAST:
        return created < now - max_log_age
    return created > now + max_log_age


def _delete(path: Path, on_error: ErrorCallback) -> bool:
    try:
        path.unlink()
        return True
    except OSError as exc:
        on_error(path, exc)
        return False


def run_cleanup(
    folder: str | Path,
    max_log_files: int,
    max_log_age: timedelta | None,
    on_error: ErrorCallback,
    *,
    age_rule: AgeRule = AgeRule.FUTURE,
    now: datetime | None = None,
) -> list[Path]:
    """
    Run one retention pass over ``folder``.

    Args:
        folder: Log folder. Every regular file in it is considered, including
            the active log file and ``latest.txt``.
        max_log_files: Keep only the newest N files by modification time. <= 0 disables.
        max_log_age: Age limit. ``None`` or zero disables.
        on_error: Called with the path and error for each failed deletion.
        age_rule: Direction of the age comparison.
        now: Reference time (default: current local time).

    Returns:
        The paths that were deleted.
    """
    folder = Path(folder)
    deleted: list[Path] = []

    # 1. Age
    if max_log_age:
        reference = now or datetime.now()
        for path in _list_files(folder):
            try:
                expired = _is_expired(path, max_log_age, age_rule, reference)
            except FileNotFoundError:
                continue
            if expired and _delete(path, on_error):
                deleted.append(path)

    # 2. Count
    if max_log_files > 0:
        files = _by_mtime(_list_files(folder))
        for path in files[: max(0, len(files) - max_log_files)]:
            if _delete(path, on_error):
                deleted.append(path)

    return deleted


class RetentionManager(threading.Thread):
    """Background thread running ``run_cleanup`` now and then every ``interval``.

    Runs until ``stop()`` is called.
    """

    def __init__(
        self,
        folder: str | Path,
        max_log_files: int,
        max_log_age: timedelta | None,
        on_error: ErrorCallback,
        *,
        interval: timedelta = DEFAULT_CLEANUP_INTERVAL,
        age_rule: AgeRule = AgeRule.FUTURE,
        on_scan_error: Callable[[OSError], None] | None = None,
    ):
        super().__init__(name="LogRetention", daemon=True)
        self.folder = Path(folder)
        self.max_log_files = max_log_files
        self.max_log_age = max_log_age
        self.interval = interval
        self.age_rule = age_rule
        self._on_error = on_error
        self._on_scan_error = on_scan_error
        self._stop_event = threading.Event()
        self.passes = 0

    def run(self) -> None:
        while True:
            self.run_once()
            if self._stop_event.wait(self.interval.total_seconds()):
                return

    def run_once(self) -> list[Path]:
        try:
            deleted = run_cleanup(
                self.folder,
                self.max_log_files,
                self.max_log_age,
                self._on_error,
                age_rule=self.age_rule,
            )
        except OSError as exc:
            if self._on_scan_error is None:
                raise
            self._on_scan_error(exc)
            deleted = []
        self.passes += 1
        return deleted

    def stop(self, timeout: float | None = None) -> None:
        self._stop_event.set()
        if self.is_alive() and threading.current_thread() is not self:
            self.join(timeout)

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()
