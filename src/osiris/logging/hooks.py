"""
Unhandled exception reporting.
"""

from __future__ import annotations

import sys
import threading
from types import TracebackType
from typing import TYPE_CHECKING, Any, Callable

from .formatters import CallerInfo
from .levels import LogLevel

if TYPE_CHECKING:
    from .core import Log

HANDLER_CALLER = CallerInfo(name="ERROR_HANDLER", path="OSIRIS", line=0)


class EventHook:
    """A minimal subscribable event. Handlers run in subscription order."""

    def __init__(self) -> None:
        self._handlers: list[Callable[..., Any]] = []

    def subscribe(self, handler: Callable[..., Any]) -> None:
        self._handlers.append(handler)

    def unsubscribe(self, handler: Callable[..., Any]) -> bool:
        for i, existing in enumerate(self._handlers):
            if existing == handler:
                del self._handlers[i]
                return True
        return False

    def __iadd__(self, handler: Callable[..., Any]) -> "EventHook":
        self.subscribe(handler)
        return self

    def __isub__(self, handler: Callable[..., Any]) -> "EventHook":
        self.unsubscribe(handler)
        return self

    def __len__(self) -> int:
        return len(self._handlers)

    def fire(self, *args: Any) -> None:
        for handler in list(self._handlers):
            handler(*args)


class ExceptionHook:
    """
    Observe uncaught exceptions on the main thread and on worker threads.

    The exception is logged at ERROR, published through
    ``log.on_unhandled_exception`` as ``(type(log), exc)`` and then handed to
    the hook that was installed before, so default reporting and process
    termination are unchanged.
    """

    def __init__(self, log: "Log"):
        self._log = log
        self._previous_excepthook: Callable[..., Any] | None = None
        self._previous_threading_hook: Callable[..., Any] | None = None

    @property
    def installed(self) -> bool:
        return self._previous_excepthook is not None

    def install(self) -> None:
        if self.installed:
            return
        self._previous_excepthook = sys.excepthook
        self._previous_threading_hook = threading.excepthook
        sys.excepthook = self._excepthook
        threading.excepthook = self._threading_excepthook

    def uninstall(self) -> None:
        if not self.installed:
            return
        # Only restore if nobody chained on top of us in the meantime
        if sys.excepthook == self._excepthook:
            sys.excepthook = self._previous_excepthook
        if threading.excepthook == self._threading_excepthook:
            threading.excepthook = self._previous_threading_hook
        self._previous_excepthook = None
        self._previous_threading_hook = None

    def handle(self, exc: BaseException) -> None:
        self._log.log_exception(exc, LogLevel.ERROR, caller=HANDLER_CALLER)
        self._log.on_unhandled_exception.fire(type(self._log), exc)

    def _excepthook(
        self,
        exc_type: type[BaseException],
        exc_value: BaseException,
        exc_tb: TracebackType | None,
    ) -> None:
        previous = self._previous_excepthook or sys.__excepthook__
        try:
            self.handle(exc_value)
        finally:
            previous(exc_type, exc_value, exc_tb)

    def _threading_excepthook(self, args: threading.ExceptHookArgs) -> None:
        previous = self._previous_threading_hook or threading.__excepthook__
        if args.exc_type is SystemExit or args.exc_value is None:
            previous(args)
            return
        try:
            self.handle(args.exc_value)
        finally:
            previous(args)
