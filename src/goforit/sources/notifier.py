"""Sources – SourceNotifier, the out-of-band event fan-out every source holds."""
from __future__ import annotations

import threading
from datetime import timedelta
from typing import Protocol


class SourceListener(Protocol):
    """Receives events a source pushes from its own background activity.

    Implementations must not block: they are called on the source's thread.
    """

    def source_error(self, error: Exception) -> None: ...
    def source_age(self, age: timedelta) -> None: ...


class SourceNotifier:
    """Fans source-pushed errors and ages out to every attached listener.

    Sources hold one of these by composition; engines attach themselves on
    construction and detach on close, so the listener set follows engine
    lifetimes, not the source's.
    """

    def __init__(self) -> None:
        self._listeners: tuple[SourceListener, ...] = ()
        self._lock = threading.Lock()

    def attach(self, listener: SourceListener) -> None:
        with self._lock:
            if not any(existing is listener for existing in self._listeners):
                self._listeners = (*self._listeners, listener)

    def detach(self, listener: SourceListener) -> None:
        with self._lock:
            self._listeners = tuple(l for l in self._listeners if l is not listener)  # noqa: E741

    @property
    def listeners(self) -> tuple[SourceListener, ...]:
        return self._listeners

    def report_error(self, error: Exception) -> None:
        for listener in self._listeners:
            listener.source_error(error)

    def report_age(self, age: timedelta) -> None:
        for listener in self._listeners:
            listener.source_age(age)


__all__ = ["SourceListener", "SourceNotifier"]
