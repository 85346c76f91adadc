"""Engine – NotificationDispatcher.

A non-blocking, single-consumer delivery queue. Flag checks enqueue events
without waiting; one daemon thread drains the queue and hands each event to
the engine's callbacks, so slow or failing callbacks never stall callers
and callbacks of one engine never run concurrently.
"""
from __future__ import annotations

import queue
import threading
from collections.abc import Callable

from goforit.engine.events import Notification
from goforit.observability.logging import get_logger

_log = get_logger(__name__)

DEFAULT_QUEUE_SIZE = 1024


class _FlushMarker:
    __slots__ = ("reached",)

    def __init__(self) -> None:
        self.reached = threading.Event()


_STOP = object()


class NotificationDispatcher:
    """Bounded queue with one consumer thread.

    Parameters
    ----------
    handler:
        Called on the consumer thread for every submitted event, in
        submission order.
    maxsize:
        Maximum queue depth. Events submitted while the queue is full are
        dropped (and counted) rather than blocking the caller.
    name:
        Name of the consumer thread.
    """

    def __init__(
        self,
        handler: Callable[[Notification], None],
        maxsize: int = DEFAULT_QUEUE_SIZE,
        name: str = "goforit-dispatcher",
    ) -> None:
        if maxsize <= 0:
            raise ValueError("maxsize must be positive")
        self._handler = handler
        self._queue: queue.Queue[object] = queue.Queue(maxsize=maxsize)
        self._stopped = threading.Event()
        self._lock = threading.Lock()
        self._dropped = 0
        self._thread = threading.Thread(target=self._drain, name=name, daemon=True)
        self._thread.start()

    @property
    def dropped(self) -> int:
        """Number of events discarded because the queue was full."""
        return self._dropped

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()

    def submit(self, event: Notification) -> bool:
        """Enqueue *event* without blocking; return ``False`` if it was dropped."""
        if self._stopped.is_set():
            return False
        try:
            self._queue.put_nowait(event)
        except queue.Full:
            with self._lock:
                self._dropped += 1
            _log.debug("notification_dropped", event=type(event).__name__)
            return False
        return True

    def flush(self, timeout: float = 1.0) -> bool:
        """Wait until every event submitted before this call was delivered.

        Returns ``False`` on timeout, after :meth:`stop`, or when called from
        the consumer thread itself (which cannot wait on its own queue).
        A flush still waiting when :meth:`stop` runs is released early.
        """
        if self._stopped.is_set() or threading.current_thread() is self._thread:
            return False
        marker = _FlushMarker()
        try:
            self._queue.put(marker, timeout=timeout)
        except queue.Full:
            return False
        return marker.reached.wait(timeout)

    def stop(self) -> None:
        """Stop delivering. Pending events are dropped.

        Idempotent. When it returns, no callback is running or will run,
        unless it was called from inside a callback.
        """
        with self._lock:
            if self._stopped.is_set():
                return
            self._stopped.set()
        try:
            self._queue.put_nowait(_STOP)
        except queue.Full:
            # the consumer is not blocked on get() and will see the flag
            pass
        if threading.current_thread() is not self._thread:
            self._thread.join()

    def _drain(self) -> None:
        while True:
            item = self._queue.get()
            if isinstance(item, _FlushMarker):
                item.reached.set()
                if self._stopped.is_set():
                    break
                continue
            if item is _STOP or self._stopped.is_set():
                break
            try:
                self._handler(item)  # type: ignore[arg-type]
            except Exception:  # noqa: BLE001
                _log.exception("notification_callback_failed", event=type(item).__name__)
        self._release_waiters()

    def _release_waiters(self) -> None:
        while True:
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                return
            if isinstance(item, _FlushMarker):
                item.reached.set()


__all__ = ["DEFAULT_QUEUE_SIZE", "NotificationDispatcher"]
