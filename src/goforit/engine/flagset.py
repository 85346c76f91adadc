"""Engine – Flagset, the flag evaluation engine.

A :class:`Flagset` answers ``enabled(name, tags)`` from the source's cached
table, combined with local overrides, default tags and a random source.
Checks never raise and never wait on I/O or user callbacks: errors, ages and
check results are queued on a per-engine
:class:`~goforit.engine.dispatcher.NotificationDispatcher` and delivered to
the configured callbacks on its thread.

Typical usage::

    source = CsvSource("/etc/flags.csv", interval=15)
    flags = Flagset(
        source,
        tags={"cluster": "south"},
        max_staleness=timedelta(minutes=5),
        log_errors=logging.getLogger("flags"),
    )
    if flags.enabled("new_checkout", {"user": user_id}):
        ...
    flags.close()
    source.close()
"""
from __future__ import annotations

import threading
from collections.abc import Callable, Mapping
from datetime import timedelta
from types import MappingProxyType, TracebackType
from typing import TYPE_CHECKING, Any

from goforit.engine.dispatcher import DEFAULT_QUEUE_SIZE, NotificationDispatcher
from goforit.engine.events import AgeEvent, AgeType, CheckEvent, ErrorEvent, Notification
from goforit.flags import RandomSource
from goforit.kernel.errors import (
    DataStaleError,
    FlagEvaluationError,
    SourceError,
    UnknownFlagError,
)
from goforit.kernel.time import Clock, SystemClock, as_utc, to_timedelta
from goforit.observability.logging import get_logger
from goforit.sources import Source

if TYPE_CHECKING:
    from goforit.config import FlagsetSettings

_log = get_logger(__name__)

ErrorCallback = Callable[[Exception], None]
AgeCallback = Callable[[AgeType, timedelta], None]
CheckCallback = Callable[[str, bool], None]


def _log_error(error: Exception) -> None:
    _log.warning("flag_error", error=error)


def log_errors_to(logger: Any) -> ErrorCallback:
    """Return an error callback writing each error's message to *logger*.

    *logger* is anything with an ``error(message)`` method: a stdlib
    :class:`logging.Logger` or a structlog logger.
    """

    def _callback(error: Exception) -> None:
        logger.error(str(error))

    return _callback


class Flagset:
    """Evaluates feature flags served by a :class:`~goforit.sources.Source`.

    Parameters
    ----------
    source:
        Where flags come from. The engine attaches to its notifier and
        detaches on :meth:`close`; the source itself is never closed here.
    overrides:
        ``{name: bool}`` forced values that bypass the source.
    tags:
        Default tags merged under the tags of every check.
    seed:
        Fixed seed for reproducible sampling. ``None`` draws from a shared
        process-wide random source.
    max_staleness:
        Source data older than this is reported as stale (and still served).
        ``None`` or zero disables the check.
    on_error:
        Called with each reported error. Defaults to logging a warning via
        structlog; pass ``None`` to discard errors.
    on_age:
        Called with ``(AgeType, timedelta)`` for each age measurement.
    on_check:
        Called with ``(name, enabled)`` after every check.
    log_errors:
        A logger; replaces *on_error* with one that logs each error message.
    clock:
        Used to compute data age.
    queue_size:
        Maximum number of undelivered notifications.
    """

    def __init__(
        self,
        source: Source,
        *,
        overrides: Mapping[str, bool] | None = None,
        tags: Mapping[str, str] | None = None,
        seed: int | None = None,
        max_staleness: timedelta | float | None = None,
        on_error: ErrorCallback | None = _log_error,
        on_age: AgeCallback | None = None,
        on_check: CheckCallback | None = None,
        log_errors: Any = None,
        clock: Clock | None = None,
        queue_size: int = DEFAULT_QUEUE_SIZE,
    ) -> None:
        self._source = source
        self._lock = threading.Lock()
        self._overrides: Mapping[str, bool] = MappingProxyType(
            {name: bool(value) for name, value in (overrides or {}).items()}
        )
        self._default_tags: Mapping[str, str] = MappingProxyType(dict(tags or {}))
        self._random = RandomSource.shared() if seed is None else RandomSource.seeded(seed)
        self._max_staleness = to_timedelta(max_staleness)
        self._on_error = log_errors_to(log_errors) if log_errors is not None else on_error
        self._on_age = on_age
        self._on_check = on_check
        self._clock = clock or SystemClock()
        self._closed = False
        self._dispatcher = NotificationDispatcher(self._deliver, maxsize=queue_size)
        source.notifier.attach(self)

    @classmethod
    def from_settings(
        cls,
        source: Source,
        settings: FlagsetSettings,
        **kwargs: Any,
    ) -> Flagset:
        """Build an engine from loaded :class:`~goforit.config.FlagsetSettings`.

        Explicit *kwargs* win over the settings.
        """
        options: dict[str, Any] = {
            "seed": settings.seed,
            "max_staleness": settings.max_staleness,
            "queue_size": settings.queue_size,
        }
        options.update(kwargs)
        return cls(source, **options)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def source(self) -> Source:
        return self._source

    @property
    def overrides(self) -> dict[str, bool]:
        return dict(self._overrides)

    @property
    def default_tags(self) -> dict[str, str]:
        return dict(self._default_tags)

    @property
    def max_staleness(self) -> timedelta:
        return self._max_staleness

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def dropped_notifications(self) -> int:
        return self._dispatcher.dropped

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def enabled(self, name: str, tags: Mapping[str, str] | None = None) -> bool:
        """Return whether flag *name* is on for a request carrying *tags*.

        Never raises: any uncertainty (unknown flag, failing source or flag)
        answers ``False`` and is reported through the error callback.
        Stale data is still served.
        """
        overrides = self._overrides
        if name in overrides:
            result = overrides[name]
        else:
            result = self._evaluate(name, tags)
        if self._on_check is not None:
            self._dispatcher.submit(CheckEvent(name, result))
        return result

    def _evaluate(self, name: str, tags: Mapping[str, str] | None) -> bool:
        merged = dict(self._default_tags)
        if tags:
            merged.update(tags)

        try:
            flag, last_modified, source_error = self._source.lookup(name)
        except Exception as exc:  # noqa: BLE001
            self._report(SourceError(f"source lookup failed for flag '{name}'", cause=exc))
            return False
        if source_error is not None:
            self._report(source_error)
        if last_modified is not None:
            age = as_utc(self._clock.now()) - as_utc(last_modified)
            self._record_age(AgeType.BACKEND, age)

        if flag is None:
            self._report(UnknownFlagError(name))
            return False

        try:
            enabled, flag_error = flag.evaluate(self._random, merged)
        except Exception as exc:  # noqa: BLE001
            self._report(FlagEvaluationError(name, cause=exc))
            return False
        if flag_error is not None:
            self._report(flag_error)
        return bool(enabled)

    # ------------------------------------------------------------------
    # Runtime configuration
    # ------------------------------------------------------------------

    def override(self, name: str, value: bool) -> None:
        """Force *name* to *value* from now on, whatever the source says."""
        with self._lock:
            updated = dict(self._overrides)
            updated[name] = bool(value)
            self._overrides = MappingProxyType(updated)

    def remove_override(self, name: str) -> None:
        with self._lock:
            updated = {key: value for key, value in self._overrides.items() if key != name}
            self._overrides = MappingProxyType(updated)

    def add_default_tags(self, tags: Mapping[str, str]) -> None:
        """Merge *tags* into the default tags; new values win on conflict."""
        with self._lock:
            updated = dict(self._default_tags)
            updated.update(tags)
            self._default_tags = MappingProxyType(updated)

    def set_default_tags(self, tags: Mapping[str, str]) -> None:
        """Replace the default tags."""
        with self._lock:
            self._default_tags = MappingProxyType(dict(tags))

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def source_error(self, error: Exception) -> None:
        self._report(error)

    def source_age(self, age: timedelta) -> None:
        self._record_age(AgeType.SOURCE, age)

    def _report(self, error: Exception) -> None:
        if self._on_error is not None:
            self._dispatcher.submit(ErrorEvent(error))

    def _record_age(self, kind: AgeType, age: timedelta) -> None:
        if self._on_age is not None:
            self._dispatcher.submit(AgeEvent(kind, age))
        if self._max_staleness > timedelta(0) and age > self._max_staleness:
            self._report(DataStaleError(age, self._max_staleness))

    def _deliver(self, event: Notification) -> None:
        if isinstance(event, ErrorEvent):
            if self._on_error is not None:
                self._on_error(event.error)
        elif isinstance(event, AgeEvent):
            if self._on_age is not None:
                self._on_age(event.kind, event.age)
        elif isinstance(event, CheckEvent):
            if self._on_check is not None:
                self._on_check(event.name, event.enabled)

    def flush(self, timeout: float = 1.0) -> bool:
        """Block until notifications queued so far were delivered."""
        return self._dispatcher.flush(timeout)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Stop delivering notifications and detach from the source.

        Idempotent. The source keeps running; it may be shared.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._source.notifier.detach(self)
        self._dispatcher.stop()

    def __enter__(self) -> Flagset:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


__all__ = ["AgeCallback", "CheckCallback", "ErrorCallback", "Flagset", "log_errors_to"]
