"""Sources – CsvSource, a hot-reloading ``name,rate`` file.

The file is polled on a fixed interval by a daemon thread owned by the
source. Each line is one flag::

    new_checkout,0.25
    dark_mode,1
    legacy_search,0

A line that fails to parse is reported and skipped; every other line of the
same read still takes effect. A read failure leaves the previous table in
place.
"""
from __future__ import annotations

import csv
import os
import threading
from datetime import UTC, datetime, timedelta
from pathlib import Path

from goforit.flags import Flag, SampleFlag
from goforit.kernel.errors import (
    SourceMissingError,
    SourceParseError,
    SourceUnavailableError,
)
from goforit.kernel.time import Clock, SystemClock, as_utc, to_timedelta
from goforit.observability.logging import get_logger
from goforit.sources.source import Lookup, Snapshot, Source

_log = get_logger(__name__)

DEFAULT_INTERVAL = timedelta(seconds=15)


class CsvSource(Source):
    """Source that re-reads a CSV file of ``name,rate`` records.

    Parameters
    ----------
    path:
        File to watch. It does not need to exist yet.
    interval:
        Time between polls (``timedelta`` or seconds).
    clock:
        Used to measure how old the file's data is.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        interval: timedelta | float = DEFAULT_INTERVAL,
        *,
        clock: Clock | None = None,
    ) -> None:
        super().__init__()
        self._path = Path(path)
        self._interval = to_timedelta(interval)
        if self._interval <= timedelta(0):
            raise ValueError("interval must be positive")
        self._clock = clock or SystemClock()
        self._snapshot: Snapshot | None = None
        self._refresh_lock = threading.Lock()
        self._stop = threading.Event()
        self._ready = threading.Event()
        self._thread = threading.Thread(
            target=self._run,
            name=f"goforit-csv-{self._path.name}",
            daemon=True,
        )
        self._thread.start()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def snapshot(self) -> Snapshot | None:
        return self._snapshot

    @property
    def running(self) -> bool:
        return self._thread.is_alive() and not self._stop.is_set()

    def wait_ready(self, timeout: float | None = None) -> bool:
        """Block until the first poll cycle finished (or the source was closed)."""
        return self._ready.wait(timeout)

    # ------------------------------------------------------------------
    # Source interface
    # ------------------------------------------------------------------

    def lookup(self, name: str) -> Lookup:
        snapshot = self._snapshot
        if snapshot is None:
            return Lookup(None, None, SourceUnavailableError(str(self._path)))
        return Lookup(snapshot.get(name), snapshot.last_modified)

    def close(self) -> None:
        """Stop polling. Safe to call more than once."""
        self._stop.set()
        self._ready.set()
        if self._thread.is_alive() and threading.current_thread() is not self._thread:
            self._thread.join()

    # ------------------------------------------------------------------
    # Refresh cycle
    # ------------------------------------------------------------------

    def refresh(self) -> bool:
        """Run one read/parse/publish cycle now.

        Returns ``True`` when a new snapshot was published.
        """
        with self._refresh_lock:
            try:
                content = self._path.read_text(encoding="utf-8")
                mtime = self._path.stat().st_mtime
            except (OSError, UnicodeDecodeError) as exc:
                self.notifier.report_error(SourceMissingError(str(self._path), cause=exc))
                _log.debug("flag_source_unreadable", path=str(self._path), error=str(exc))
                return False

            flags, failures = self._parse(content)
            last_modified = datetime.fromtimestamp(mtime, UTC)
            self._snapshot = Snapshot(flags, last_modified)

        for failure in failures:
            self.notifier.report_error(failure)
        _log.debug(
            "flag_source_refreshed",
            path=str(self._path),
            flags=len(flags),
            failures=len(failures),
        )
        self.notifier.report_age(as_utc(self._clock.now()) - last_modified)
        return True

    def _parse(self, content: str) -> tuple[dict[str, Flag], list[SourceParseError]]:
        flags: dict[str, Flag] = {}
        failures: list[SourceParseError] = []
        for lineno, line in enumerate(content.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                flag = self._parse_line(line)
            except (csv.Error, ValueError) as exc:
                failures.append(
                    SourceParseError(str(self._path), lineno, line, reason=str(exc), cause=exc)
                )
                continue
            flags[flag.name] = flag
        return flags, failures

    @staticmethod
    def _parse_line(line: str) -> Flag:
        fields = [field.strip() for field in next(csv.reader([line]))]
        if len(fields) != 2:
            raise ValueError(f"expected 2 fields, got {len(fields)}")
        name, raw_rate = fields
        if not name:
            raise ValueError("empty flag name")
        try:
            rate = float(raw_rate)
        except ValueError:
            raise ValueError(f"invalid rate {raw_rate!r}") from None
        return SampleFlag(name, rate)

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                self.refresh()
            except Exception:  # noqa: BLE001
                _log.exception("flag_source_refresh_failed", path=str(self._path))
            self._ready.set()
            if self._stop.wait(self._interval.total_seconds()):
                break


__all__ = ["CsvSource", "DEFAULT_INTERVAL"]
