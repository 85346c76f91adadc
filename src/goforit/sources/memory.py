"""Sources – InMemorySource, a source over a dict that callers update."""
from __future__ import annotations

import threading
from collections.abc import Mapping
from datetime import datetime

from goforit.flags import Flag, flag_from_value
from goforit.sources.source import Lookup, Snapshot, Source


class InMemorySource(Source):
    """Source backed by an in-process table, built from ``{name: value}``.

    Values may be a :class:`~goforit.flags.Flag`, a ``bool`` (constant) or a
    number (sample rate). Every update publishes a fresh :class:`Snapshot`.
    """

    def __init__(
        self,
        flags: Mapping[str, Flag | bool | float] | None = None,
        *,
        last_modified: datetime | None = None,
    ) -> None:
        super().__init__()
        self._write_lock = threading.Lock()
        self._snapshot = Snapshot(
            {name: flag_from_value(name, value) for name, value in (flags or {}).items()},
            last_modified,
        )

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    def lookup(self, name: str) -> Lookup:
        snapshot = self._snapshot
        return Lookup(snapshot.get(name), snapshot.last_modified)

    def set_flag(self, name: str, value: Flag | bool | float) -> None:
        with self._write_lock:
            current = self._snapshot
            flags = dict(current.flags)
            flags[name] = flag_from_value(name, value)
            self._snapshot = Snapshot(flags, current.last_modified)

    def remove_flag(self, name: str) -> None:
        with self._write_lock:
            current = self._snapshot
            flags = {key: flag for key, flag in current.flags.items() if key != name}
            self._snapshot = Snapshot(flags, current.last_modified)

    def set_last_modified(self, last_modified: datetime | None) -> None:
        with self._write_lock:
            self._snapshot = Snapshot(self._snapshot.flags, last_modified)


__all__ = ["InMemorySource"]
