"""Sources – the Source port, Snapshot and Lookup value objects."""
from __future__ import annotations

import abc
import dataclasses
from collections.abc import Mapping
from datetime import datetime
from types import MappingProxyType, TracebackType
from typing import NamedTuple

from goforit.flags import Flag
from goforit.sources.notifier import SourceNotifier


@dataclasses.dataclass(frozen=True)
class Snapshot:
    """Immutable point-in-time table of every known flag.

    Sources publish a new snapshot by rebinding a single attribute, so a
    reader sees either the previous table or the next one, never a mix.
    """

    flags: Mapping[str, Flag] = dataclasses.field(default_factory=dict)
    last_modified: datetime | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "flags", MappingProxyType(dict(self.flags)))

    def __len__(self) -> int:
        return len(self.flags)

    def __contains__(self, name: object) -> bool:
        return name in self.flags

    def get(self, name: str) -> Flag | None:
        return self.flags.get(name)


class Lookup(NamedTuple):
    """Result of :meth:`Source.lookup`.

    ``flag is None`` means the name is unknown to the source.
    ``last_modified is None`` means no staleness applies.
    ``error`` reports a source-wide problem, not a missing name.
    """

    flag: Flag | None
    last_modified: datetime | None = None
    error: Exception | None = None


class Source(abc.ABC):
    """Port: provides the current flag table from a cache, never doing I/O.

    Concrete sources push out-of-band errors and ages through
    :attr:`notifier`.
    """

    def __init__(self) -> None:
        self.notifier = SourceNotifier()

    @abc.abstractmethod
    def lookup(self, name: str) -> Lookup:
        """Return the flag named *name* from the latest snapshot."""

    def close(self) -> None:
        """Stop any background activity owned by the source."""

    def __enter__(self) -> Source:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


__all__ = ["Lookup", "Snapshot", "Source"]
