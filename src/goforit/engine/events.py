"""Engine – notification events queued for asynchronous delivery."""
from __future__ import annotations

import dataclasses
import enum
from datetime import timedelta


class AgeType(enum.StrEnum):
    """Where an age measurement came from."""

    BACKEND = "backend"
    """Derived from a lookup's ``last_modified`` during a flag check."""
    SOURCE = "source"
    """Pushed by the source's own background activity."""


@dataclasses.dataclass(frozen=True)
class ErrorEvent:
    error: Exception


@dataclasses.dataclass(frozen=True)
class AgeEvent:
    kind: AgeType
    age: timedelta


@dataclasses.dataclass(frozen=True)
class CheckEvent:
    name: str
    enabled: bool


type Notification = ErrorEvent | AgeEvent | CheckEvent

__all__ = ["AgeEvent", "AgeType", "CheckEvent", "ErrorEvent", "Notification"]
