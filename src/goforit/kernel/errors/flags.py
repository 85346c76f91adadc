"""Flag errors – problems evaluating a single flag check."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from goforit.kernel.errors.base import GoforitError
from goforit.kernel.time import format_duration


class FlagError(GoforitError):
    """A flag check could not be answered with full confidence."""

    default_code = "flag_error"


class UnknownFlagError(FlagError):
    """The flag is neither overridden nor known to the source."""

    default_code = "unknown_flag"

    def __init__(self, name: str, **kwargs: Any) -> None:
        super().__init__(f"unknown flag '{name}'", detail={"flag": name}, **kwargs)
        self.name = name


class DataStaleError(FlagError):
    """The source's data is older than the configured maximum staleness.

    Stale data is still served; this error is informational.
    """

    default_code = "data_stale"

    def __init__(self, age: timedelta, max_staleness: timedelta, **kwargs: Any) -> None:
        super().__init__(
            f"flag data is stale: age {format_duration(age)} "
            f"exceeds max staleness {format_duration(max_staleness)}",
            detail={
                "age_seconds": age.total_seconds(),
                "max_staleness_seconds": max_staleness.total_seconds(),
            },
            **kwargs,
        )
        self.age = age
        self.max_staleness = max_staleness


class InvalidFlagError(FlagError, ValueError):
    """A flag definition is invalid (e.g. a sample rate outside ``[0, 1]``)."""

    default_code = "invalid_flag"


class FlagEvaluationError(FlagError):
    """A flag implementation raised instead of returning an evaluation."""

    default_code = "flag_evaluation_error"

    def __init__(self, name: str, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(
            message or f"error evaluating flag '{name}'",
            detail={"flag": name},
            **kwargs,
        )
        self.name = name


__all__ = [
    "DataStaleError",
    "FlagError",
    "FlagEvaluationError",
    "InvalidFlagError",
    "UnknownFlagError",
]
