"""Config settings – FlagsetSettings."""
from __future__ import annotations

import dataclasses
from datetime import timedelta
from typing import ClassVar

from goforit.config.settings.base import Settings
from goforit.config.validation import InvalidSettingValueError, MissingRequiredSettingError
from goforit.engine.dispatcher import DEFAULT_QUEUE_SIZE
from goforit.kernel.time import Clock
from goforit.sources.csv_file import DEFAULT_INTERVAL, CsvSource


@dataclasses.dataclass
class FlagsetSettings(Settings):
    """Engine and CSV source settings, read from ``GOFORIT_*`` variables.

    ``GOFORIT_MAX_STALENESS_SECONDS=300``, ``GOFORIT_SEED=42``,
    ``GOFORIT_QUEUE_SIZE``, ``GOFORIT_CSV_PATH``,
    ``GOFORIT_REFRESH_INTERVAL_SECONDS``.
    """

    _prefix: ClassVar[str] = "GOFORIT"

    max_staleness_seconds: float = 0.0
    seed: int | None = None
    queue_size: int = DEFAULT_QUEUE_SIZE
    csv_path: str = ""
    refresh_interval_seconds: float = DEFAULT_INTERVAL.total_seconds()

    def _validate(self) -> None:
        if self.max_staleness_seconds < 0:
            raise InvalidSettingValueError(
                "max_staleness_seconds", self.max_staleness_seconds, "must not be negative"
            )
        if self.queue_size <= 0:
            raise InvalidSettingValueError("queue_size", self.queue_size, "must be positive")
        if self.refresh_interval_seconds <= 0:
            raise InvalidSettingValueError(
                "refresh_interval_seconds", self.refresh_interval_seconds, "must be positive"
            )

    @property
    def max_staleness(self) -> timedelta:
        return timedelta(seconds=self.max_staleness_seconds)

    @property
    def refresh_interval(self) -> timedelta:
        return timedelta(seconds=self.refresh_interval_seconds)

    def csv_source(self, clock: Clock | None = None) -> CsvSource:
        """Start a :class:`~goforit.sources.CsvSource` watching ``csv_path``."""
        if not self.csv_path:
            raise MissingRequiredSettingError(f"{self._prefix}_CSV_PATH")
        return CsvSource(self.csv_path, self.refresh_interval, clock=clock)


__all__ = ["FlagsetSettings"]
