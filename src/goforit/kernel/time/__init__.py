"""Kernel time – Clock port, implementations and duration helpers."""
from goforit.kernel.time.clock import Clock, FrozenClock, SystemClock, as_utc, utc_now
from goforit.kernel.time.duration import format_duration, to_timedelta

__all__ = [
    "Clock",
    "FrozenClock",
    "SystemClock",
    "as_utc",
    "format_duration",
    "to_timedelta",
    "utc_now",
]
