"""Kernel time – compact duration rendering and coercion.

Durations show up in error messages that operators grep for, so they are
rendered in the compact ``1h0m2s`` / ``1m2s`` / ``250ms`` form rather than
``timedelta``'s ``0:01:02``.
"""
from __future__ import annotations

from datetime import timedelta

_MICROS_PER_MS = 1_000
_MICROS_PER_SECOND = 1_000_000
_MICROS_PER_MINUTE = 60 * _MICROS_PER_SECOND
_MICROS_PER_HOUR = 60 * _MICROS_PER_MINUTE


def _total_micros(value: timedelta) -> int:
    return (value.days * 86_400 + value.seconds) * _MICROS_PER_SECOND + value.microseconds


def _with_fraction(value: int, unit: int) -> str:
    whole, frac = divmod(value, unit)
    if not frac:
        return str(whole)
    width = len(str(unit)) - 1
    return f"{whole}.{frac:0{width}d}".rstrip("0")


def format_duration(value: timedelta | float) -> str:
    """Render *value* (a ``timedelta`` or seconds) as e.g. ``"1m2s"``.

    Examples::

        format_duration(timedelta(seconds=62))    # "1m2s"
        format_duration(3600)                     # "1h0m0s"
        format_duration(0.25)                     # "250ms"
        format_duration(0)                        # "0s"
    """
    micros = _total_micros(to_timedelta(value))
    if micros == 0:
        return "0s"
    sign = "-" if micros < 0 else ""
    micros = abs(micros)

    if micros < _MICROS_PER_MS:
        return f"{sign}{micros}µs"
    if micros < _MICROS_PER_SECOND:
        return f"{sign}{_with_fraction(micros, _MICROS_PER_MS)}ms"

    hours, rem = divmod(micros, _MICROS_PER_HOUR)
    minutes, rem = divmod(rem, _MICROS_PER_MINUTE)
    seconds = _with_fraction(rem, _MICROS_PER_SECOND)
    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{sign}{minutes}m{seconds}s"
    return f"{sign}{seconds}s"


def to_timedelta(value: timedelta | float | None) -> timedelta:
    """Coerce seconds (or ``None``) to a ``timedelta``; ``None`` becomes zero."""
    if value is None:
        return timedelta(0)
    if isinstance(value, timedelta):
        return value
    return timedelta(seconds=value)


__all__ = ["format_duration", "to_timedelta"]
