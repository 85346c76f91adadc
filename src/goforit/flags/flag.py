"""Flags – the Flag port and its constant / sample / tag-condition variants."""
from __future__ import annotations

import abc
import dataclasses
import enum
from collections.abc import Collection, Mapping
from types import MappingProxyType
from typing import NamedTuple, Protocol

from goforit.kernel.errors import InvalidFlagError


class Draw(Protocol):
    """Anything that yields uniform floats in ``[0, 1)``."""

    def random(self) -> float: ...


class FlagKind(enum.StrEnum):
    CONSTANT = "constant"
    SAMPLE = "sample"
    TAG_CONDITION = "tag_condition"


class Evaluation(NamedTuple):
    """Outcome of a single flag evaluation.

    ``error`` is advisory: a flag may be enabled *and* carry a warning.
    """

    enabled: bool
    error: Exception | None = None


def _check_rate(name: str, rate: float) -> None:
    if not 0.0 <= rate <= 1.0:
        raise InvalidFlagError(
            f"flag '{name}' has rate {rate!r} outside [0, 1]",
            detail={"flag": name, "rate": rate},
        )


class Flag(abc.ABC):
    """Port: a named decision unit evaluated per request to a boolean."""

    name: str
    kind: FlagKind

    @abc.abstractmethod
    def evaluate(self, rnd: Draw, tags: Mapping[str, str]) -> Evaluation:
        """Decide whether the flag is on for a request carrying *tags*."""


@dataclasses.dataclass(frozen=True)
class ConstantFlag(Flag):
    name: str
    enabled: bool
    kind: FlagKind = dataclasses.field(default=FlagKind.CONSTANT, init=False)

    def evaluate(self, rnd: Draw, tags: Mapping[str, str]) -> Evaluation:  # noqa: ARG002
        return Evaluation(self.enabled)


@dataclasses.dataclass(frozen=True)
class SampleFlag(Flag):
    """On for a ``rate`` fraction of checks; one draw per evaluation."""

    name: str
    rate: float
    kind: FlagKind = dataclasses.field(default=FlagKind.SAMPLE, init=False)

    def __post_init__(self) -> None:
        _check_rate(self.name, self.rate)

    def evaluate(self, rnd: Draw, tags: Mapping[str, str]) -> Evaluation:  # noqa: ARG002
        return Evaluation(rnd.random() < self.rate)


@dataclasses.dataclass(frozen=True)
class TagRule:
    """One targeting rule of a :class:`TagConditionFlag`.

    ``match`` maps a tag key to the accepted value, or a collection of
    accepted values. Every key must be present in the request's tags with an
    accepted value for the rule to match; an empty ``match`` matches
    everything. A matched rule with a ``rate`` samples, otherwise it answers
    ``enabled``.
    """

    match: Mapping[str, str | Collection[str]] = dataclasses.field(
        default_factory=dict, hash=False
    )
    rate: float | None = None
    enabled: bool = True

    def __post_init__(self) -> None:
        if self.rate is not None:
            _check_rate("<rule>", self.rate)
        frozen = {
            key: value if isinstance(value, str) else frozenset(value)
            for key, value in self.match.items()
        }
        object.__setattr__(self, "match", MappingProxyType(frozen))

    def matches(self, tags: Mapping[str, str]) -> bool:
        for key, accepted in self.match.items():
            value = tags.get(key)
            if value is None:
                return False
            if isinstance(accepted, str):
                if value != accepted:
                    return False
            elif value not in accepted:
                return False
        return True


@dataclasses.dataclass(frozen=True)
class TagConditionFlag(Flag):
    """Evaluates the first rule matching the request's tags, in order."""

    name: str
    rules: tuple[TagRule, ...] = ()
    kind: FlagKind = dataclasses.field(default=FlagKind.TAG_CONDITION, init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", tuple(self.rules))

    def evaluate(self, rnd: Draw, tags: Mapping[str, str]) -> Evaluation:
        for rule in self.rules:
            if not rule.matches(tags):
                continue
            if rule.rate is not None:
                return Evaluation(rnd.random() < rule.rate)
            return Evaluation(rule.enabled)
        return Evaluation(False)


def flag_from_value(name: str, value: Flag | bool | float) -> Flag:
    """Build a flag from a shorthand: ``bool`` is constant, a number is a rate."""
    if isinstance(value, Flag):
        return value
    if isinstance(value, bool):
        return ConstantFlag(name, value)
    return SampleFlag(name, float(value))


__all__ = [
    "ConstantFlag",
    "Draw",
    "Evaluation",
    "Flag",
    "FlagKind",
    "SampleFlag",
    "TagConditionFlag",
    "TagRule",
    "flag_from_value",
]
