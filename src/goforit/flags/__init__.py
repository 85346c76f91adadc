"""Flags – the decision units a source serves and an engine evaluates."""
from goforit.flags.flag import (
    ConstantFlag,
    Draw,
    Evaluation,
    Flag,
    FlagKind,
    SampleFlag,
    TagConditionFlag,
    TagRule,
    flag_from_value,
)
from goforit.flags.rng import RandomSource

__all__ = [
    "ConstantFlag",
    "Draw",
    "Evaluation",
    "Flag",
    "FlagKind",
    "RandomSource",
    "SampleFlag",
    "TagConditionFlag",
    "TagRule",
    "flag_from_value",
]
