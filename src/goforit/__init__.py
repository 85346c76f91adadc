"""
goforit – feature flag evaluation backed by a refreshed flag source.

Import path convention::

    from goforit import Flagset, CsvSource
    from goforit.kernel.errors import UnknownFlagError
    from goforit.testing import FakeSource
"""

from goforit.config import EnvSettingsLoader, FlagsetSettings
from goforit.engine import AgeType, Flagset, log_errors_to
from goforit.flags import (
    ConstantFlag,
    Evaluation,
    Flag,
    FlagKind,
    RandomSource,
    SampleFlag,
    TagConditionFlag,
    TagRule,
)
from goforit.kernel.errors import (
    DataStaleError,
    GoforitError,
    SourceMissingError,
    SourceParseError,
    UnknownFlagError,
)
from goforit.sources import CsvSource, InMemorySource, Lookup, Snapshot, Source

__version__ = "0.1.0"
__all__ = [
    "AgeType",
    "ConstantFlag",
    "CsvSource",
    "DataStaleError",
    "EnvSettingsLoader",
    "Evaluation",
    "Flag",
    "FlagKind",
    "Flagset",
    "FlagsetSettings",
    "GoforitError",
    "InMemorySource",
    "Lookup",
    "RandomSource",
    "SampleFlag",
    "Snapshot",
    "Source",
    "SourceMissingError",
    "SourceParseError",
    "TagConditionFlag",
    "TagRule",
    "UnknownFlagError",
    "__version__",
]
