"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    GoforitError
    ├── FlagError                (flags.py)
    │   ├── UnknownFlagError
    │   ├── DataStaleError
    │   ├── InvalidFlagError
    │   └── FlagEvaluationError
    └── SourceError              (sources.py)
        ├── SourceMissingError
        ├── SourceParseError
        └── SourceUnavailableError
"""

from goforit.kernel.errors.base import GoforitError
from goforit.kernel.errors.flags import (
    DataStaleError,
    FlagError,
    FlagEvaluationError,
    InvalidFlagError,
    UnknownFlagError,
)
from goforit.kernel.errors.sources import (
    SourceError,
    SourceMissingError,
    SourceParseError,
    SourceUnavailableError,
)

__all__ = [
    "DataStaleError",
    "FlagError",
    "FlagEvaluationError",
    "GoforitError",
    "InvalidFlagError",
    "SourceError",
    "SourceMissingError",
    "SourceParseError",
    "SourceUnavailableError",
    "UnknownFlagError",
]
