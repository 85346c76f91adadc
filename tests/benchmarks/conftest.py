"""conftest.py for benchmarks.

Provides engines wired to in-memory sources. Callbacks are left unset so the
numbers measure evaluation, not notification delivery, unless a benchmark
asks for ``on_check`` explicitly.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from goforit.engine import Flagset
from goforit.flags import TagConditionFlag, TagRule
from goforit.sources import InMemorySource


@pytest.fixture(scope="session")
def source() -> InMemorySource:
    return InMemorySource(
        {
            "always": True,
            "never": False,
            "half": 0.5,
            "regional": TagConditionFlag(
                "regional",
                (
                    TagRule({"cluster": "north", "tier": "gold"}),
                    TagRule({"cluster": "north"}, rate=0.1),
                ),
            ),
        }
    )


@pytest.fixture
def flagset(source: InMemorySource) -> Iterator[Flagset]:
    fs = Flagset(source, seed=47, on_error=None, tags={"cluster": "north"})
    yield fs
    fs.close()
