"""Testing fakes – in-memory doubles for sources, flags and clocks."""
from goforit.kernel.time import FrozenClock
from goforit.testing.fakes.clock import FakeClock
from goforit.testing.fakes.source import FakeSource, RecordingFlag

__all__ = ["FakeClock", "FakeSource", "FrozenClock", "RecordingFlag"]
