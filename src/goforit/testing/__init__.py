"""Testing support – fakes for code that depends on goforit."""

from goforit.testing.fakes import FakeClock, FakeSource, FrozenClock, RecordingFlag

__all__ = ["FakeClock", "FakeSource", "FrozenClock", "RecordingFlag"]
