"""Unit tests for the goforit testing fakes."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from goforit.flags import RandomSource
from goforit.testing import FakeClock, FakeSource, RecordingFlag


class TestFakeClock:
    def test_pinned(self) -> None:
        assert FakeClock().now() == datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


class TestRecordingFlag:
    def test_records_calls_and_tags(self) -> None:
        flag = RecordingFlag("a", enabled=True, error=RuntimeError("warn"))
        result = flag.evaluate(RandomSource.seeded(1), {"k": "v"})
        assert result.enabled is True
        assert str(result.error) == "warn"
        assert flag.calls == 1
        assert flag.last_tags == {"k": "v"}


class TestFakeSource:
    def test_enable_disable(self) -> None:
        source = FakeSource().enable("on").disable("off")
        assert source.lookup("on").flag.enabled is True  # type: ignore[union-attr]
        assert source.lookup("off").flag.enabled is False  # type: ignore[union-attr]
        assert source.lookups == ["on", "off"]

    def test_error_and_last_modified(self) -> None:
        source = FakeSource()
        stamp = datetime(2026, 1, 1, tzinfo=UTC)
        source.error = RuntimeError("down")
        source.last_modified = stamp
        lookup = source.lookup("x")
        assert lookup.flag is None
        assert lookup.last_modified == stamp
        assert str(lookup.error) == "down"

    def test_push_events(self) -> None:
        received: list[object] = []

        class Listener:
            def source_error(self, error: Exception) -> None:
                received.append(error)

            def source_age(self, age: timedelta) -> None:
                received.append(age)

        source = FakeSource()
        source.notifier.attach(Listener())
        err = RuntimeError("x")
        source.push_error(err)
        source.push_age(timedelta(seconds=1))
        assert received == [err, timedelta(seconds=1)]

    def test_reset(self) -> None:
        source = FakeSource().enable("a")
        source.error = RuntimeError("x")
        source.lookup("a")
        source.reset()
        assert source.lookup("a").flag is None
        assert source.lookup("a").error is None
