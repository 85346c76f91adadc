"""Unit tests for flag variants and RandomSource."""

from __future__ import annotations

import random
import threading

import pytest

from goforit.flags import (
    ConstantFlag,
    Evaluation,
    Flag,
    FlagKind,
    RandomSource,
    SampleFlag,
    TagConditionFlag,
    TagRule,
    flag_from_value,
)
from goforit.kernel.errors import InvalidFlagError


class CountingDraw:
    """Draw stub returning scripted values and counting calls."""

    def __init__(self, *values: float) -> None:
        self._values = list(values) or [0.5]
        self.calls = 0

    def random(self) -> float:
        value = self._values[self.calls % len(self._values)]
        self.calls += 1
        return value


# ---------------------------------------------------------------------------
# ConstantFlag
# ---------------------------------------------------------------------------


class TestConstantFlag:
    @pytest.mark.parametrize("value", [True, False])
    def test_returns_value_without_drawing(self, value: bool) -> None:
        rnd = CountingDraw()
        result = ConstantFlag("c", value).evaluate(rnd, {"any": "tag"})
        assert result == Evaluation(value, None)
        assert rnd.calls == 0

    def test_kind(self) -> None:
        assert ConstantFlag("c", True).kind is FlagKind.CONSTANT

    def test_frozen(self) -> None:
        flag = ConstantFlag("c", True)
        with pytest.raises((AttributeError, TypeError)):
            flag.enabled = False  # type: ignore[misc]


# ---------------------------------------------------------------------------
# SampleFlag
# ---------------------------------------------------------------------------


class TestSampleFlag:
    def test_exactly_one_draw_per_evaluation(self) -> None:
        rnd = CountingDraw(0.1, 0.9)
        flag = SampleFlag("s", 0.5)
        assert flag.evaluate(rnd, {}).enabled is True
        assert flag.evaluate(rnd, {}).enabled is False
        assert rnd.calls == 2

    def test_draw_equal_to_rate_is_off(self) -> None:
        assert SampleFlag("s", 0.5).evaluate(CountingDraw(0.5), {}).enabled is False

    def test_rate_bounds(self) -> None:
        rnd = RandomSource.seeded(1)
        never = SampleFlag("never", 0)
        always = SampleFlag("always", 1)
        assert not any(never.evaluate(rnd, {}).enabled for _ in range(1000))
        assert all(always.evaluate(rnd, {}).enabled for _ in range(1000))

    @pytest.mark.parametrize("rate", [-0.1, 1.01, float("nan"), float("inf")])
    def test_invalid_rate(self, rate: float) -> None:
        with pytest.raises(InvalidFlagError):
            SampleFlag("s", rate)

    def test_invalid_rate_is_value_error(self) -> None:
        with pytest.raises(ValueError, match="outside"):
            SampleFlag("s", 2)

    def test_kind(self) -> None:
        assert SampleFlag("s", 0.2).kind is FlagKind.SAMPLE


# ---------------------------------------------------------------------------
# TagConditionFlag
# ---------------------------------------------------------------------------


class TestTagConditionFlag:
    def _flag(self) -> TagConditionFlag:
        return TagConditionFlag(
            "t",
            (
                TagRule({"cluster": "south", "user": "bob"}, enabled=True),
                TagRule({"cluster": ("north", "east")}, rate=0.5),
                TagRule({"cluster": "south"}, enabled=False),
            ),
        )

    def test_first_matching_rule_wins(self) -> None:
        rnd = CountingDraw()
        assert self._flag().evaluate(rnd, {"cluster": "south", "user": "bob"}).enabled is True
        assert self._flag().evaluate(rnd, {"cluster": "south", "user": "eve"}).enabled is False
        assert rnd.calls == 0

    def test_rule_with_rate_draws_once(self) -> None:
        rnd = CountingDraw(0.2, 0.8)
        flag = self._flag()
        assert flag.evaluate(rnd, {"cluster": "east"}).enabled is True
        assert flag.evaluate(rnd, {"cluster": "north"}).enabled is False
        assert rnd.calls == 2

    def test_no_match_is_off_without_draw(self) -> None:
        rnd = CountingDraw()
        assert self._flag().evaluate(rnd, {"cluster": "west"}) == Evaluation(False)
        assert self._flag().evaluate(rnd, {}) == Evaluation(False)
        assert rnd.calls == 0

    def test_empty_match_is_catch_all(self) -> None:
        flag = TagConditionFlag("t", (TagRule({"a": "b"}, enabled=False), TagRule()))
        assert flag.evaluate(CountingDraw(), {}).enabled is True

    def test_rules_list_is_frozen_to_tuple(self) -> None:
        flag = TagConditionFlag("t", [TagRule()])  # type: ignore[arg-type]
        assert isinstance(flag.rules, tuple)

    def test_invalid_rule_rate(self) -> None:
        with pytest.raises(InvalidFlagError):
            TagRule({"a": "b"}, rate=3)

    def test_kind(self) -> None:
        assert TagConditionFlag("t").kind is FlagKind.TAG_CONDITION

    def test_rule_match_is_read_only(self) -> None:
        source_match = {"user": "bob"}
        rule = TagRule(source_match)
        with pytest.raises(TypeError):
            rule.match["user"] = "eve"  # type: ignore[index]
        source_match["user"] = "eve"
        assert rule.matches({"user": "bob"}) is True
        assert rule.matches({"user": "eve"}) is False

    def test_flag_is_hashable(self) -> None:
        flag = self._flag()
        assert hash(flag) == hash(self._flag())
        assert flag == self._flag()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestFlagFromValue:
    def test_bool_is_constant(self) -> None:
        assert flag_from_value("a", True) == ConstantFlag("a", True)

    def test_number_is_sample(self) -> None:
        assert flag_from_value("a", 0.25) == SampleFlag("a", 0.25)
        assert flag_from_value("a", 1) == SampleFlag("a", 1.0)

    def test_flag_passes_through(self) -> None:
        flag = ConstantFlag("x", False)
        assert flag_from_value("ignored", flag) is flag

    def test_flag_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            Flag()  # type: ignore[abstract]


class TestRandomSource:
    def test_seeded_is_reproducible(self) -> None:
        a, b = RandomSource.seeded(42), RandomSource.seeded(42)
        assert [a.random() for _ in range(100)] == [b.random() for _ in range(100)]

    def test_matches_stdlib_sequence(self) -> None:
        expected = random.Random(7)
        rnd = RandomSource.seeded(7)
        assert [rnd.random() for _ in range(10)] == [expected.random() for _ in range(10)]

    def test_shared_is_singleton(self) -> None:
        assert RandomSource.shared() is RandomSource.shared()

    def test_draws_in_unit_interval(self) -> None:
        rnd = RandomSource()
        assert all(0.0 <= rnd.random() < 1.0 for _ in range(1000))

    def test_concurrent_draws_consume_whole_sequence(self) -> None:
        rnd = RandomSource.seeded(3)
        drawn: list[float] = []
        lock = threading.Lock()

        def draw() -> None:
            values = [rnd.random() for _ in range(250)]
            with lock:
                drawn.extend(values)

        threads = [threading.Thread(target=draw) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        expected = random.Random(3)
        assert sorted(drawn) == sorted(expected.random() for _ in range(1000))
