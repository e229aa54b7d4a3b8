"""Tests for the deadline clock."""

from __future__ import annotations

from game_search.engine.clock import DeadlineClock


class FakeTimer:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


class TestDeadlineClock:
    def test_running_until_duration_elapsed(self) -> None:
        timer = FakeTimer()
        clock = DeadlineClock(500, timer=timer)
        assert clock.is_running
        timer.now += 0.499
        assert clock.is_running
        timer.now += 0.001
        assert not clock.is_running

    def test_never_rearms(self) -> None:
        timer = FakeTimer()
        clock = DeadlineClock(10, timer=timer)
        timer.now += 1.0
        assert not clock.is_running
        timer.now -= 1.0  # 時計が戻っても期限切れのまま
        assert not clock.is_running

    def test_zero_budget_expires_immediately(self) -> None:
        assert not DeadlineClock(0).is_running

    def test_negative_budget_treated_as_zero(self) -> None:
        clock = DeadlineClock(-5, timer=FakeTimer())
        assert clock.duration_ms == 0.0
        assert not clock.is_running

    def test_infinite_budget(self) -> None:
        assert DeadlineClock(float("inf")).is_running

    def test_elapsed_and_remaining(self) -> None:
        timer = FakeTimer()
        clock = DeadlineClock(1000, timer=timer)
        timer.now += 0.25
        assert abs(clock.elapsed_ms - 250.0) < 1e-6
        assert abs(clock.remaining_ms - 750.0) < 1e-6
        timer.now += 5.0
        assert clock.remaining_ms == 0.0
