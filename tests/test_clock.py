import pytest

from helio.clock import SimulationClock


class FakeSource:
    def __init__(self, start=100.0):
        self.now = start

    def __call__(self):
        return self.now


def test_starts_at_zero_and_counts_milliseconds():
    src = FakeSource()
    clock = SimulationClock(src)
    assert clock.now_ms() == 0.0
    src.now += 1.5
    assert clock.now_ms() == pytest.approx(1500.0)


def test_monotonic_readings_with_real_source():
    clock = SimulationClock()
    readings = [clock.now_ms() for _ in range(50)]
    assert all(b >= a for a, b in zip(readings, readings[1:]))


def test_pause_freezes_and_resume_skips_paused_span():
    src = FakeSource()
    clock = SimulationClock(src)
    src.now += 2.0
    clock.pause()
    assert clock.paused
    src.now += 10.0
    assert clock.now_ms() == pytest.approx(2000.0)
    clock.resume()
    assert not clock.paused
    assert clock.now_ms() == pytest.approx(2000.0)
    src.now += 1.0
    assert clock.now_ms() == pytest.approx(3000.0)


def test_toggle_and_repeated_calls():
    src = FakeSource()
    clock = SimulationClock(src)
    assert clock.toggle() is True
    clock.pause()
    src.now += 5.0
    assert clock.toggle() is False
    clock.resume()
    assert clock.now_ms() == pytest.approx(0.0)
