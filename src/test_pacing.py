"""
test_pacing.py
Purpose: Tick pacing against an injected clock (no real sleeping).
"""

import pytest

from axcheck.config import Speed
from axcheck.pacing import Pacer


class FakeClock:
    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


def _never(*_):
    raise AssertionError("untethered pacing must not touch the clock")


@pytest.mark.parametrize(
    "speed, interval",
    [
        (Speed.UNTETHERED, 0.0),
        (Speed.FAST, 0.01),
        (Speed.MODERATE, 0.2),
        (Speed.SLOW, 1.0),
    ],
)
def test_rate_class_intervals(speed, interval):
    assert speed.interval == interval


def test_untethered_never_sleeps():
    pacer = Pacer(Speed.UNTETHERED.interval, clock=_never, sleep=_never)
    for _ in range(1000):
        pacer.wait()
    assert pacer.untethered


def test_waits_one_interval_per_tick():
    clock = FakeClock()
    pacer = Pacer(0.2, clock=clock, sleep=clock.sleep)
    for _ in range(3):
        pacer.wait()
    assert clock.sleeps == pytest.approx([0.2, 0.2, 0.2])


def test_work_time_is_subtracted_from_the_wait():
    clock = FakeClock()
    pacer = Pacer(1.0, clock=clock, sleep=clock.sleep)
    pacer.wait()
    clock.now += 0.25
    pacer.wait()
    assert clock.sleeps == pytest.approx([1.0, 0.75])


def test_missed_deadlines_are_dropped_not_replayed():
    clock = FakeClock()
    pacer = Pacer(0.2, clock=clock, sleep=clock.sleep)
    pacer.wait()
    clock.now += 0.5
    pacer.wait()
    pacer.wait()
    # first wait slept, second was overdue, third realigns to the 0.2 grid
    assert clock.sleeps == pytest.approx([0.2, 0.1])


def test_negative_interval_rejected():
    with pytest.raises(ValueError):
        Pacer(-1)
