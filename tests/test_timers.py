import pytest

from blaster.timers import IntervalTimer


def test_inactive_timer_never_fires():
    timer = IntervalTimer(100)
    assert not timer.active
    assert timer.tick(1000) == 0


def test_fires_after_each_full_interval():
    timer = IntervalTimer(100)
    timer.start()
    assert timer.tick(99) == 0
    assert timer.tick(1) == 1
    assert timer.tick(250) == 2
    assert timer.tick(50) == 1


def test_cancel_is_idempotent():
    timer = IntervalTimer(100)
    timer.start()
    assert timer.cancel() is True
    assert timer.cancel() is False
    assert timer.cancel_count == 1
    assert timer.tick(500) == 0


def test_restart_rearms_from_zero():
    timer = IntervalTimer(100)
    timer.start()
    timer.tick(90)
    timer.start()
    assert timer.tick(90) == 0
    assert timer.tick(10) == 1


def test_rejects_non_positive_interval():
    with pytest.raises(AssertionError):
        IntervalTimer(0)
