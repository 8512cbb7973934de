import pytest

from falling_blocks.game import ManualTickScheduler


def test_advance_fires_once_per_period():
    calls = []
    scheduler = ManualTickScheduler()
    scheduler.bind(lambda: calls.append(1))
    scheduler.reschedule(100)
    assert scheduler.advance(99) == 0
    assert scheduler.advance(1) == 1
    assert scheduler.advance(250) == 2
    assert scheduler.advance(50) == 1
    assert len(calls) == 4


def test_cancel_stops_ticks():
    calls = []
    scheduler = ManualTickScheduler()
    scheduler.bind(lambda: calls.append(1))
    scheduler.reschedule(100)
    scheduler.cancel()
    assert not scheduler.active
    assert scheduler.advance(1000) == 0
    assert calls == []


def test_reschedule_from_callback_uses_new_period():
    scheduler = ManualTickScheduler()
    scheduler.bind(lambda: scheduler.reschedule(50))
    scheduler.reschedule(100)
    assert scheduler.advance(100) == 1
    assert scheduler.period_ms == 50
    assert scheduler.advance(100) == 2
    assert scheduler.history[0] == 100


def test_cancel_from_callback_stops_remaining_ticks():
    scheduler = ManualTickScheduler()
    scheduler.bind(scheduler.cancel)
    scheduler.reschedule(10)
    assert scheduler.advance(1000) == 1


def test_rejects_non_positive_period():
    with pytest.raises(ValueError):
        ManualTickScheduler().reschedule(0)
