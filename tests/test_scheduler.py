# tests/test_scheduler.py
from __future__ import annotations

import pytest

from tetris_ai.runtime.scheduler import TickEvent, TickScheduler


def test_timer_fires_on_each_interval() -> None:
    s = TickScheduler()
    s.add_timer("gravity", 1000)
    assert s.advance(999) == []
    assert s.advance(1) == [TickEvent(name="gravity", at_ms=1000.0)]
    assert [e.at_ms for e in s.advance(2500)] == [2000.0, 3000.0]
    assert s.now_ms == 3500.0


def test_events_ordered_by_due_time_then_registration() -> None:
    s = TickScheduler()
    s.add_timer("gravity", 300)
    s.add_timer("ai", 200)
    events = s.advance(600)
    assert [(e.name, e.at_ms) for e in events] == [
        ("ai", 200.0),
        ("gravity", 300.0),
        ("ai", 400.0),
        ("gravity", 600.0),
        ("ai", 600.0),
    ]


def test_disabled_timer_is_silent_and_restarts_when_enabled() -> None:
    s = TickScheduler()
    s.add_timer("ai", 200, enabled=False)
    assert s.advance(1000) == []
    s.set_enabled("ai", True)
    assert s.is_enabled("ai")
    assert s.advance(199) == []
    assert [e.name for e in s.advance(1)] == ["ai"]


def test_set_interval_restarts_period() -> None:
    s = TickScheduler()
    s.add_timer("gravity", 1000)
    s.advance(800)
    s.set_interval("gravity", 500)
    assert s.interval_ms("gravity") == 500.0
    assert s.advance(499) == []
    assert len(s.advance(1)) == 1


def test_pause_drops_time_and_resume_restarts_timers() -> None:
    s = TickScheduler()
    s.add_timer("gravity", 1000)
    s.advance(900)
    s.pause()
    assert s.advance(5000) == []
    s.resume()
    assert s.advance(999) == []
    assert len(s.advance(1)) == 1


def test_restart_single_timer() -> None:
    s = TickScheduler()
    s.add_timer("a", 100)
    s.add_timer("b", 100)
    s.advance(50)
    s.restart("a")
    assert [e.name for e in s.advance(50)] == ["b"]
    assert [e.name for e in s.advance(50)] == ["a"]


def test_invalid_usage_raises() -> None:
    s = TickScheduler()
    s.add_timer("gravity", 1000)
    with pytest.raises(ValueError, match="already registered"):
        s.add_timer("gravity", 500)
    with pytest.raises(ValueError, match="interval_ms must be > 0"):
        s.add_timer("ai", 0)
    with pytest.raises(ValueError, match="dt_ms must be >= 0"):
        s.advance(-1)
    with pytest.raises(KeyError, match="unknown timer"):
        s.set_interval("nope", 10)
