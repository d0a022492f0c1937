# src/tetris_ai/runtime/scheduler.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class TickEvent:
    name: str
    at_ms: float


@dataclass
class _Timer:
    name: str
    interval_ms: float
    elapsed_ms: float = 0.0
    enabled: bool = True


class TickScheduler:
    """
    Explicit, clock-free repeating timers.

    The caller owns time: advance(dt_ms) moves the scheduler clock forward and
    returns every tick that fell due, ordered by due time (ties resolve in
    timer registration order).

    Pause/resume semantics:
      - pause() suspends all timers; advance() then emits nothing and time
        spent paused is not accumulated
      - resume() restarts every timer at its full interval (no partial
        elapsed time carries over)
    """

    def __init__(self) -> None:
        self._timers: Dict[str, _Timer] = {}
        self._order: List[str] = []
        self.now_ms: float = 0.0
        self.paused: bool = False

    def add_timer(self, name: str, interval_ms: float, *, enabled: bool = True) -> None:
        if name in self._timers:
            raise ValueError(f"timer already registered: {name!r}")
        self._timers[name] = _Timer(name=name, interval_ms=_check_interval(interval_ms), enabled=bool(enabled))
        self._order.append(name)

    def _get(self, name: str) -> _Timer:
        try:
            return self._timers[name]
        except KeyError as e:
            raise KeyError(f"unknown timer {name!r}. known timers={list(self._order)!r}") from e

    def interval_ms(self, name: str) -> float:
        return float(self._get(name).interval_ms)

    def is_enabled(self, name: str) -> bool:
        return bool(self._get(name).enabled)

    def set_interval(self, name: str, interval_ms: float) -> None:
        """Change a timer's period and restart it at the full new interval."""
        t = self._get(name)
        t.interval_ms = _check_interval(interval_ms)
        t.elapsed_ms = 0.0

    def set_enabled(self, name: str, enabled: bool) -> None:
        t = self._get(name)
        if bool(enabled) and not t.enabled:
            t.elapsed_ms = 0.0
        t.enabled = bool(enabled)

    def restart(self, name: str) -> None:
        self._get(name).elapsed_ms = 0.0

    def pause(self) -> None:
        self.paused = True

    def resume(self) -> None:
        self.paused = False
        for t in self._timers.values():
            t.elapsed_ms = 0.0

    def advance(self, dt_ms: float) -> List[TickEvent]:
        dt = float(dt_ms)
        if dt < 0:
            raise ValueError(f"dt_ms must be >= 0, got {dt_ms}")
        if self.paused:
            return []

        due: List[tuple[float, int, str]] = []
        for idx, name in enumerate(self._order):
            t = self._timers[name]
            if not t.enabled:
                continue
            offset = t.interval_ms - t.elapsed_ms
            while offset <= dt:
                due.append((offset, idx, name))
                offset += t.interval_ms
            # time since the last fire (or since start) once dt has passed
            t.elapsed_ms = t.interval_ms - (offset - dt)

        start = self.now_ms
        self.now_ms = start + dt
        due.sort()
        return [TickEvent(name=name, at_ms=start + off) for off, _idx, name in due]


def _check_interval(interval_ms: float) -> float:
    v = float(interval_ms)
    if v <= 0:
        raise ValueError(f"interval_ms must be > 0, got {interval_ms}")
    return v


__all__ = ["TickEvent", "TickScheduler"]
