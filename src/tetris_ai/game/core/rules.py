# src/tetris_ai/game/core/rules.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class ScoreConfig:
    # indexed by cleared lines (0..4), multiplied by the current level
    line_points: Tuple[int, int, int, int, int] = (0, 100, 300, 500, 800)
    soft_drop_points: int = 1  # per row moved by a soft drop
    hard_drop_points: int = 2  # per row fallen on a hard drop

    lines_per_level: int = 10
    base_delay_ms: int = 1000
    delay_step_ms: int = 100
    min_delay_ms: int = 100


def score_for_clears(cleared: int, level: int, cfg: ScoreConfig) -> int:
    n = int(cleared)
    if n <= 0:
        return 0
    n = min(n, len(cfg.line_points) - 1)
    return int(cfg.line_points[n]) * int(level)


def level_for_lines(lines: int, cfg: ScoreConfig) -> int:
    return int(lines) // int(cfg.lines_per_level) + 1


def drop_delay_ms(level: int, cfg: ScoreConfig) -> int:
    return max(int(cfg.min_delay_ms), int(cfg.base_delay_ms) - int(cfg.delay_step_ms) * (int(level) - 1))


__all__ = ["ScoreConfig", "score_for_clears", "level_for_lines", "drop_delay_ms"]
