# src/tetris_ai/game/core/metrics.py
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from tetris_ai.game.core.constants import EMPTY_CELL


@dataclass(frozen=True)
class BoardMetrics:
    """
    Shape features of a locked grid, as the placement search scores them.

    height:    rows from the floor up to the topmost occupied row (0 when empty)
    holes:     empty cells with an occupied cell somewhere above, same column
    bumpiness: sum of |h[i+1] - h[i]| over adjacent column heights
    """
    height: int
    holes: int
    bumpiness: int


def _occupancy(grid: np.ndarray) -> np.ndarray:
    if not isinstance(grid, np.ndarray):
        raise TypeError(f"grid must be np.ndarray, got {type(grid).__name__}")
    if grid.ndim != 2:
        raise ValueError(f"grid must be 2D, got shape={grid.shape}")
    return grid != EMPTY_CELL


def _heights(occ: np.ndarray) -> np.ndarray:
    rows = occ.shape[0]
    # index of the first occupied row per column; empty columns report `rows`
    top = np.where(occ.any(axis=0), occ.argmax(axis=0), rows)
    return (rows - top).astype(np.int64)


def column_heights_from_grid(grid: np.ndarray) -> np.ndarray:
    return _heights(_occupancy(grid))


def board_metrics_from_grid(grid: np.ndarray) -> BoardMetrics:
    occ = _occupancy(grid)
    heights = _heights(occ)

    # a cell is covered once any block has appeared above it in its column
    covered = np.logical_or.accumulate(occ, axis=0)
    holes = int(np.count_nonzero(covered & ~occ))

    return BoardMetrics(
        height=int(heights.max(initial=0)),
        holes=holes,
        bumpiness=int(np.abs(np.diff(heights)).sum()),
    )


__all__ = ["BoardMetrics", "board_metrics_from_grid", "column_heights_from_grid"]
