# src/tetris_ai/game/core/types.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

import numpy as np

from tetris_ai.game.core.constants import NUM_ROTATIONS, SPAWN_X, SPAWN_Y


class Action(Enum):
    LEFT = auto()
    RIGHT = auto()
    SOFT_DROP = auto()
    HARD_DROP = auto()
    ROTATE = auto()
    HOLD = auto()


@dataclass
class Piece:
    """
    A live or simulated piece: kind + orientation + matrix origin on the board.

    Mutable on purpose (the owner nudges x/y/rot in place). Anything that wants
    to experiment with a piece it does not own must work on clone().
    """

    kind: str
    rot: int = 0
    x: int = SPAWN_X
    y: int = SPAWN_Y

    def clone(self) -> "Piece":
        return Piece(kind=self.kind, rot=self.rot, x=self.x, y=self.y)

    def next_rotation(self) -> int:
        return (int(self.rot) + 1) % NUM_ROTATIONS

    def rotate(self) -> None:
        self.rot = self.next_rotation()


@dataclass(frozen=True)
class Move:
    """Placement target: orientation + column of the matrix origin (before the drop)."""

    rot: int
    col: int


@dataclass(frozen=True)
class GameSnapshot:
    """
    Render-facing snapshot of a TetrisGame.

    grid is a COPY of the locked board (no active overlay); the active piece is
    provided separately so renderers can draw it (and its ghost) on top.
    """

    grid: np.ndarray
    active: Optional[Piece]
    next_kind: Optional[str]
    hold_kind: Optional[str]
    can_hold: bool
    score: int
    lines: int
    level: int
    drop_delay_ms: int
    running: bool
    paused: bool
    game_over: bool


__all__ = ["Action", "Piece", "Move", "GameSnapshot"]
