# src/tetris_ai/game/core/board.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np

from tetris_ai.game.core.constants import EMPTY_CELL
from tetris_ai.game.core.metrics import BoardMetrics, board_metrics_from_grid, column_heights_from_grid
from tetris_ai.game.core.pieceset import PieceSet, default_pieceset
from tetris_ai.game.core.types import Piece


@dataclass(eq=False)
class Board:
    """
    Locked playfield: h rows x w columns, row 0 on top.

    grid cells hold board ids (0 = empty, 1..K = PieceSet.board_id(kind)). Dimensions are
    fixed for the lifetime of the board; lock/clear mutate grid contents only.
    """

    h: int
    w: int
    grid: np.ndarray  # locked blocks only (0=empty, >=1 board ids)
    pieces: PieceSet = field(default_factory=default_pieceset, repr=False, compare=False)

    def __post_init__(self) -> None:
        if int(self.h) <= 0 or int(self.w) <= 0:
            raise ValueError(f"invalid board size (h={self.h}, w={self.w})")
        if self.grid.shape != (int(self.h), int(self.w)):
            raise ValueError(f"grid shape must be (h={self.h}, w={self.w}), got {self.grid.shape}")

    @classmethod
    def empty(cls, *, h: int, w: int, pieces: Optional[PieceSet] = None) -> "Board":
        if int(h) <= 0 or int(w) <= 0:
            raise ValueError(f"invalid board size (h={h}, w={w})")
        grid = np.zeros((int(h), int(w)), dtype=np.uint8)
        if pieces is None:
            return cls(h=int(h), w=int(w), grid=grid)
        return cls(h=int(h), w=int(w), grid=grid, pieces=pieces)

    @classmethod
    def from_rows(cls, rows: Sequence[str], *, pieces: Optional[PieceSet] = None) -> "Board":
        """
        Build a board from text rows (top to bottom).

        '.' is empty, '#' is board id 1, a piece kind letter is that kind's board id.
        """
        ps = pieces or default_pieceset()
        if not rows:
            raise ValueError("rows must be non-empty")
        w = len(rows[0])
        b = cls.empty(h=len(rows), w=w, pieces=ps)
        for y, row in enumerate(rows):
            if len(row) != w:
                raise ValueError(f"rows must have equal width, got {w} and {len(row)}")
            for x, ch in enumerate(row):
                if ch == ".":
                    continue
                b.grid[y, x] = 1 if ch == "#" else ps.board_id(ch)
        return b

    def reset(self) -> None:
        self.grid.fill(EMPTY_CELL)

    def is_valid_position(self, piece: Piece, dx: int = 0, dy: int = 0, rot: Optional[int] = None) -> bool:
        """
        True iff every occupied cell of the piece's shape (rotation optionally
        overridden), shifted by (dx, dy), lies inside the board and on an empty cell.
        """
        m = self.pieces.shape_of(piece.kind, piece.rot if rot is None else rot)
        px = int(piece.x) + int(dx)
        py = int(piece.y) + int(dy)

        mh, mw = m.shape
        for yy in range(mh):
            for xx in range(mw):
                if m[yy, xx] == 0:
                    continue
                x = px + xx
                y = py + yy
                if x < 0 or x >= self.w or y < 0 or y >= self.h:
                    return False
                if self.grid[y, x] != EMPTY_CELL:
                    return False
        return True

    def lock(self, piece: Piece) -> None:
        """
        Write the piece's board id into every occupied cell it covers.

        Cells outside the board (e.g. rows above the top) are skipped and
        occupancy is NOT checked: callers must have validated the position with
        is_valid_position() first, otherwise the resulting grid is unspecified.
        """
        m = self.pieces.shape_of(piece.kind, piece.rot)
        board_id = self.pieces.board_id(piece.kind)

        mh, mw = m.shape
        for yy in range(mh):
            for xx in range(mw):
                if m[yy, xx] == 0:
                    continue
                x = int(piece.x) + xx
                y = int(piece.y) + yy
                if 0 <= y < self.h and 0 <= x < self.w:
                    self.grid[y, x] = board_id

    def clear_full_lines(self) -> int:
        """
        Remove every full row, drop the rows above it, refill from the top.

        Equivalent to scanning bottom-up and re-testing a row index after each
        removal: surviving rows keep their relative order and empty rows enter
        on top, so no surviving row can become full during the pass.
        """
        full = np.all(self.grid != EMPTY_CELL, axis=1)
        cleared = int(full.sum())
        if cleared <= 0:
            return 0
        kept = self.grid[~full]
        new_rows = np.zeros((cleared, self.w), dtype=self.grid.dtype)
        self.grid = np.vstack([new_rows, kept])
        return cleared

    def clone(self) -> "Board":
        return Board(h=self.h, w=self.w, grid=self.grid.copy(), pieces=self.pieces)

    def metrics(self) -> BoardMetrics:
        return board_metrics_from_grid(self.grid)

    def column_heights(self) -> np.ndarray:
        return column_heights_from_grid(self.grid)

    def __str__(self) -> str:
        return "\n".join("".join("." if int(c) == EMPTY_CELL else "#" for c in row) for row in self.grid)


__all__ = ["Board"]
