# src/tetris_ai/game/core/game.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import numpy as np

from tetris_ai.game.core.board import Board
from tetris_ai.game.core.constants import BOARD_H, BOARD_W, SPAWN_X, SPAWN_Y
from tetris_ai.game.core.pieceset import PieceSet, default_pieceset
from tetris_ai.game.core.rules import ScoreConfig, drop_delay_ms, level_for_lines, score_for_clears
from tetris_ai.game.core.types import Action, GameSnapshot, Piece

# column offsets tried, in order, when an in-place rotation collides
WALL_KICKS: tuple[int, ...] = (-1, 1, -2, 2)


@dataclass(frozen=True)
class LockEvent:
    kind: str
    cleared_lines: int
    score_gained: int


class TetrisGame:
    """
    Playable engine: owns the live board and the current / next / held pieces.

    Contracts:

      - board.grid is the authoritative LOCKED board.
      - All legality goes through Board.is_valid_position().
      - Player-facing actions (move/rotate/drops/hold/tick) are no-ops returning
        False/0 unless the game is running, not paused and not over.
      - The RNG is injected (np.random.Generator) so piece sequences are reproducible.
      - Level/delay only ever increase within one game; reset() restores defaults.
    """

    def __init__(
            self,
            *,
            width: int = BOARD_W,
            height: int = BOARD_H,
            rng: Optional[np.random.Generator] = None,
            pieces: Optional[PieceSet] = None,
            score_cfg: Optional[ScoreConfig] = None,
            logger: Optional[logging.Logger] = None,
    ) -> None:
        self.logger = logger
        self.pieces = pieces or default_pieceset()
        self.board = Board.empty(h=int(height), w=int(width), pieces=self.pieces)
        self.score_cfg = score_cfg or ScoreConfig()
        self._rng: np.random.Generator = rng if rng is not None else np.random.default_rng()

        self.active: Optional[Piece] = None
        self.next_kind: Optional[str] = None
        self.hold_kind: Optional[str] = None
        self.can_hold = True

        self.score = 0
        self.lines = 0
        self.level = 1
        self.drop_delay_ms = drop_delay_ms(1, self.score_cfg)

        self.running = False
        self.paused = False
        self.game_over = False

        self.last_lock: Optional[LockEvent] = None

    @property
    def w(self) -> int:
        return int(self.board.w)

    @property
    def h(self) -> int:
        return int(self.board.h)

    # ---- lifecycle -----------------------------------------------------------------

    def reset(self) -> None:
        self.board.reset()
        self.active = None
        self.next_kind = None
        self.hold_kind = None
        self.can_hold = True

        self.score = 0
        self.lines = 0
        self.level = 1
        self.drop_delay_ms = drop_delay_ms(1, self.score_cfg)

        self.running = False
        self.paused = False
        self.game_over = False
        self.last_lock = None

    def start(self) -> None:
        self.reset()
        self.running = True
        self.spawn()

    def toggle_pause(self) -> bool:
        if not self.running:
            return False
        self.paused = not self.paused
        return True

    def spawn(self) -> None:
        """
        Promote the preview piece (or draw one), place it at the spawn point and
        draw a new preview. An immediately invalid spawn ends the game.
        """
        kind = self.next_kind if self.next_kind is not None else self.pieces.random_kind(self._rng)
        self.active = Piece(kind=kind, rot=0, x=SPAWN_X, y=SPAWN_Y)
        self.next_kind = self.pieces.random_kind(self._rng)
        self.can_hold = True

        if not self.board.is_valid_position(self.active):
            self._end_game()

    # ---- actions -------------------------------------------------------------------

    def can_act(self) -> bool:
        return bool(self.running and not self.paused and not self.game_over and self.active is not None)

    def move(self, dx: int, dy: int) -> bool:
        if not self.can_act():
            return False
        ap = self.active
        assert ap is not None
        if not self.board.is_valid_position(ap, dx, dy):
            return False
        ap.x += int(dx)
        ap.y += int(dy)
        return True

    def rotate(self) -> bool:
        """
        Clockwise rotation: in place first, then the wall kicks in WALL_KICKS order.
        """
        if not self.can_act():
            return False
        ap = self.active
        assert ap is not None
        nrot = ap.next_rotation()

        if self.board.is_valid_position(ap, 0, 0, nrot):
            ap.rot = nrot
            return True

        for kick in WALL_KICKS:
            if self.board.is_valid_position(ap, kick, 0, nrot):
                ap.x += int(kick)
                ap.rot = nrot
                return True
        return False

    def soft_drop(self) -> bool:
        if not self.move(0, 1):
            return False
        self.score += int(self.score_cfg.soft_drop_points)
        return True

    def hard_drop(self) -> int:
        """
        Drop the active piece as far as it goes, lock it, and return rows fallen.
        """
        if not self.can_act():
            return 0
        ap = self.active
        assert ap is not None

        dist = 0
        while self.board.is_valid_position(ap, 0, 1):
            ap.y += 1
            dist += 1

        self.score += int(self.score_cfg.hard_drop_points) * dist
        self.lock_active()
        return dist

    def hold(self) -> bool:
        """
        Stash the active kind (once per spawned piece). A previously held kind
        re-enters at the spawn point; otherwise the next piece is spawned.
        """
        if not self.can_act() or not self.can_hold:
            return False
        ap = self.active
        assert ap is not None

        previous = self.hold_kind
        self.hold_kind = ap.kind

        if previous is not None:
            self.active = Piece(kind=previous, rot=0, x=SPAWN_X, y=SPAWN_Y)
        else:
            self.spawn()

        self.can_hold = False
        return True

    def tick(self) -> bool:
        """
        Gravity step: move down one row, or lock when blocked.
        Returns True when the piece locked.
        """
        if not self.can_act():
            return False
        if self.move(0, 1):
            return False
        self.lock_active()
        return True

    def apply(self, action: Action) -> bool:
        if action == Action.LEFT:
            return self.move(-1, 0)
        if action == Action.RIGHT:
            return self.move(1, 0)
        if action == Action.ROTATE:
            return self.rotate()
        if action == Action.SOFT_DROP:
            return self.soft_drop()
        if action == Action.HARD_DROP:
            if not self.can_act():
                return False
            self.hard_drop()
            return True
        if action == Action.HOLD:
            return self.hold()
        raise ValueError(f"unknown action {action!r}")

    # ---- internals -----------------------------------------------------------------

    def lock_active(self) -> LockEvent:
        """
        Lock the active piece, clear lines, update score/lines/level, spawn next.
        """
        ap = self.active
        if ap is None:
            raise RuntimeError("lock_active() called without an active piece")

        self.board.lock(ap)
        cleared = int(self.board.clear_full_lines())

        gained = 0
        if cleared > 0:
            self.lines += cleared
            # scored at the level in effect when the lines were made
            gained = score_for_clears(cleared, self.level, self.score_cfg)
            self.score += gained
            self._update_level()

        event = LockEvent(kind=ap.kind, cleared_lines=cleared, score_gained=gained)
        self.last_lock = event
        if self.logger:
            self.logger.debug("[game] lock kind=%s cleared=%d score=+%d", ap.kind, cleared, gained)

        self.spawn()
        return event

    def _update_level(self) -> None:
        new_level = level_for_lines(self.lines, self.score_cfg)
        if new_level > self.level:
            self.level = int(new_level)
            self.drop_delay_ms = drop_delay_ms(self.level, self.score_cfg)

    def _end_game(self) -> None:
        self.running = False
        self.game_over = True
        if self.logger:
            self.logger.debug("[game] blocked spawn kind=%s", self.active.kind if self.active else None)

    def state(self) -> GameSnapshot:
        ap = self.active
        return GameSnapshot(
            grid=self.board.grid.copy(),
            active=ap.clone() if ap is not None else None,
            next_kind=self.next_kind,
            hold_kind=self.hold_kind,
            can_hold=bool(self.can_hold),
            score=int(self.score),
            lines=int(self.lines),
            level=int(self.level),
            drop_delay_ms=int(self.drop_delay_ms),
            running=bool(self.running),
            paused=bool(self.paused),
            game_over=bool(self.game_over),
        )

    def info(self) -> dict[str, Any]:
        return {
            "score": int(self.score),
            "lines": int(self.lines),
            "level": int(self.level),
            "game_over": bool(self.game_over),
        }


__all__ = ["LockEvent", "TetrisGame", "WALL_KICKS"]
