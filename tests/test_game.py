# tests/test_game.py
from __future__ import annotations

import logging

import numpy as np
import pytest

from tetris_ai.game.core.game import TetrisGame
from tetris_ai.game.core.types import Action, Piece


def _started(seed: int = 0) -> TetrisGame:
    g = TetrisGame(rng=np.random.default_rng(seed))
    g.start()
    return g


def test_start_spawns_at_spawn_point() -> None:
    g = _started()
    assert g.running and not g.paused and not g.game_over
    assert g.active is not None
    assert (g.active.x, g.active.y, g.active.rot) == (3, 0, 0)
    assert g.next_kind in g.pieces.kinds()
    assert (g.score, g.lines, g.level, g.drop_delay_ms) == (0, 0, 1, 1000)


def test_actions_are_no_ops_before_start() -> None:
    g = TetrisGame(rng=np.random.default_rng(0))
    assert g.move(-1, 0) is False
    assert g.rotate() is False
    assert g.hard_drop() == 0
    assert g.hold() is False
    assert g.tick() is False
    assert g.toggle_pause() is False


def test_move_stops_at_wall() -> None:
    g = _started()
    g.active = Piece(kind="O")
    for _ in range(3):
        assert g.move(-1, 0)
    assert g.active.x == 0
    assert g.move(-1, 0) is False
    assert g.active.x == 0


def test_rotate_in_place() -> None:
    g = _started()
    g.active = Piece(kind="T", x=3, y=5)
    assert g.rotate()
    assert (g.active.rot, g.active.x) == (1, 3)


def test_rotate_uses_wall_kick() -> None:
    g = _started()
    # vertical I hugging the right wall; the horizontal orientation needs x=6
    g.active = Piece(kind="I", rot=1, x=7, y=0)
    assert g.rotate()
    assert (g.active.rot, g.active.x) == (2, 6)


def test_rotate_fails_when_every_kick_collides() -> None:
    g = _started()
    g.board.grid[:, :] = 1
    g.board.grid[0:4, 5] = 0
    g.active = Piece(kind="I", rot=1, x=3, y=0)
    assert g.rotate() is False
    assert (g.active.rot, g.active.x) == (1, 3)


def test_soft_drop_scores_one_per_row() -> None:
    g = _started()
    y0 = g.active.y
    assert g.soft_drop()
    assert g.active.y == y0 + 1
    assert g.score == 1


def test_hard_drop_scores_two_per_row_and_spawns() -> None:
    g = _started()
    g.active = Piece(kind="T")
    assert g.hard_drop() == 18
    assert g.score == 36
    assert str(g.board).splitlines()[-2:] == ["....#.....", "...###...."]
    assert g.active is not None and g.active.y == 0
    assert g.last_lock is not None and g.last_lock.kind == "T"


def test_line_clear_scores_at_current_level() -> None:
    g = _started()
    g.board.grid[19, :] = 1
    g.board.grid[19, 3:7] = 0
    g.active = Piece(kind="I")
    g.hard_drop()
    assert g.lines == 1
    assert g.score == 36 + 100
    assert int(np.count_nonzero(g.board.grid)) == 0
    assert g.last_lock is not None and g.last_lock.cleared_lines == 1


def test_level_up_after_ten_lines() -> None:
    g = _started()
    g.lines = 9
    g.board.grid[19, :] = 1
    g.board.grid[19, 3:7] = 0
    g.active = Piece(kind="I")
    g.hard_drop()
    assert g.lines == 10
    assert g.level == 2
    assert g.drop_delay_ms == 900
    # scored at level 1, before the level changed
    assert g.last_lock is not None and g.last_lock.score_gained == 100


def test_hold_once_per_spawn() -> None:
    g = _started()
    first = g.active.kind
    upcoming = g.next_kind
    assert g.hold()
    assert g.hold_kind == first
    assert g.active.kind == upcoming
    assert g.can_hold is False
    assert g.hold() is False

    g.hard_drop()
    assert g.can_hold is True
    current = g.active.kind
    assert g.hold()
    assert g.hold_kind == current
    assert g.active.kind == first
    assert (g.active.x, g.active.y, g.active.rot) == (3, 0, 0)


def test_pause_blocks_actions() -> None:
    g = _started()
    assert g.toggle_pause()
    assert g.paused
    assert g.move(1, 0) is False
    assert g.tick() is False
    assert g.toggle_pause()
    assert g.move(1, 0)


def test_tick_falls_then_locks() -> None:
    g = _started()
    g.active = Piece(kind="O", y=17)
    assert g.tick() is False
    assert g.active.y == 18
    assert g.tick() is True
    assert g.board.grid[18:20, 3:5].all()


def test_blocked_spawn_ends_game() -> None:
    g = _started()
    g.board.grid[0:2, :] = 1
    g.spawn()
    assert g.game_over
    assert not g.running
    assert g.move(1, 0) is False
    assert g.hard_drop() == 0


def test_apply_dispatches_actions() -> None:
    g = _started()
    g.active = Piece(kind="O")
    assert g.apply(Action.LEFT)
    assert g.active.x == 2
    assert g.apply(Action.RIGHT)
    assert g.apply(Action.ROTATE)
    assert g.apply(Action.SOFT_DROP)
    assert g.apply(Action.HARD_DROP)
    assert g.last_lock is not None and g.last_lock.kind == "O"
    assert g.apply(Action.HOLD)
    with pytest.raises(ValueError, match="unknown action"):
        g.apply("drop")  # type: ignore[arg-type]


def test_same_seed_same_piece_sequence() -> None:
    a = _started(seed=42)
    b = _started(seed=42)
    for _ in range(10):
        assert a.active.kind == b.active.kind
        assert a.next_kind == b.next_kind
        a.hard_drop()
        b.hard_drop()


def test_state_snapshot_is_a_copy() -> None:
    g = _started()
    snap = g.state()
    snap.grid[19, 0] = 5
    snap.active.x = 0
    assert int(g.board.grid[19, 0]) == 0
    assert g.active.x == 3
    assert snap.running and snap.level == 1 and snap.drop_delay_ms == 1000


def test_start_resets_previous_game() -> None:
    g = _started()
    g.hard_drop()
    g.hold()
    g.start()
    assert g.score == 0
    assert g.hold_kind is None
    assert int(np.count_nonzero(g.board.grid)) == 0
    assert g.info() == {"score": 0, "lines": 0, "level": 1, "game_over": False}


def test_lock_events_logged_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("tests.game")
    g = TetrisGame(rng=np.random.default_rng(0), logger=logger)
    g.start()
    g.board.grid[19, :] = 1
    g.board.grid[19, 3:7] = 0
    g.active = Piece(kind="I")

    with caplog.at_level(logging.DEBUG, logger="tests.game"):
        g.hard_drop()

    assert "[game] lock kind=I cleared=1 score=+100" in caplog.text
