# tests/test_ai_controller.py
from __future__ import annotations

import numpy as np

from tetris_ai.agents.ai_controller import AIController
from tetris_ai.agents.heuristic_agent import compute_best_move
from tetris_ai.game.core.game import TetrisGame
from tetris_ai.game.core.types import Action, Move, Piece


def _started(seed: int = 0) -> TetrisGame:
    g = TetrisGame(rng=np.random.default_rng(seed))
    g.start()
    return g


def test_walks_o_piece_to_the_left_edge_then_drops() -> None:
    g = _started()
    g.active = Piece(kind="O")
    ctl = AIController()

    actions = [ctl.step(g) for _ in range(4)]
    assert actions == [Action.LEFT, Action.LEFT, Action.LEFT, Action.HARD_DROP]
    assert g.board.grid[18:20, 0:2].all()
    assert g.last_lock is not None and g.last_lock.kind == "O"


def test_rotates_before_shifting() -> None:
    g = _started()
    g.board.grid[19, :] = 1
    g.board.grid[15:20, 9] = 0
    g.active = Piece(kind="I")
    ctl = AIController()

    target = ctl.plan(g)
    assert target == compute_best_move(g.board, Piece(kind="I"))
    assert target is not None and target.rot != 0

    first = ctl.step(g)
    assert first == Action.ROTATE


def test_plans_for_the_new_piece_after_drop() -> None:
    g = _started()
    ctl = AIController()
    ctl.plan(g)
    while ctl.step(g) != Action.HARD_DROP:
        pass
    assert ctl.target == compute_best_move(g.board, g.active)


def test_replans_when_the_piece_changes_underneath() -> None:
    g = _started()
    ctl = AIController()
    ctl.plan(g)
    g.hold()
    new_piece = g.active
    ctl.step(g)
    assert ctl._planned_for is new_piece


def test_idle_when_paused_or_over() -> None:
    g = _started()
    ctl = AIController()
    g.toggle_pause()
    assert ctl.step(g) is None
    g.toggle_pause()

    g.board.grid[0:2, :] = 1
    g.spawn()
    assert g.game_over
    assert ctl.step(g) is None
    assert ctl.plan(g) is None
    assert ctl.target is None


def test_single_reachable_placement_is_planned() -> None:
    g = _started()
    g.board.grid[:, :] = 1
    g.board.grid[0:2, 3:5] = 0
    g.active = Piece(kind="O")
    ctl = AIController()
    # only placement is the spawn spot itself
    assert ctl.plan(g) == Move(rot=0, col=3)


def test_plays_many_pieces_without_losing() -> None:
    g = _started(seed=5)
    ctl = AIController()
    drops = 0
    for _ in range(20_000):
        if ctl.step(g) == Action.HARD_DROP:
            drops += 1
        if drops >= 60 or g.game_over:
            break
    assert drops == 60
    assert not g.game_over
    assert g.lines > 0
