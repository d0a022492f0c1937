# tests/test_heuristic_agent.py
from __future__ import annotations

import logging

import numpy as np
import pytest

from tetris_ai.agents.heuristic_agent import (
    HeuristicAgent,
    HeuristicWeights,
    compute_best_move,
    drop_piece,
    enumerate_placements,
)
from tetris_ai.game.core.board import Board
from tetris_ai.game.core.types import Move, Piece


def _naive_height_and_holes(grid: np.ndarray) -> tuple[int, int]:
    h, w = grid.shape
    top = h
    holes = 0
    for x in range(w):
        seen = False
        for y in range(h):
            if grid[y, x] != 0:
                seen = True
                top = min(top, y)
            elif seen:
                holes += 1
    return h - top, holes


def test_o_piece_on_empty_board_matches_brute_force() -> None:
    board = Board.empty(h=20, w=10)
    piece = Piece(kind="O")

    move = compute_best_move(board, piece)
    assert move is not None

    # independent enumeration of every drop column for the O piece
    results = {}
    for col in range(-2, 10):
        g = np.zeros((20, 10), dtype=np.uint8)
        if col < 0 or col + 1 >= 10:
            continue
        g[18:20, col:col + 2] = 1
        results[col] = _naive_height_and_holes(g)
    min_height = min(hh for hh, _ in results.values())

    sim = board.clone()
    sim.lock(drop_piece(board, Piece(kind="O", rot=move.rot, x=move.col, y=0)))
    height, holes = _naive_height_and_holes(sim.grid)
    assert holes == 0
    assert height == min_height
    # ties go to the first candidate in scan order
    assert move == Move(rot=0, col=0)


def test_candidates_are_scanned_rotation_then_column() -> None:
    board = Board.empty(h=20, w=10)
    cands = list(enumerate_placements(board, Piece(kind="O"), HeuristicWeights()))
    assert len(cands) == 4 * 9
    assert [c.move for c in cands[:9]] == [Move(rot=0, col=c) for c in range(9)]
    assert cands[9].move == Move(rot=1, col=0)
    assert all(c.landed.y == 18 for c in cands)
    # edge columns tie; the first one wins
    assert cands[0].score == cands[8].score


def test_prefers_clearing_four_lines() -> None:
    board = Board.from_rows(
        [
            "....",
            "....",
            "###.",
            "###.",
            "###.",
            "###.",
        ]
    )
    move = compute_best_move(board, Piece(kind="I"))
    assert move == Move(rot=1, col=1)

    best = max(enumerate_placements(board, Piece(kind="I"), HeuristicWeights()), key=lambda c: c.score)
    assert best.cleared_lines == 4
    assert best.score == pytest.approx(4 * 760.0)


def test_no_valid_candidate_returns_none() -> None:
    board = Board(h=4, w=4, grid=np.ones((4, 4), dtype=np.uint8))
    assert compute_best_move(board, Piece(kind="T")) is None


def test_search_does_not_mutate_inputs() -> None:
    board = Board.from_rows(
        [
            "......",
            "......",
            "#.....",
            "##..#.",
        ]
    )
    grid_before = board.grid.copy()
    piece = Piece(kind="S", rot=2, x=1, y=0)
    piece_before = piece.clone()

    compute_best_move(board, piece)
    list(enumerate_placements(board, piece, HeuristicWeights()))

    np.testing.assert_array_equal(board.grid, grid_before)
    assert piece == piece_before


def test_same_input_same_move() -> None:
    rng = np.random.default_rng(3)
    grid = np.zeros((20, 10), dtype=np.uint8)
    grid[12:, :] = (rng.random((8, 10)) < 0.5).astype(np.uint8)
    board = Board(h=20, w=10, grid=grid)
    for kind in ("I", "O", "T", "S", "Z", "J", "L"):
        a = compute_best_move(board, Piece(kind=kind))
        b = compute_best_move(board.clone(), Piece(kind=kind))
        assert a == b


def test_custom_weights_change_the_choice() -> None:
    board = Board.empty(h=20, w=10)
    bumpy = HeuristicWeights(lines_cleared=0.0, holes=0.0, height=0.0, bumpiness=1.0)
    assert compute_best_move(board, Piece(kind="O"), bumpy) == Move(rot=0, col=1)
    assert compute_best_move(board, Piece(kind="O")) == Move(rot=0, col=0)


def test_agent_logs_decision_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("tests.heuristic_agent")
    logger.setLevel(logging.DEBUG)
    agent = HeuristicAgent(logger=logger)

    with caplog.at_level(logging.DEBUG, logger="tests.heuristic_agent"):
        move = agent.best_move(Board.empty(h=20, w=10), Piece(kind="O"))

    assert move == Move(rot=0, col=0)
    assert "[ai] kind=O -> rot=0 col=0" in caplog.text
