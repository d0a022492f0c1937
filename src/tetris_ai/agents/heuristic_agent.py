# src/tetris_ai/agents/heuristic_agent.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from tetris_ai.game.core.board import Board
from tetris_ai.game.core.constants import NUM_ROTATIONS
from tetris_ai.game.core.metrics import BoardMetrics
from tetris_ai.game.core.types import Move, Piece

# Leftmost matrix origin probed. Wider than any shape's reachable range on the
# left; out-of-board origins are filtered by Board.is_valid_position().
SCAN_MIN_COL: int = -2


@dataclass(frozen=True)
class HeuristicWeights:
    # score = lines*cleared + holes*holes + height*height + bumpiness*bumpiness
    lines_cleared: float = 760.0
    holes: float = -350.0
    height: float = -180.0
    bumpiness: float = -180.0

    def score(self, *, cleared_lines: int, metrics: BoardMetrics) -> float:
        return (
                self.lines_cleared * float(cleared_lines)
                + self.holes * float(metrics.holes)
                + self.height * float(metrics.height)
                + self.bumpiness * float(metrics.bumpiness)
        )


@dataclass(frozen=True)
class PlacementEval:
    """
    Outcome of hard-dropping one candidate placement on a board clone.

    move:   the (rot, col) target the candidate was generated from
    landed: the dropped piece (final y), a private copy
    metrics_after: post-lock, post-clear metrics of the clone
    """
    move: Move
    landed: Piece
    cleared_lines: int
    metrics_after: BoardMetrics
    score: float


def drop_piece(board: Board, piece: Piece) -> Piece:
    """Return a copy of piece moved down until the next step would be invalid."""
    dropped = piece.clone()
    while board.is_valid_position(dropped, 0, 1):
        dropped.y += 1
    return dropped


def evaluate_placement(board: Board, piece: Piece, weights: HeuristicWeights) -> tuple[int, BoardMetrics, float]:
    """
    Lock `piece` (already dropped) into a clone of `board`, clear lines and score
    the result. The input board is never touched.
    """
    sim = board.clone()
    sim.lock(piece)
    cleared = int(sim.clear_full_lines())
    metrics = sim.metrics()
    return cleared, metrics, weights.score(cleared_lines=cleared, metrics=metrics)


def enumerate_placements(board: Board, piece: Piece, weights: HeuristicWeights) -> Iterator[PlacementEval]:
    """
    Yield every valid (rot, col) candidate in scan order:
    rot ascending 0..3, then col ascending SCAN_MIN_COL..w-1.

    Each candidate starts at y=0 with the probed orientation; candidates whose
    start position is invalid are skipped.
    """
    for rot in range(NUM_ROTATIONS):
        for col in range(SCAN_MIN_COL, int(board.w)):
            probe = Piece(kind=piece.kind, rot=rot, x=col, y=0)
            if not board.is_valid_position(probe):
                continue
            landed = drop_piece(board, probe)
            cleared, metrics, score = evaluate_placement(board, landed, weights)
            yield PlacementEval(
                move=Move(rot=rot, col=col),
                landed=landed,
                cleared_lines=cleared,
                metrics_after=metrics,
                score=score,
            )


def compute_best_move(board: Board, piece: Piece, weights: Optional[HeuristicWeights] = None) -> Optional[Move]:
    """
    Exhaustive one-piece search over orientation x column.

    Ties keep the first maximum in scan order, so identical inputs always give
    the identical move. Returns None when no candidate is valid (the caller
    treats that as game over). Neither board nor piece is mutated.
    """
    w = weights if weights is not None else HeuristicWeights()

    best: Optional[PlacementEval] = None
    for cand in enumerate_placements(board, piece, w):
        if best is None or cand.score > best.score:
            best = cand

    return best.move if best is not None else None


class HeuristicAgent:
    """
    Thin stateful wrapper: holds weights and logs each decision at DEBUG.
    """

    def __init__(
            self,
            *,
            weights: Optional[HeuristicWeights] = None,
            logger: Optional[logging.Logger] = None,
    ) -> None:
        self.weights = weights if weights is not None else HeuristicWeights()
        self.logger = logger

    def best_move(self, board: Board, piece: Piece) -> Optional[Move]:
        move = compute_best_move(board, piece, self.weights)
        if self.logger:
            if move is None:
                self.logger.debug("[ai] no legal move for kind=%s", piece.kind)
            else:
                self.logger.debug("[ai] kind=%s -> rot=%d col=%d", piece.kind, move.rot, move.col)
        return move


__all__ = [
    "SCAN_MIN_COL",
    "HeuristicWeights",
    "PlacementEval",
    "HeuristicAgent",
    "compute_best_move",
    "drop_piece",
    "enumerate_placements",
    "evaluate_placement",
]
