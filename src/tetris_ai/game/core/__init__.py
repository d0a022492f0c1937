# src/tetris_ai/game/core/__init__.py
from __future__ import annotations

from tetris_ai.game.core.board import Board
from tetris_ai.game.core.game import LockEvent, TetrisGame
from tetris_ai.game.core.metrics import BoardMetrics, board_metrics_from_grid
from tetris_ai.game.core.pieceset import PieceDef, PieceSet, default_pieceset
from tetris_ai.game.core.rules import ScoreConfig, drop_delay_ms, level_for_lines, score_for_clears
from tetris_ai.game.core.types import Action, GameSnapshot, Move, Piece

__all__ = [
    "Action",
    "Board",
    "BoardMetrics",
    "GameSnapshot",
    "LockEvent",
    "Move",
    "Piece",
    "PieceDef",
    "PieceSet",
    "ScoreConfig",
    "TetrisGame",
    "board_metrics_from_grid",
    "default_pieceset",
    "drop_delay_ms",
    "level_for_lines",
    "score_for_clears",
]
