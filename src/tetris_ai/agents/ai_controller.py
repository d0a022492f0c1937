# src/tetris_ai/agents/ai_controller.py
from __future__ import annotations

import logging
from typing import Optional

from tetris_ai.agents.heuristic_agent import HeuristicAgent
from tetris_ai.game.core.game import TetrisGame
from tetris_ai.game.core.types import Action, Move, Piece


class AIController:
    """
    Actuates heuristic placements on a live game, one discrete action per step.

    Per step (first that applies):
      1) rotate until the active orientation matches the target
      2) shift one column toward the target column
      3) hard drop, then plan for the freshly spawned piece

    The plan is computed once per spawned piece. A piece that spawned without
    passing through this controller (gravity lock, hold) is detected by identity
    and re-planned on the next step.
    """

    def __init__(self, *, agent: Optional[HeuristicAgent] = None, logger: Optional[logging.Logger] = None) -> None:
        self.agent = agent if agent is not None else HeuristicAgent(logger=logger)
        self.logger = logger
        self.target: Optional[Move] = None
        self._planned_for: Optional[Piece] = None

    def reset(self) -> None:
        self.target = None
        self._planned_for = None

    def plan(self, game: TetrisGame) -> Optional[Move]:
        ap = game.active
        if ap is None or game.game_over:
            self.reset()
            return None
        self.target = self.agent.best_move(game.board, ap)
        self._planned_for = ap
        if self.target is None and self.logger:
            self.logger.info("[ai] no legal placement; waiting for game over")
        return self.target

    def step(self, game: TetrisGame) -> Optional[Action]:
        """
        Perform at most one action. Returns the action attempted, or None when
        nothing was done (game not running / paused / over, or no target).
        """
        if not game.can_act():
            return None

        ap = game.active
        assert ap is not None
        if ap is not self._planned_for:
            self.plan(game)

        tgt = self.target
        if tgt is None:
            return None

        if ap.rot != tgt.rot:
            game.rotate()
            return Action.ROTATE

        if ap.x < tgt.col:
            game.move(1, 0)
            return Action.RIGHT
        if ap.x > tgt.col:
            game.move(-1, 0)
            return Action.LEFT

        game.hard_drop()
        self.plan(game)
        return Action.HARD_DROP


__all__ = ["AIController"]
