# src/tetris_ai/runtime/session.py
from __future__ import annotations

import logging
from typing import List, Literal, Optional

from tetris_ai.agents.ai_controller import AIController
from tetris_ai.game.core.game import TetrisGame
from tetris_ai.game.core.types import Action
from tetris_ai.runtime.scheduler import TickEvent, TickScheduler

Mode = Literal["player", "ai"]

GRAVITY = "gravity"
AI = "ai"

DEFAULT_AI_ACTION_MS = 200


class PlaySession:
    """
    Single-threaded glue between the game, the AI controller and the timers.

    - gravity ticks call game.tick(); the gravity interval follows the game's
      drop delay (re-synced after every tick batch)
    - ai ticks call controller.step(); the ai timer only runs in "ai" mode
    - pausing suspends both timers; resuming restarts them at full interval
    - player input is ignored while in "ai" mode
    """

    def __init__(
            self,
            *,
            game: TetrisGame,
            controller: Optional[AIController] = None,
            mode: Mode = "player",
            ai_action_ms: int = DEFAULT_AI_ACTION_MS,
            logger: Optional[logging.Logger] = None,
    ) -> None:
        self.game = game
        self.controller = controller if controller is not None else AIController(logger=logger)
        self.logger = logger
        self.mode: Mode = _check_mode(mode)
        self._game_over_logged = False

        self.scheduler = TickScheduler()
        self.scheduler.add_timer(GRAVITY, game.drop_delay_ms)
        self.scheduler.add_timer(AI, int(ai_action_ms), enabled=(self.mode == "ai"))

    # ---- lifecycle -----------------------------------------------------------------

    def start(self) -> None:
        self.game.start()
        self._game_over_logged = False
        self.controller.reset()
        self.scheduler.resume()
        self.scheduler.set_interval(GRAVITY, self.game.drop_delay_ms)
        if self.mode == "ai":
            self.controller.plan(self.game)
        if self.logger:
            self.logger.info("[session] start mode=%s", self.mode)

    def set_mode(self, mode: Mode) -> None:
        self.mode = _check_mode(mode)
        is_ai = self.mode == "ai"
        self.scheduler.set_enabled(AI, is_ai)
        if is_ai:
            self.controller.plan(self.game)
        else:
            self.controller.reset()
        if self.logger:
            self.logger.info("[session] mode=%s", self.mode)

    def toggle_mode(self) -> None:
        self.set_mode("player" if self.mode == "ai" else "ai")

    def toggle_pause(self) -> bool:
        if not self.game.toggle_pause():
            return False
        if self.game.paused:
            self.scheduler.pause()
        else:
            self.scheduler.resume()
        return True

    def set_ai_speed(self, ms: int) -> None:
        self.scheduler.set_interval(AI, int(ms))

    @property
    def ai_action_ms(self) -> int:
        return int(self.scheduler.interval_ms(AI))

    # ---- input / time --------------------------------------------------------------

    def handle(self, action: Action) -> bool:
        """Player input. Ignored in ai mode."""
        if self.mode == "ai":
            return False
        applied = self.game.apply(action)
        self._note_game_over()
        return applied

    def advance(self, dt_ms: float) -> List[TickEvent]:
        self._note_game_over()
        if not self.game.running:
            return []

        events = self.scheduler.advance(dt_ms)
        for ev in events:
            if not self.game.running:
                break
            if ev.name == GRAVITY:
                self.game.tick()
            elif ev.name == AI:
                self.controller.step(self.game)

        self._sync_gravity()
        self._note_game_over()
        return events

    def _note_game_over(self) -> None:
        if not self.game.game_over or self._game_over_logged:
            return
        self._game_over_logged = True
        if self.logger:
            self.logger.info(
                "[session] game over score=%d lines=%d level=%d",
                self.game.score,
                self.game.lines,
                self.game.level,
            )

    def _sync_gravity(self) -> None:
        delay = int(self.game.drop_delay_ms)
        if int(self.scheduler.interval_ms(GRAVITY)) != delay:
            self.scheduler.set_interval(GRAVITY, delay)


def _check_mode(mode: str) -> Mode:
    m = str(mode).strip().lower()
    if m not in ("player", "ai"):
        raise ValueError(f"mode must be 'player' or 'ai', got {mode!r}")
    return m  # type: ignore[return-value]


__all__ = ["Mode", "PlaySession", "GRAVITY", "AI", "DEFAULT_AI_ACTION_MS"]
