# src/tetris_ai/apps/play/ui.py
from __future__ import annotations

import logging
from typing import Dict, Optional

import pygame

from tetris_ai.config.play import UiConfig
from tetris_ai.game.core.types import Action
from tetris_ai.rendering.pygame.renderer import TetrisRenderer
from tetris_ai.rendering.pygame.window import compute_layout, create_window
from tetris_ai.runtime.session import PlaySession

AI_SPEED_STEP_MS = 50
AI_SPEED_MIN_MS = 50
AI_SPEED_MAX_MS = 1000

PLAYER_KEYS: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_UP: Action.ROTATE,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_SPACE: Action.HARD_DROP,
    pygame.K_c: Action.HOLD,
}


def clamp_ai_speed(ms: int) -> int:
    return max(AI_SPEED_MIN_MS, min(AI_SPEED_MAX_MS, int(ms)))


def run_play_loop(*, session: PlaySession, ui: UiConfig, logger: Optional[logging.Logger] = None) -> int:
    game = session.game

    pygame.init()
    clock = pygame.time.Clock()

    renderer = TetrisRenderer(cell=int(ui.cell), show_grid_lines=bool(ui.show_grid), pieces=game.pieces)
    layout = compute_layout(board_h=game.h, board_w=game.w, cell=int(ui.cell), title="Tetris AI")
    screen = create_window(layout.window)
    pygame.key.set_repeat(170, 50)

    session.start()

    running = True
    while running:
        dt_ms = clock.tick(int(ui.fps))

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
                break
            if event.type != pygame.KEYDOWN:
                continue

            key = event.key
            if key == pygame.K_ESCAPE:
                running = False
                break
            if key == pygame.K_r:
                session.start()
                continue
            if key == pygame.K_p:
                session.toggle_pause()
                continue
            if key == pygame.K_m:
                session.toggle_mode()
                continue
            if key == pygame.K_LEFTBRACKET:  # [
                session.set_ai_speed(clamp_ai_speed(session.ai_action_ms + AI_SPEED_STEP_MS))
                continue
            if key == pygame.K_RIGHTBRACKET:  # ]
                session.set_ai_speed(clamp_ai_speed(session.ai_action_ms - AI_SPEED_STEP_MS))
                continue

            action = PLAYER_KEYS.get(key)
            if action is not None:
                session.handle(action)

        if not running:
            break

        session.advance(float(dt_ms))

        renderer.render(
            screen=screen,
            snap=game.state(),
            layout=layout,
            mode=session.mode,
            ai_action_ms=session.ai_action_ms,
        )

    if logger:
        logger.info("[play] quit score=%d lines=%d level=%d", game.score, game.lines, game.level)
    pygame.quit()
    return 0


__all__ = ["run_play_loop", "clamp_ai_speed", "PLAYER_KEYS"]
