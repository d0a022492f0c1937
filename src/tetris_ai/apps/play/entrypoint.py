# src/tetris_ai/apps/play/entrypoint.py
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

import numpy as np

from tetris_ai.agents.ai_controller import AIController
from tetris_ai.agents.heuristic_agent import HeuristicAgent
from tetris_ai.apps.play.ui import run_play_loop
from tetris_ai.config.io import load_play_config
from tetris_ai.config.play import PlayConfig
from tetris_ai.game.core.game import TetrisGame
from tetris_ai.runtime.session import PlaySession
from tetris_ai.utils.logging import setup_logger
from tetris_ai.utils.paths import relpath


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Play Tetris, or watch the heuristic AI play it (pygame).")
    ap.add_argument("--config", type=str, default=None, help="optional play config YAML")
    ap.add_argument("--mode", type=str, default=None, choices=["player", "ai"])
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--ai-ms", type=int, default=None, help="ms between AI actions")
    ap.add_argument("--cell", type=int, default=None, help="cell size in pixels")
    ap.add_argument("--log-level", type=str, default="info", choices=["debug", "info", "warning", "error"])
    return ap.parse_args(argv)


def resolve_play_config(args: argparse.Namespace) -> PlayConfig:
    """
    Load the YAML config (or defaults) and apply CLI overrides on top.
    """
    cfg = load_play_config(Path(args.config) if args.config else None)

    game = cfg.game
    agent = cfg.agent
    ui = cfg.ui
    if args.seed is not None:
        game = game.model_copy(update={"seed": int(args.seed)})
    if args.ai_ms is not None:
        agent = agent.model_copy(update={"action_ms": int(args.ai_ms)})
    if args.cell is not None:
        ui = ui.model_copy(update={"cell": int(args.cell)})

    mode = cfg.mode if args.mode is None else str(args.mode)

    # re-validate so CLI overrides go through the same field checks as YAML
    return PlayConfig.model_validate(
        {
            "mode": mode,
            "game": game.model_dump(),
            "agent": agent.model_dump(),
            "ui": ui.model_dump(),
        }
    )


def build_session(cfg: PlayConfig, *, logger: Optional[logging.Logger] = None) -> PlaySession:
    rng = np.random.default_rng(cfg.game.seed)
    game = TetrisGame(width=int(cfg.game.width), height=int(cfg.game.height), rng=rng, logger=logger)
    agent = HeuristicAgent(weights=cfg.agent.weights.to_weights(), logger=logger)
    controller = AIController(agent=agent, logger=logger)
    return PlaySession(
        game=game,
        controller=controller,
        mode=cfg.mode,
        ai_action_ms=int(cfg.agent.action_ms),
        logger=logger,
    )


def run_play(args: argparse.Namespace) -> int:
    logger = setup_logger(name="tetris_ai.apps.play", use_rich=True, level=str(args.log_level))
    cfg = resolve_play_config(args)

    logger.info("[play] config=%s", relpath(Path(args.config), base=Path.cwd()) if args.config else "<defaults>")
    logger.info("[play] mode=%s seed=%s board=%dx%d", cfg.mode, cfg.game.seed, cfg.game.width, cfg.game.height)
    logger.info("[play] ai_ms=%d cell=%d", int(cfg.agent.action_ms), int(cfg.ui.cell))

    session = build_session(cfg, logger=logger)
    return run_play_loop(session=session, ui=cfg.ui, logger=logger)


def main(argv: Optional[Sequence[str]] = None) -> int:
    return run_play(parse_args(argv))


if __name__ == "__main__":
    raise SystemExit(main())


__all__ = ["parse_args", "resolve_play_config", "build_session", "run_play", "main"]
