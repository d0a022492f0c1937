# src/tetris_ai/apps/bench/entrypoint.py
from __future__ import annotations

import argparse
import json
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional, Sequence

import numpy as np
from rich.progress import Progress

from tetris_ai.agents.ai_controller import AIController
from tetris_ai.agents.heuristic_agent import HeuristicAgent, HeuristicWeights
from tetris_ai.config.io import load_play_config
from tetris_ai.game.core.game import TetrisGame
from tetris_ai.game.core.types import Action
from tetris_ai.utils.logging import setup_logger


@dataclass(frozen=True)
class BenchResult:
    pieces: int
    score: int
    lines: int
    level: int
    game_over: bool
    seconds: float


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Run the heuristic AI headless and report score / lines.")
    ap.add_argument("--config", type=str, default=None, help="optional play config YAML (game + agent weights)")
    ap.add_argument("--pieces", type=int, default=500, help="stop after N locked pieces")
    ap.add_argument("--seed", type=int, default=0)
    ap.add_argument("--json", action="store_true", help="print the result as JSON")
    ap.add_argument("--no-progress", action="store_true")
    ap.add_argument("--log-level", type=str, default="info", choices=["debug", "info", "warning", "error"])
    return ap.parse_args(argv)


def run_ai_game(
        *,
        game: TetrisGame,
        controller: AIController,
        max_pieces: int,
        gravity_every: int = 5,
        progress: Optional[Progress] = None,
) -> BenchResult:
    """
    Drive a started game with the controller until max_pieces have locked or
    the game ends.

    Time is counted in controller steps: every `gravity_every` steps the piece
    also falls one row (5 matches 200ms actions against the level-1 1000ms
    drop). Gravity is what finishes off a piece whose planned rotation or
    shift is blocked.
    """
    if int(max_pieces) <= 0:
        raise ValueError(f"max_pieces must be > 0, got {max_pieces}")
    if int(gravity_every) <= 0:
        raise ValueError(f"gravity_every must be > 0, got {gravity_every}")

    task = progress.add_task("pieces", total=int(max_pieces)) if progress is not None else None

    t0 = time.perf_counter()
    locked = 0
    steps = 0
    while game.running and locked < int(max_pieces):
        steps += 1
        action = controller.step(game)
        dropped = action == Action.HARD_DROP
        if not dropped and (action is None or steps % int(gravity_every) == 0):
            dropped = game.tick()
        if dropped:
            locked += 1
            if progress is not None and task is not None:
                progress.advance(task)

    return BenchResult(
        pieces=int(locked),
        score=int(game.score),
        lines=int(game.lines),
        level=int(game.level),
        game_over=bool(game.game_over),
        seconds=float(time.perf_counter() - t0),
    )


def run_bench(args: argparse.Namespace) -> int:
    logger = setup_logger(name="tetris_ai.apps.bench", use_rich=True, level=str(args.log_level))

    cfg = load_play_config(Path(args.config) if args.config else None)
    weights: HeuristicWeights = cfg.agent.weights.to_weights()

    game = TetrisGame(
        width=int(cfg.game.width),
        height=int(cfg.game.height),
        rng=np.random.default_rng(int(args.seed)),
        logger=logger,
    )
    controller = AIController(agent=HeuristicAgent(weights=weights, logger=logger), logger=logger)

    logger.info("[bench] board=%dx%d seed=%d pieces=%d", cfg.game.width, cfg.game.height, int(args.seed), int(args.pieces))
    logger.info("[bench] weights=%s", weights)

    game.start()
    if bool(args.no_progress):
        res = run_ai_game(game=game, controller=controller, max_pieces=int(args.pieces))
    else:
        with Progress(transient=True) as progress:
            res = run_ai_game(game=game, controller=controller, max_pieces=int(args.pieces), progress=progress)

    rate = float(res.pieces) / res.seconds if res.seconds > 0 else 0.0
    logger.info(
        "[bench] pieces=%d score=%d lines=%d level=%d game_over=%s (%.1f pieces/s)",
        res.pieces,
        res.score,
        res.lines,
        res.level,
        res.game_over,
        rate,
    )
    if bool(args.json):
        print(json.dumps(asdict(res), indent=2, sort_keys=True))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    return run_bench(parse_args(argv))


if __name__ == "__main__":
    raise SystemExit(main())


__all__ = ["BenchResult", "parse_args", "run_ai_game", "run_bench", "main"]
