# tests/test_apps.py
from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
from pydantic import ValidationError

from tetris_ai.agents.ai_controller import AIController
from tetris_ai.apps.bench.entrypoint import run_ai_game
from tetris_ai.apps.play.entrypoint import build_session, parse_args, resolve_play_config
from tetris_ai.apps.play.ui import clamp_ai_speed
from tetris_ai.game.core.game import TetrisGame


def test_cli_overrides_apply_on_top_of_yaml(tmp_path: Path) -> None:
    p = tmp_path / "play.yaml"
    p.write_text("mode: ai\nagent:\n  action_ms: 80\nui:\n  cell: 20\n", encoding="utf-8")

    cfg = resolve_play_config(parse_args(["--config", str(p), "--seed", "3", "--cell", "24"]))
    assert cfg.mode == "ai"
    assert cfg.game.seed == 3
    assert cfg.agent.action_ms == 80
    assert cfg.ui.cell == 24

    cfg = resolve_play_config(parse_args(["--config", str(p), "--mode", "player", "--ai-ms", "120"]))
    assert cfg.mode == "player"
    assert cfg.agent.action_ms == 120


def test_cli_overrides_are_validated() -> None:
    with pytest.raises(ValidationError):
        resolve_play_config(parse_args(["--ai-ms", "0"]))


def test_build_session_wires_config() -> None:
    cfg = resolve_play_config(parse_args(["--mode", "ai", "--seed", "1", "--ai-ms", "150"]))
    s = build_session(cfg)
    assert s.mode == "ai"
    assert s.ai_action_ms == 150
    assert s.controller.agent.weights == cfg.agent.weights.to_weights()


def test_ai_speed_clamped() -> None:
    assert clamp_ai_speed(0) == 50
    assert clamp_ai_speed(300) == 300
    assert clamp_ai_speed(5000) == 1000


def test_headless_run_stops_after_piece_budget() -> None:
    game = TetrisGame(rng=np.random.default_rng(11))
    game.start()
    res = run_ai_game(game=game, controller=AIController(), max_pieces=40)
    assert res.pieces == 40
    assert not res.game_over
    assert res.score == game.score
    assert res.lines == game.lines


def test_headless_run_rejects_bad_budget() -> None:
    game = TetrisGame(rng=np.random.default_rng(0))
    game.start()
    with pytest.raises(ValueError, match="max_pieces"):
        run_ai_game(game=game, controller=AIController(), max_pieces=0)
