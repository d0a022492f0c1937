# src/tetris_ai/config/play.py
from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field, field_validator

from tetris_ai.agents.heuristic_agent import HeuristicWeights
from tetris_ai.config.base import ConfigBase
from tetris_ai.game.core.constants import BOARD_H, BOARD_W


def _as_int(value: object, *, where: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{where} must be an int, got bool")
    if not isinstance(value, (int, float, str)):
        raise ValueError(f"{where} must be an int-like value, got {type(value)!r}")
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(f"{where} must be an int-like value, got {value!r}") from e


class GameConfig(ConfigBase):
    """
    Engine-facing settings. Board shape is fixed for a game's lifetime.
    """

    width: int = Field(default=BOARD_W, ge=4)
    height: int = Field(default=BOARD_H, ge=4)
    seed: Optional[int] = Field(default=None, ge=0)

    @field_validator("seed", mode="before")
    @classmethod
    def _seed_int(cls, v: object) -> Optional[int]:
        if v is None:
            return None
        return _as_int(v, where="game.seed")


class WeightsConfig(ConfigBase):
    lines_cleared: float = 760.0
    holes: float = -350.0
    height: float = -180.0
    bumpiness: float = -180.0

    def to_weights(self) -> HeuristicWeights:
        return HeuristicWeights(
            lines_cleared=float(self.lines_cleared),
            holes=float(self.holes),
            height=float(self.height),
            bumpiness=float(self.bumpiness),
        )


class AgentConfig(ConfigBase):
    weights: WeightsConfig = Field(default_factory=WeightsConfig)
    action_ms: int = Field(default=200, ge=1)


class UiConfig(ConfigBase):
    cell: int = Field(default=30, ge=8)
    fps: int = Field(default=60, ge=1)
    show_grid: bool = True


class PlayConfig(ConfigBase):
    mode: Literal["player", "ai"] = "player"
    game: GameConfig = Field(default_factory=GameConfig)
    agent: AgentConfig = Field(default_factory=AgentConfig)
    ui: UiConfig = Field(default_factory=UiConfig)

    @field_validator("mode", mode="before")
    @classmethod
    def _mode_lower(cls, v: object) -> str:
        return str(v).strip().lower()


__all__ = ["GameConfig", "WeightsConfig", "AgentConfig", "UiConfig", "PlayConfig"]
