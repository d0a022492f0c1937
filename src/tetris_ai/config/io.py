# src/tetris_ai/config/io.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from omegaconf import DictConfig, OmegaConf
from pydantic import BaseModel

from tetris_ai.config.play import PlayConfig


def _as_mapping(container: Any, *, where: str) -> dict[str, Any]:
    if not isinstance(container, dict):
        raise TypeError(f"{where} must be a mapping, got {type(container).__name__}")
    return {str(k): v for k, v in container.items()}


def to_plain_dict(cfg: Any) -> dict[str, Any]:
    """Plain JSON-friendly dict from a config model or an OmegaConf node."""
    if isinstance(cfg, BaseModel):
        return cfg.model_dump(mode="json")
    if isinstance(cfg, DictConfig):
        return _as_mapping(OmegaConf.to_container(cfg, resolve=True), where="config")
    raise TypeError(f"unsupported config type: {type(cfg).__name__}")


def load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML through OmegaConf so ${...} interpolations resolve."""
    node = OmegaConf.load(Path(path))
    return _as_mapping(OmegaConf.to_container(node, resolve=True), where=f"config({path})")


def load_play_config(path: Optional[Path] = None) -> PlayConfig:
    if path is None:
        return PlayConfig()
    return PlayConfig.model_validate(load_yaml(path))


__all__ = ["to_plain_dict", "load_yaml", "load_play_config"]
