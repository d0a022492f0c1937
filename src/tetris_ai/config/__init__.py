from .io import load_play_config, load_yaml, to_plain_dict
from .play import AgentConfig, GameConfig, PlayConfig, UiConfig, WeightsConfig

__all__ = [
    "AgentConfig",
    "GameConfig",
    "PlayConfig",
    "UiConfig",
    "WeightsConfig",
    "load_play_config",
    "load_yaml",
    "to_plain_dict",
]
