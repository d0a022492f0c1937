# src/tetris_ai/rendering/pygame/palette.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Color = Tuple[int, int, int]


@dataclass(frozen=True)
class Palette:
    bg: Color = (10, 10, 10)
    panel_bg: Color = (26, 26, 30)
    empty: Color = (10, 10, 10)
    grid: Color = (26, 26, 26)
    border: Color = (90, 90, 105)

    text: Color = (220, 220, 230)
    muted: Color = (170, 170, 185)
    warn: Color = (240, 160, 90)

    fallback_piece: Color = (180, 180, 200)

    ghost_alpha: int = 48  # 0..255, fill of the landing preview
    hold_locked_alpha: int = 96  # hold preview while hold is spent
    overlay_rgba: Tuple[int, int, int, int] = (0, 0, 0, 170)
