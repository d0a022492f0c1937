# src/tetris_ai/rendering/pygame/surf.py
from __future__ import annotations

from typing import Dict, Tuple

import pygame

from tetris_ai.rendering.pygame.palette import Color

_CellKey = Tuple[int, Color, int]


class SurfaceCache:
    """
    Square, optionally translucent, filled surfaces keyed by (size, color, alpha).
    A frame only blits; it never allocates once every variant has been seen.
    """

    def __init__(self) -> None:
        self._cells: Dict[_CellKey, pygame.Surface] = {}

    def __len__(self) -> int:
        return len(self._cells)

    def cell(self, *, size: int, color: Color, alpha: int = 255) -> pygame.Surface:
        key: _CellKey = (int(size), (int(color[0]), int(color[1]), int(color[2])), int(alpha))
        try:
            return self._cells[key]
        except KeyError:
            pass
        side, rgb, a = key
        block = pygame.Surface((side, side), pygame.SRCALPHA)
        block.fill((*rgb, a))
        self._cells[key] = block
        return block


def blit_text(
        *,
        screen: pygame.Surface,
        font: pygame.font.Font,
        text: str,
        pos: Tuple[int, int],
        color: Color,
) -> None:
    screen.blit(font.render(str(text), True, color), pos)


__all__ = ["SurfaceCache", "blit_text"]
