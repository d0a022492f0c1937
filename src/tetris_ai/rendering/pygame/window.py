# src/tetris_ai/rendering/pygame/window.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import pygame

SIDEBAR_W = 220
PAD = 24  # outer padding and board/sidebar gap
FRAME = 6  # board frame thickness drawn around the playfield
BOTTOM_PAD = 24
RIGHT_PAD = 16


@dataclass(frozen=True)
class WindowSpec:
    width: int
    height: int
    title: str = "Tetris AI"

    @property
    def size(self) -> Tuple[int, int]:
        return int(self.width), int(self.height)


@dataclass(frozen=True)
class Layout:
    """Pixel geometry shared by the play loop and the renderer."""

    origin: Tuple[int, int]  # top-left pixel of board cell (0, 0)
    margin: int
    sidebar_x: int
    sidebar_y: int
    sidebar_w: int
    window: WindowSpec


def compute_layout(
        *,
        board_h: int,
        board_w: int,
        cell: int,
        sidebar_w: int = SIDEBAR_W,
        title: str = "Tetris AI",
) -> Layout:
    board_px_w = int(board_w) * int(cell)
    board_px_h = int(board_h) * int(cell)

    sidebar_x = PAD + board_px_w + PAD
    spec = WindowSpec(
        width=sidebar_x + int(sidebar_w) + RIGHT_PAD,
        height=PAD + board_px_h + BOTTOM_PAD,
        title=str(title),
    )
    return Layout(
        origin=(PAD, PAD),
        margin=FRAME,
        sidebar_x=sidebar_x,
        sidebar_y=PAD - FRAME,
        sidebar_w=int(sidebar_w),
        window=spec,
    )


def create_window(spec: WindowSpec) -> pygame.Surface:
    screen = pygame.display.set_mode(spec.size)
    pygame.display.set_caption(spec.title)
    return screen


__all__ = ["SIDEBAR_W", "WindowSpec", "Layout", "compute_layout", "create_window"]
