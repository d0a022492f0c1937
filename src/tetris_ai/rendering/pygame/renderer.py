# src/tetris_ai/rendering/pygame/renderer.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np
import pygame

from tetris_ai.agents.heuristic_agent import drop_piece
from tetris_ai.game.core.board import Board
from tetris_ai.game.core.pieceset import PieceSet
from tetris_ai.game.core.types import GameSnapshot, Piece
from tetris_ai.rendering.pygame.palette import Color, Palette
from tetris_ai.rendering.pygame.surf import SurfaceCache, blit_text
from tetris_ai.rendering.pygame.window import Layout

__all__ = ["Fonts", "TetrisRenderer", "CONTROLS"]

CONTROLS: Tuple[Tuple[str, str], ...] = (
    ("<- ->", "move"),
    ("Up", "rotate"),
    ("Down", "soft drop"),
    ("Space", "hard drop"),
    ("C", "hold"),
    ("P", "pause"),
    ("M", "player / AI"),
    ("[ ]", "AI speed"),
    ("R", "restart"),
)


@dataclass(frozen=True)
class Fonts:
    main: pygame.font.Font
    small: pygame.font.Font
    big: pygame.font.Font


@dataclass(frozen=True)
class PanelLayout:
    preview_h: int = 110
    preview_cell: int = 22
    gap_y: int = 12
    pad_x: int = 10
    row_h: int = 20


_PANEL = PanelLayout()


class TetrisRenderer:
    def __init__(
            self,
            *,
            cell: int,
            show_grid_lines: bool,
            pieces: PieceSet,
            palette: Optional[Palette] = None,
    ) -> None:
        self.cell = int(cell)
        self.show_grid_lines = bool(show_grid_lines)
        self.pieces = pieces
        self.palette = palette or Palette()

        self.fonts = Fonts(
            main=pygame.font.SysFont("consolas", 18),
            small=pygame.font.SysFont("consolas", 14),
            big=pygame.font.SysFont("consolas", 32, bold=True),
        )

        self.cache = SurfaceCache()

    def render(
            self,
            *,
            screen: pygame.Surface,
            snap: GameSnapshot,
            layout: Layout,
            mode: str,
            ai_action_ms: int,
    ) -> None:
        pal = self.palette
        screen.fill(pal.bg)

        self._draw_board(screen=screen, grid=snap.grid, layout=layout)
        if snap.active is not None and not snap.game_over:
            self._draw_ghost(screen=screen, grid=snap.grid, active=snap.active, layout=layout)
            self._draw_piece_cells(screen=screen, piece=snap.active, origin=layout.origin, cell=self.cell)

        self._draw_sidebar(screen=screen, snap=snap, layout=layout, mode=mode, ai_action_ms=ai_action_ms)

        if snap.game_over:
            self._draw_overlay(
                screen=screen, title="GAME OVER", message=f"Final Score: {snap.score}", title_color=self.palette.warn
            )
        elif snap.paused:
            self._draw_overlay(screen=screen, title="PAUSED", message="Press P to continue")
        elif not snap.running:
            self._draw_overlay(screen=screen, title="TETRIS", message="Press R to start")

        pygame.display.flip()

    # ---- board -------------------------------------------------------------------

    def _draw_board(self, *, screen: pygame.Surface, grid: np.ndarray, layout: Layout) -> None:
        pal = self.palette
        ox, oy = layout.origin
        cell = self.cell
        h, w = int(grid.shape[0]), int(grid.shape[1])

        for y in range(h):
            for x in range(w):
                color = self._board_id_to_color(int(grid[y, x]))
                rx = ox + x * cell
                ry = oy + y * cell
                screen.blit(self.cache.cell(size=cell, color=color), (rx, ry))
                if self.show_grid_lines:
                    pygame.draw.rect(screen, pal.grid, pygame.Rect(rx, ry, cell, cell), width=1)

        m = layout.margin
        pygame.draw.rect(
            screen,
            pal.border,
            pygame.Rect(ox - m, oy - m, w * cell + 2 * m, h * cell + 2 * m),
            width=2,
        )

    def _draw_ghost(self, *, screen: pygame.Surface, grid: np.ndarray, active: Piece, layout: Layout) -> None:
        """Landing preview of a hard drop from the active position (visual only)."""
        h, w = int(grid.shape[0]), int(grid.shape[1])
        board = Board(h=h, w=w, grid=grid, pieces=self.pieces)
        if not board.is_valid_position(active):
            return
        ghost = drop_piece(board, active)
        self._draw_piece_cells(
            screen=screen,
            piece=ghost,
            origin=layout.origin,
            cell=self.cell,
            alpha=int(self.palette.ghost_alpha),
        )

    def _draw_piece_cells(
            self,
            *,
            screen: pygame.Surface,
            piece: Piece,
            origin: Tuple[int, int],
            cell: int,
            alpha: int = 255,
    ) -> None:
        m = self.pieces.shape_of(piece.kind, piece.rot)
        color = self.pieces.color_of(piece.kind)
        ox, oy = origin
        mh, mw = int(m.shape[0]), int(m.shape[1])
        for yy in range(mh):
            for xx in range(mw):
                if int(m[yy, xx]) == 0:
                    continue
                gy = int(piece.y) + yy
                if gy < 0:
                    continue
                rx = ox + (int(piece.x) + xx) * cell
                ry = oy + gy * cell
                screen.blit(self.cache.cell(size=cell - 2, color=color, alpha=alpha), (rx + 1, ry + 1))

    # ---- sidebar -----------------------------------------------------------------

    def _draw_sidebar(
            self,
            *,
            screen: pygame.Surface,
            snap: GameSnapshot,
            layout: Layout,
            mode: str,
            ai_action_ms: int,
    ) -> None:
        pal = self.palette
        x = layout.sidebar_x
        y = layout.sidebar_y

        y = self._draw_preview(screen=screen, x=x, y=y, w=layout.sidebar_w, label="NEXT", kind=snap.next_kind)
        y += _PANEL.gap_y
        hold_alpha = 255 if snap.can_hold else int(pal.hold_locked_alpha)
        y = self._draw_preview(
            screen=screen, x=x, y=y, w=layout.sidebar_w, label="HOLD", kind=snap.hold_kind, alpha=hold_alpha
        )
        y += _PANEL.gap_y

        mode_label = "AI" if mode == "ai" else "PLAYER"
        rows: Sequence[Tuple[str, str]] = (
            ("score", str(snap.score)),
            ("level", str(snap.level)),
            ("lines", str(snap.lines)),
            ("mode", mode_label),
            ("ai speed", f"{int(ai_action_ms)}ms"),
        )
        for k, v in rows:
            blit_text(screen=screen, font=self.fonts.main, text=k, pos=(x + _PANEL.pad_x, y), color=pal.muted)
            blit_text(screen=screen, font=self.fonts.main, text=v, pos=(x + _PANEL.pad_x + 100, y), color=pal.text)
            y += _PANEL.row_h + 2

        y += _PANEL.gap_y
        for key, desc in CONTROLS:
            blit_text(screen=screen, font=self.fonts.small, text=key, pos=(x + _PANEL.pad_x, y), color=pal.text)
            blit_text(screen=screen, font=self.fonts.small, text=desc, pos=(x + _PANEL.pad_x + 70, y), color=pal.muted)
            y += _PANEL.row_h - 4

    def _draw_preview(
            self,
            *,
            screen: pygame.Surface,
            x: int,
            y: int,
            w: int,
            label: str,
            kind: Optional[str],
            alpha: int = 255,
    ) -> int:
        pal = self.palette
        box = pygame.Rect(x, y, w, _PANEL.preview_h)
        pygame.draw.rect(screen, pal.panel_bg, box)
        pygame.draw.rect(screen, pal.border, box, width=2)
        blit_text(screen=screen, font=self.fonts.main, text=label, pos=(x + _PANEL.pad_x, y + 6), color=pal.text)

        if kind is not None:
            cell = _PANEL.preview_cell
            m = self.pieces.shape_of(kind, 0)
            mh, mw = int(m.shape[0]), int(m.shape[1])
            px = x + (w - mw * cell) // 2
            py = y + 24 + (_PANEL.preview_h - 24 - mh * cell) // 2
            color = self.pieces.color_of(kind)
            for yy in range(mh):
                for xx in range(mw):
                    if int(m[yy, xx]) == 0:
                        continue
                    surf = self.cache.cell(size=cell - 2, color=color, alpha=alpha)
                    screen.blit(surf, (px + xx * cell + 1, py + yy * cell + 1))

        return y + _PANEL.preview_h

    def _draw_overlay(
            self,
            *,
            screen: pygame.Surface,
            title: str,
            message: str,
            title_color: Optional[Color] = None,
    ) -> None:
        pal = self.palette
        size = screen.get_size()
        overlay = pygame.Surface(size, pygame.SRCALPHA)
        overlay.fill(pal.overlay_rgba)
        screen.blit(overlay, (0, 0))

        t_img = self.fonts.big.render(title, True, title_color or pal.text)
        m_img = self.fonts.main.render(message, True, pal.muted)
        cx = size[0] // 2
        cy = size[1] // 2
        screen.blit(t_img, t_img.get_rect(center=(cx, cy - 20)))
        screen.blit(m_img, m_img.get_rect(center=(cx, cy + 16)))

    def _board_id_to_color(self, board_id: int) -> Color:
        """
        board_id encoding:
          0      -> empty
          1..K   -> PieceSet.board_id(kind)
        """
        if int(board_id) <= 0:
            return self.palette.empty
        try:
            kind = self.pieces.board_id_to_kind(int(board_id))
        except ValueError:
            return self.palette.fallback_piece
        return self.pieces.color_of(kind)
