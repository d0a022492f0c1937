# src/tetris_ai/game/core/pieceset.py
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

import numpy as np
import yaml

from tetris_ai.game.core.constants import NUM_ROTATIONS
from tetris_ai.utils.paths import pieces_dir

Color = Tuple[int, int, int]


def _check_rot(rot: object) -> int:
    if isinstance(rot, bool) or not isinstance(rot, (int, np.integer)):
        raise ValueError(f"rotation must be an int, got {type(rot).__name__}")
    r = int(rot)
    if not (0 <= r < NUM_ROTATIONS):
        raise ValueError(f"rotation out of range: {r} (valid 0..{NUM_ROTATIONS - 1})")
    return r


def _mask_from_rows(kind: str, rot: int, rows: Any) -> np.ndarray:
    where = f"{kind!r} rotation {rot}"
    if not isinstance(rows, (list, tuple)) or not rows:
        raise ValueError(f"{where}: expected a non-empty list of row strings, got {rows!r}")
    if not all(isinstance(r, str) for r in rows):
        raise ValueError(f"{where}: rows must be strings, got {rows!r}")
    n = len(rows)
    if any(len(r) != n for r in rows):
        raise ValueError(f"{where}: rows must form an {n}x{n} square, got {list(rows)!r}")
    if any(ch not in "#." for r in rows for ch in r):
        raise ValueError(f"{where}: only '#' and '.' are allowed, got {list(rows)!r}")

    mask = np.array([[ch == "#" for ch in r] for r in rows], dtype=np.uint8)
    # shared process-wide; nobody gets to scribble on it
    mask.setflags(write=False)
    return mask


def _color_from_node(kind: str, node: Any) -> Color:
    ok = (
        isinstance(node, (list, tuple))
        and len(node) == 3
        and all(isinstance(c, int) and not isinstance(c, bool) and 0 <= c <= 255 for c in node)
    )
    if not ok:
        raise ValueError(f"{kind!r}: color components must be 3 ints in [0,255], got {node!r}")
    return int(node[0]), int(node[1]), int(node[2])


@dataclass(frozen=True)
class PieceDef:
    kind: str
    rotations: Tuple[np.ndarray, ...]  # clockwise, each an (N, N) 0/1 mask
    color: Color


def _piece_from_node(kind: Any, node: Any, *, expected_cells: Optional[int]) -> PieceDef:
    if not isinstance(kind, str) or not kind:
        raise ValueError(f"piece names must be non-empty strings, got {kind!r}")
    if not isinstance(node, Mapping):
        raise ValueError(f"{kind!r}: piece entry must be a mapping, got {type(node).__name__}")

    rot_nodes = node.get("rotations")
    if not isinstance(rot_nodes, list) or len(rot_nodes) != NUM_ROTATIONS:
        raise ValueError(f"{kind!r}: 'rotations' must list exactly {NUM_ROTATIONS} orientations")
    masks = tuple(_mask_from_rows(kind, i, rows) for i, rows in enumerate(rot_nodes))

    counts = {int(m.sum()) for m in masks}
    if len(counts) != 1:
        raise ValueError(f"{kind!r}: orientations disagree on cell count {sorted(counts)}")
    (cells,) = counts
    if cells == 0:
        raise ValueError(f"{kind!r}: orientations have no filled cells")
    if expected_cells is not None and cells != int(expected_cells):
        raise ValueError(f"{kind!r}: expected {expected_cells} filled cells, got {cells}")

    return PieceDef(kind=kind, rotations=masks, color=_color_from_node(kind, node.get("color")))


@dataclass(frozen=True)
class PieceSet:
    """
    Immutable piece catalog: one (N, N) mask per (kind, rotation) plus a color
    per kind, built from YAML once and shared.

    Board ids are 1-based positions in `kind_order` (I=1 ... L=7 for the bundled
    classic7 asset); 0 stays reserved for empty cells.

    Lookups are strict: an unknown kind raises KeyError and a rotation outside
    [0, 4) raises ValueError. Nothing wraps or defaults silently.
    """

    kind_order: Tuple[str, ...]
    shapes: Mapping[Tuple[str, int], np.ndarray]
    colors: Mapping[str, Color]

    @staticmethod
    def default_classic7_path() -> Path:
        return pieces_dir() / "classic7.yaml"

    @classmethod
    def from_defs(cls, defs: Sequence[PieceDef]) -> "PieceSet":
        if not defs:
            raise ValueError("a piece set needs at least one piece")
        shapes: Dict[Tuple[str, int], np.ndarray] = {}
        colors: Dict[str, Color] = {}
        for d in defs:
            if d.kind in colors:
                raise ValueError(f"duplicate piece kind {d.kind!r}")
            colors[d.kind] = d.color
            for rot, mask in enumerate(d.rotations):
                shapes[(d.kind, rot)] = mask
        return cls(kind_order=tuple(d.kind for d in defs), shapes=shapes, colors=colors)

    @classmethod
    def from_yaml(cls, path: Path, *, expected_cells: Optional[int] = None) -> "PieceSet":
        """
        Layout:

          expected_cells: 4          # optional, checked for every piece
          pieces:
            I:
              color: [r, g, b]
              rotations:             # exactly 4, clockwise
                - ["....", "####", "....", "...."]
                ...
        """
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"piece YAML {path} must hold a mapping, got {type(data).__name__}")

        if expected_cells is None and data.get("expected_cells") is not None:
            expected_cells = int(data["expected_cells"])

        pieces_node = data.get("pieces")
        if not isinstance(pieces_node, dict) or not pieces_node:
            raise ValueError(f"piece YAML {path} needs a non-empty 'pieces:' mapping")

        defs = [_piece_from_node(k, v, expected_cells=expected_cells) for k, v in pieces_node.items()]
        return cls.from_defs(defs)

    def kinds(self) -> Tuple[str, ...]:
        return self.kind_order

    def __contains__(self, kind: object) -> bool:
        return kind in self.colors

    def _require(self, kind: str) -> None:
        if kind not in self.colors:
            raise KeyError(f"unknown piece kind {kind!r}. known kinds={list(self.kind_order)!r}")

    def shape_of(self, kind: str, rot: int) -> np.ndarray:
        self._require(kind)
        return self.shapes[(kind, _check_rot(rot))]

    def color_of(self, kind: str) -> Color:
        self._require(kind)
        return self.colors[kind]

    def num_rotations(self, kind: str) -> int:
        self._require(kind)
        return sum(1 for k, _ in self.shapes if k == kind)

    def kind_idx(self, kind: str) -> int:
        self._require(kind)
        return self.kind_order.index(kind)

    def board_id(self, kind: str) -> int:
        return self.kind_idx(kind) + 1

    def board_id_to_kind(self, board_id: int) -> str:
        bid = int(board_id)
        if bid <= 0:
            raise ValueError("board_id must be >= 1 (0 is empty)")
        if bid > len(self.kind_order):
            raise ValueError(f"board_id out of range: {bid} (valid 1..{len(self.kind_order)})")
        return self.kind_order[bid - 1]

    def random_kind(self, rng: np.random.Generator) -> str:
        """Uniform draw; the generator is the only source of randomness."""
        return self.kind_order[int(rng.integers(0, len(self.kind_order)))]


@lru_cache(maxsize=1)
def default_pieceset() -> PieceSet:
    """Process-wide classic-7 catalog, parsed once on first use."""
    return PieceSet.from_yaml(PieceSet.default_classic7_path(), expected_cells=4)


__all__ = ["Color", "PieceDef", "PieceSet", "default_pieceset"]
