# src/tetris_ai/game/core/constants.py
from __future__ import annotations

# Board / cell encoding
EMPTY_CELL: int = 0

# Default playfield
BOARD_W: int = 10
BOARD_H: int = 20

# Every piece kind ships exactly this many orientations
NUM_ROTATIONS: int = 4

# New pieces enter with their matrix origin here
SPAWN_X: int = 3
SPAWN_Y: int = 0
