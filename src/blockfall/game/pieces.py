from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List

import numpy as np


class TetrominoType(IntEnum):
    """Catalog order; the selector draws indices in this order."""

    O = 0
    I = 1
    Z = 2
    S = 3
    L = 4
    J = 5
    T = 6


Layout = np.ndarray


def _layout(rows: List[str]) -> Layout:
    arr = np.array([[c == "#" for c in row] for row in rows], dtype=np.bool_)
    arr.flags.writeable = False
    return arr


# I and O sit in 4x4 boxes so they turn about a stable centre.
SHAPES: Dict[TetrominoType, Layout] = {
    TetrominoType.O: _layout(["....", ".##.", ".##.", "...."]),
    TetrominoType.I: _layout(["....", "....", "####", "...."]),
    TetrominoType.Z: _layout(["##.", ".##", "..."]),
    TetrominoType.S: _layout([".##", "##.", "..."]),
    TetrominoType.L: _layout(["#..", "###", "..."]),
    TetrominoType.J: _layout(["..#", "###", "..."]),
    TetrominoType.T: _layout([".#.", "###", "..."]),
}


def rotate_cw(layout: Layout) -> Layout:
    """Quarter turn clockwise: ``out[i][j] == layout[n-1-j][i]``."""
    return np.rot90(layout, 1, axes=(1, 0)).copy()


@dataclass
class Piece:
    kind: TetrominoType
    layout: Layout
    x: int
    y: int = 0

    @classmethod
    def spawn(cls, kind: TetrominoType, board_width: int) -> "Piece":
        layout = SHAPES[kind].copy()
        size = layout.shape[1]
        return cls(kind=kind, layout=layout, x=(board_width - size) // 2, y=0)

    def rotated_layout(self) -> Layout:
        return rotate_cw(self.layout)
