from __future__ import annotations

from typing import Iterable, List

import numpy as np

from .config import BUFFER_ROWS


class GameGrid:
    """Fixed-size field of locked cells.

    Cells are booleans indexed ``[row, column]`` with row 0 at the top. The
    first ``BUFFER_ROWS`` rows are hidden: they are never cleared and any
    locked cell there means the stack has overflowed.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.bool_)

    def clear(self) -> None:
        self.grid.fill(False)

    def is_valid_placement(self, layout: np.ndarray, x: int, y: int) -> bool:
        """Check whether ``layout`` fits with its top-left corner at (x, y).

        Cells above row 0 are allowed and never collide.
        """
        for r, c in np.argwhere(layout):
            bx = x + int(c)
            by = y + int(r)
            if bx < 0 or bx >= self.width or by >= self.height:
                return False
            if by >= 0 and self.grid[by, bx]:
                return False
        return True

    def lock(self, layout: np.ndarray, x: int, y: int) -> int:
        """Mark the layout's cells as locked and return how many were written."""
        placed = 0
        for r, c in np.argwhere(layout):
            by = y + int(r)
            if by >= 0:
                self.grid[by, x + int(c)] = True
                placed += 1
        return placed

    def find_completed_rows(self) -> List[int]:
        full = np.flatnonzero(np.all(self.grid[BUFFER_ROWS:], axis=1))
        return [int(row) + BUFFER_ROWS for row in full]

    def compact(self, rows: Iterable[int]) -> int:
        """Remove ``rows`` and push the same number of empty rows in at the top."""
        grid = self.grid
        removed = 0
        for row in sorted(set(rows), reverse=True):
            grid = np.delete(grid, row, axis=0)
            removed += 1
        if removed:
            empty = np.zeros((removed, self.width), dtype=np.bool_)
            self.grid = np.vstack((empty, grid))
        return removed

    def has_overflow(self) -> bool:
        return bool(self.grid[:BUFFER_ROWS].any())

    def filled_count(self) -> int:
        return int(np.count_nonzero(self.grid))
