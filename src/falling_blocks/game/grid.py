from __future__ import annotations

from typing import Iterable, List, Optional

import numpy as np

from .pieces import BOARD_HEIGHT, BOARD_WIDTH, CATALOG, Cell


class Board:
    """Fixed 10x20 occupancy grid.

    Cells hold 0 when empty and ``variant_index + 1`` when occupied, so the
    stored value doubles as the color lookup for the renderer. Row 0 is the
    top of the well.
    """

    def __init__(self) -> None:
        self.width = BOARD_WIDTH
        self.height = BOARD_HEIGHT
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def _check(self, row: int, col: int) -> None:
        # numpy would silently wrap negative indices
        if not self.is_inside(row, col):
            raise IndexError(f"cell ({row}, {col}) is outside the {self.height}x{self.width} board")

    def is_occupied(self, row: int, col: int) -> bool:
        self._check(row, col)
        return bool(self.grid[row, col] != 0)

    def variant_at(self, row: int, col: int) -> Optional[int]:
        self._check(row, col)
        value = int(self.grid[row, col])
        return value - 1 if value else None

    def occupy(self, row: int, col: int, variant_index: int) -> None:
        self._check(row, col)
        if not 0 <= variant_index < len(CATALOG):
            raise ValueError(f"invalid piece variant index: {variant_index}")
        self.grid[row, col] = variant_index + 1

    def can_place(self, cells: Iterable[Cell]) -> bool:
        """Collision test for absolute cells; rows above the top never collide."""
        for row, col in cells:
            if col < 0 or col >= self.width or row >= self.height:
                return False
            if row >= 0 and self.is_occupied(row, col):
                return False
        return True

    def lock(self, cells: Iterable[Cell], variant_index: int) -> int:
        """Write the in-range cells, dropping any still above row 0."""
        written = 0
        for row, col in cells:
            if 0 <= row < self.height:
                self.occupy(row, col, variant_index)
                written += 1
        return written

    def find_full_rows(self) -> List[int]:
        return [int(r) for r in np.where(np.all(self.grid != 0, axis=1))[0]]

    def clear_and_compact(self, rows: Iterable[int]) -> int:
        full_rows = sorted(set(int(r) for r in rows))
        if not full_rows:
            return 0
        for r in full_rows:
            self._check(r, 0)
        num = len(full_rows)
        # Remove rows and add empty rows at the top
        kept = np.delete(self.grid, full_rows, axis=0)
        self.grid = np.vstack((np.zeros((num, self.width), dtype=np.int8), kept))
        return num

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
