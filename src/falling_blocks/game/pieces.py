from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Tuple

import numpy as np


BOARD_WIDTH = 10
BOARD_HEIGHT = 20

Cell = Tuple[int, int]
RGB = Tuple[int, int, int]


class PieceKind(IntEnum):
    SQUARE = 0
    LINE = 1
    Z = 2
    S = 3
    T = 4
    L = 5
    J = 6


@dataclass(frozen=True)
class PieceVariant:
    name: str
    offsets: Tuple[Cell, Cell, Cell, Cell]  # (row, col)
    color: RGB

    def offsets_array(self) -> np.ndarray:
        return np.array(self.offsets, dtype=np.int16)


CATALOG: Tuple[PieceVariant, ...] = (
    PieceVariant("Square", ((0, 0), (1, 0), (0, 1), (1, 1)), (255, 255, 0)),
    PieceVariant("Line", ((0, 0), (1, 0), (2, 0), (3, 0)), (0, 255, 255)),
    PieceVariant("Z", ((0, 0), (1, 0), (1, 1), (2, 1)), (255, 0, 0)),
    PieceVariant("S", ((1, 0), (2, 0), (0, 1), (1, 1)), (0, 255, 0)),
    PieceVariant("T", ((0, 0), (1, 0), (2, 0), (1, 1)), (255, 0, 255)),
    PieceVariant("L", ((0, 0), (0, 1), (0, 2), (1, 2)), (255, 128, 0)),
    PieceVariant("J", ((1, 0), (1, 1), (1, 2), (0, 2)), (0, 0, 255)),
)


def variant(index: int) -> PieceVariant:
    if not 0 <= int(index) < len(CATALOG):
        raise IndexError(f"piece variant index out of range: {index}")
    return CATALOG[int(index)]


def rotate_cells(cells: np.ndarray) -> np.ndarray:
    """Rotate relative offsets 90 degrees about the local origin: (r, c) -> (c, -r)."""
    return np.stack((cells[:, 1], -cells[:, 0]), axis=1)


@dataclass
class ActivePiece:
    kind: PieceKind
    origin_row: int
    origin_col: int
    cells: np.ndarray  # shape (4, 2), (row, col) offsets

    @staticmethod
    def spawn(kind: int, spawn_row: int = 0) -> "ActivePiece":
        offsets = variant(kind).offsets_array()  # fresh copy, rotation never touches the catalog
        return ActivePiece(PieceKind(kind), spawn_row, BOARD_WIDTH // 2 - 2, offsets)

    @property
    def color(self) -> RGB:
        return variant(self.kind).color

    def rotated(self) -> "ActivePiece":
        return ActivePiece(self.kind, self.origin_row, self.origin_col, rotate_cells(self.cells))

    def cells_at(self, delta_row: int = 0, delta_col: int = 0) -> List[Cell]:
        row = self.origin_row + delta_row
        col = self.origin_col + delta_col
        return [(row + int(r), col + int(c)) for r, c in self.cells]
