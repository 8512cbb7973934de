import numpy as np
import pytest

from falling_blocks.game import CATALOG, ActivePiece, PieceKind, rotate_cells, variant


def test_catalog_has_seven_variants_of_four_cells():
    assert len(CATALOG) == 7
    for piece in CATALOG:
        assert len(piece.offsets) == 4
        assert len(set(piece.offsets)) == 4
        assert all(0 <= channel <= 255 for channel in piece.color)


def test_catalog_shapes_in_row_col_order():
    assert set(variant(PieceKind.SQUARE).offsets) == {(0, 0), (1, 0), (0, 1), (1, 1)}
    assert set(variant(PieceKind.LINE).offsets) == {(0, 0), (1, 0), (2, 0), (3, 0)}
    assert set(variant(PieceKind.Z).offsets) == {(0, 0), (1, 0), (1, 1), (2, 1)}
    assert set(variant(PieceKind.S).offsets) == {(1, 0), (2, 0), (0, 1), (1, 1)}
    assert set(variant(PieceKind.T).offsets) == {(0, 0), (1, 0), (2, 0), (1, 1)}
    assert set(variant(PieceKind.L).offsets) == {(0, 0), (0, 1), (0, 2), (1, 2)}
    assert set(variant(PieceKind.J).offsets) == {(1, 0), (1, 1), (1, 2), (0, 2)}


def test_variant_lookup_rejects_bad_index():
    with pytest.raises(IndexError):
        variant(7)
    with pytest.raises(IndexError):
        variant(-1)


def test_rotate_cells_maps_row_col_to_col_minus_row():
    cells = np.array([[0, 0], [1, 0], [2, 0], [3, 0]])
    rotated = rotate_cells(cells)
    assert rotated.tolist() == [[0, 0], [0, -1], [0, -2], [0, -3]]
    # input untouched
    assert cells.tolist() == [[0, 0], [1, 0], [2, 0], [3, 0]]


@pytest.mark.parametrize("kind", list(PieceKind))
def test_four_rotations_restore_offsets(kind):
    piece = ActivePiece.spawn(kind)
    original = piece.cells.copy()
    for _ in range(4):
        piece = piece.rotated()
    assert np.array_equal(piece.cells, original)


def test_spawn_position_and_independent_copy():
    piece = ActivePiece.spawn(PieceKind.T)
    assert (piece.origin_row, piece.origin_col) == (0, 3)
    piece.cells[0] = (9, 9)
    assert variant(PieceKind.T).offsets[0] == (0, 0)
    assert ActivePiece.spawn(PieceKind.T).cells.tolist()[0] == [0, 0]


def test_cells_at_applies_origin_and_delta():
    piece = ActivePiece.spawn(PieceKind.SQUARE)
    assert sorted(piece.cells_at()) == [(0, 3), (0, 4), (1, 3), (1, 4)]
    assert sorted(piece.cells_at(2, -1)) == [(2, 2), (2, 3), (3, 2), (3, 3)]
