"""
tests/test_board.py

Тесты треугольной доски: индексы, ходы, преобразования.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from core.bitset import U32Set, U64Set
from core.board import Board, Position, pos, iter_all_cells
from core.utils import row_offset, triangle_cells
from utils.error_handling import InvalidBoardError

SIZES = range(1, 9)


def test_row_offset_is_power_of_two():
    assert [row_offset(n) for n in SIZES] == [1, 2, 4, 4, 8, 8, 8, 8]


def test_backing_width():
    assert type(Board.full(3).dots) is U32Set
    assert type(Board.full(5).dots) is U64Set, "Доске 5 нужно 37 бит"
    assert type(Board.full(8).dots) is U64Set


def test_invalid_sizes():
    for size in (0, 9, -1):
        with pytest.raises(InvalidBoardError):
            Board.full(size)


@pytest.mark.parametrize("size", SIZES)
def test_full_and_start(size):
    """Тест: полная доска и доска с одной дыркой."""
    full = Board.full(size)
    cells = list(iter_all_cells(size))
    assert len(cells) == triangle_cells(size)
    assert full.count() == len(cells)
    for p in cells:
        assert full.at(p) is True
        board = Board.start(size, p)
        assert board.at(p) is False, "Дырка должна быть пустой"
        assert board.count() == len(cells) - 1
        assert all(board.at(q) for q in cells if q != p)


@pytest.mark.parametrize("size", SIZES)
def test_index_round_trip(size):
    board = Board.full(size)
    for p in board.iter_all_cells():
        i = board.index_of(p)
        assert i == p.x + p.y * board.row_offset
        assert board.position_of(i) == p


def test_invalid_positions():
    board = Board.full(5)
    assert board.at(pos(5, 0)) is None
    assert board.at(pos(1, 4)) is None, "Строка 4 состоит из одной клетки"
    assert board.at(pos(0, 5)) is None
    assert board.at(Position(-1, 0)) is None
    assert board.index_of(pos(3, 2)) is None
    # Неиспользуемые биты между строками не дают позиций
    assert board.position_of(5) is None
    assert board.position_of(-3) is None
    assert Board.start(5, pos(4, 4)) is None
    assert Board.from_positions(5, [pos(0, 0), pos(4, 1)]) is None


def test_iter_all_cells_row_major():
    assert list(Board.full(3).iter_all_cells()) == [
        pos(0, 0), pos(1, 0), pos(2, 0), pos(0, 1), pos(1, 1), pos(0, 2)
    ]


def test_iter_pegs_and_cells():
    board = Board.start(3, pos(1, 0))
    assert list(board.iter_pegs()) == [pos(0, 0), pos(2, 0), pos(0, 1), pos(1, 1), pos(0, 2)]
    cells = dict(board.iter_cells())
    assert cells[pos(1, 0)] is False
    assert sum(cells.values()) == 5
    # Повторный обход даёт ту же последовательность
    assert list(board.iter_pegs()) == list(board.iter_pegs())


def test_row():
    board = Board.start(5, pos(1, 2))
    assert board.row(0) == U64Set(0b11111)
    assert board.row(2) == U64Set(0b101)
    assert board.row(4) == U64Set(0b1)
    assert board.row(5) is None


def test_position_order():
    assert sorted([pos(1, 0), pos(0, 2), pos(0, 1)]) == [pos(0, 1), pos(0, 2), pos(1, 0)]


def test_neighbours():
    board = Board.full(5)
    assert board.neighbours(pos(1, 1), 1) == [
        pos(2, 1), pos(1, 2), pos(0, 2), pos(0, 1), pos(1, 0), pos(2, 0)
    ]
    assert board.neighbours(pos(0, 0), 2) == [
        pos(2, 0), pos(0, 2), None, None, None, None
    ]


def test_end_to_end_size_three():
    """Тест: доска 3 с дыркой в (0,0), ход (2,0)->(0,0)."""
    board = Board.start(3, pos(0, 0))
    assert board.count() == 5

    moves = set(board.all_valid_moves())
    assert moves == {
        (pos(2, 0), pos(1, 0), pos(0, 0)),
        (pos(0, 2), pos(0, 1), pos(0, 0)),
    }

    after = board.apply_move(pos(2, 0), pos(0, 0))
    assert after is not None
    assert after.count() == 4
    # Колышки (0,0), (0,1), (1,1), (0,2); шаг строки 4
    assert after.to_int() == 0b1_0011_0001
    assert after == Board.from_positions(3, [pos(0, 0), pos(0, 1), pos(1, 1), pos(0, 2)])
    # Исходная доска не изменилась
    assert board.count() == 5


def test_apply_move_changes_only_three_cells():
    board = Board.start(5, pos(0, 0))
    for frm, over, to in board.all_valid_moves():
        after = board.apply_move(frm, to)
        assert after.count() == board.count() - 1
        assert after.at(frm) is False
        assert after.at(over) is False
        assert after.at(to) is True
        for p in board.iter_all_cells():
            if p not in (frm, over, to):
                assert after.at(p) == board.at(p)


def test_valid_moves():
    board = Board.start(5, pos(0, 0))
    assert board.valid_moves(pos(0, 0)) is None, "В дырке нет колышка"
    assert board.valid_moves(pos(9, 9)) is None
    assert list(board.valid_moves(pos(2, 0))) == [(pos(1, 0), pos(0, 0))]
    assert list(board.valid_moves(pos(1, 1))) == []


def test_valid_move_rejections():
    board = Board.start(5, pos(0, 0))
    assert board.valid_move(pos(2, 0), pos(0, 0)) == pos(1, 0)
    assert board.valid_move(pos(0, 2), pos(0, 0)) == pos(0, 1)
    assert board.valid_move(pos(0, 0), pos(2, 0)) is None, "В начальной клетке нет колышка"
    assert board.valid_move(pos(3, 0), pos(1, 0)) is None, "Конечная клетка занята"
    assert board.valid_move(pos(3, 0), pos(0, 0)) is None, "Не на расстоянии 2"
    assert board.valid_move(pos(1, 1), pos(0, 0)) is None, "Не по направлению сетки"
    assert board.valid_move(pos(2, 0), pos(7, 7)) is None

    # Промежуточная клетка пуста
    sparse = Board.from_positions(5, [pos(2, 0)])
    assert sparse.valid_move(pos(2, 0), pos(0, 0)) is None
    assert sparse.apply_move(pos(2, 0), pos(0, 0)) is None


def test_filter_map_and_map():
    board = Board.start(4, pos(0, 0))
    assert board.filter(lambda p: p.y == 0).count() == 3
    shifted = board.filter(lambda p: p.y == 3).map(lambda p: pos(p.x + 1, 0))
    assert shifted == Board.from_positions(4, [pos(1, 0)])
    assert board.map(lambda p: pos(p.x + 10, p.y)) is None, "Невалидная позиция: нет доски"
    only_row0 = board.filter_map(lambda p: p if p.y == 0 else None)
    assert only_row0 == board.filter(lambda p: p.y == 0)


def test_board_is_hashable_value():
    a = Board.start(5, pos(2, 0))
    b = Board.start(5, pos(2, 0))
    assert a == b and hash(a) == hash(b)
    assert a != Board.start(5, pos(1, 0))
    assert len({a, b}) == 1


def test_from_int_round_trip():
    board = Board.start(5, pos(1, 2))
    assert Board.from_int(5, board.to_int()) == board
    # Бит 5 лежит между строками
    with pytest.raises(InvalidBoardError):
        Board.from_int(5, 1 << 5)


def test_flip():
    board = Board.from_positions(5, [pos(0, 0), pos(1, 1), pos(0, 4)])
    assert board.flip() == Board.from_positions(5, [pos(4, 0), pos(2, 1), pos(0, 4)])
    assert board.flip().flip() == board


def test_rotations():
    corner = Board.from_positions(5, [pos(0, 0)])
    assert corner.rotate_right() == Board.from_positions(5, [pos(0, 4)])
    assert corner.rotate_left() == Board.from_positions(5, [pos(4, 0)])
    board = Board.start(5, pos(1, 1))
    assert board.rotate_right().rotate_left() == board
    assert board.rotate_right().rotate_right().rotate_right() == board


def test_canonicalize():
    board = Board.start(5, pos(3, 0))
    canon = board.canonicalize()
    assert canon.canonicalize() == canon, "Канонизация идемпотентна"
    for variant in board.all_variants():
        assert variant.canonicalize() == canon
        assert canon.to_int() <= variant.to_int()
    assert len(board.all_variants()) == 6


def test_board_owns_its_bits():
    """Тест: доска не меняется вместе с переданным или выданным множеством."""
    dots = U32Set(0b1_0011_0001)
    board = Board(3, dots)
    dots.union_with(U32Set(1 << 3))
    assert board.to_int() == 0b1_0011_0001
    assert board.count() == 4

    board.dots.intersect_with(U32Set(1))
    assert board.count() == 4
    assert board == Board.from_int(3, 0b1_0011_0001)
    assert hash(board) == hash(Board.from_int(3, 0b1_0011_0001))


def test_constructor_rejects_bits_outside_triangle():
    # Бит 3 при ROW_OFFSET 4 лежит за концом строки 0
    with pytest.raises(InvalidBoardError):
        Board(3, U32Set(1 << 3))
    with pytest.raises(InvalidBoardError):
        Board(3, U64Set(1))
