"""
core/board.py

Треугольная доска на битовом множестве.

Клетка (x, y) лежит в строке y, столбец x; строка 0 самая длинная.
Индекс бита: x + y * ROW_OFFSET, где ROW_OFFSET: наименьшая степень
двойки >= size. Умножение и деление на ROW_OFFSET становятся сдвигами,
часть битов между строками не используется.
"""

from functools import lru_cache
from typing import Callable, Iterable, Iterator, List, NamedTuple, Optional, Tuple

from .bitset import FixedWidthBitSet, bitset_for_width
from .utils import DIRECTIONS, MAX_BOARD_SIZE, row_offset, bits_required
from utils.error_handling import InvalidBoardError


class Position(NamedTuple):
    """Клетка доски; порядок сравнения: (x, y)."""
    x: int
    y: int


def pos(x: int, y: int) -> Position:
    return Position(x, y)


Move = Tuple[Position, Position, Position]  # (from, over, to)


class _Geometry:
    """Неизменяемые параметры доски заданного размера."""
    __slots__ = ('size', 'row_offset', 'shift', 'bitset_type', 'valid_mask', 'cells')

    def __init__(self, size: int):
        if not 1 <= size <= MAX_BOARD_SIZE:
            raise InvalidBoardError(
                f"Размер доски {size} вне диапазона 1..{MAX_BOARD_SIZE}"
            )
        self.size = size
        self.row_offset = row_offset(size)
        self.shift = self.row_offset.bit_length() - 1
        self.bitset_type = bitset_for_width(bits_required(size))
        if self.bitset_type is None:
            raise InvalidBoardError(f"Доска размера {size} не помещается в 64 бита")
        self.cells = tuple(
            Position(x, y) for y in range(size) for x in range(size - y)
        )
        mask = 0
        for p in self.cells:
            mask |= 1 << ((p.y << self.shift) | p.x)
        self.valid_mask = mask


@lru_cache(maxsize=None)
def geometry(size: int) -> _Geometry:
    return _Geometry(size)


class Board:
    """
    Иммутабельная треугольная доска размера size.

    Равенство: по размеру и битовому шаблону; канонизация по симметриям
    выполняется только явно через canonicalize().
    """
    __slots__ = ('size', '_dots', '_geo', '_hash')

    def __init__(self, size: int, dots: FixedWidthBitSet):
        self._geo = geometry(size)
        if type(dots) is not self._geo.bitset_type:
            raise InvalidBoardError(
                f"Доске размера {size} нужен {self._geo.bitset_type.__name__}, "
                f"получен {type(dots).__name__}"
            )
        if dots.val & ~self._geo.valid_mask:
            raise InvalidBoardError(
                f"Шаблон {dots.val:b} выходит за треугольник размера {size}"
            )
        self.size = size
        # Своя копия: множество изменяемое, а доска ключ в словарях
        self._dots = type(dots)(dots.val)
        self._hash = hash((size, dots.val))

    # ------------------------------------------------------------------
    # Построение

    @classmethod
    def full(cls, size: int) -> 'Board':
        """Колышек на каждой клетке."""
        geo = geometry(size)
        return cls(size, geo.bitset_type(geo.valid_mask))

    @classmethod
    def start(cls, size: int, hole: Position) -> Optional['Board']:
        """Все колышки, кроме hole. None если hole вне доски."""
        board = cls.full(size)
        if not board.valid(hole):
            return None
        return board.filter(lambda p: p != hole)

    @classmethod
    def from_positions(cls, size: int, positions: Iterable[Position]) -> Optional['Board']:
        """Доска с колышками в positions; None если хоть одна позиция невалидна."""
        geo = geometry(size)
        val = 0
        for p in positions:
            i = _index_of(geo, p)
            if i is None:
                return None
            val |= 1 << i
        return cls(size, geo.bitset_type(val))

    @classmethod
    def from_int(cls, size: int, val: int) -> 'Board':
        """Доска из сырого битового шаблона (см. to_int)."""
        geo = geometry(size)
        if val < 0 or val & ~geo.valid_mask:
            raise InvalidBoardError(f"Шаблон {val:b} выходит за треугольник размера {size}")
        return cls(size, geo.bitset_type(val))

    @property
    def dots(self) -> FixedWidthBitSet:
        """Копия битового множества; изменение копии доску не трогает."""
        return type(self._dots)(self._dots.val)

    def to_int(self) -> int:
        return self._dots.val

    # ------------------------------------------------------------------
    # Геометрия

    @property
    def row_offset(self) -> int:
        return self._geo.row_offset

    def row_len(self, y: int) -> int:
        return self.size - y

    def valid(self, p: Position) -> bool:
        return 0 <= p[1] < self.size and 0 <= p[0] < self.size - p[1]

    def index_of(self, p: Position) -> Optional[int]:
        return _index_of(self._geo, p)

    def position_of(self, i: int) -> Optional[Position]:
        if i < 0:
            return None
        p = Position(i & (self._geo.row_offset - 1), i >> self._geo.shift)
        return p if self.valid(p) else None

    def neighbours(self, p: Position, dist: int) -> List[Optional[Position]]:
        """
        Шесть соседей на расстоянии dist в порядке DIRECTIONS.
        Отрицательные координаты дают None; выход за доску здесь не проверяется.
        """
        result = []
        for dx, dy in DIRECTIONS:
            x, y = p[0] + dx * dist, p[1] + dy * dist
            result.append(Position(x, y) if x >= 0 and y >= 0 else None)
        return result

    # ------------------------------------------------------------------
    # Запросы

    def at(self, p: Position) -> Optional[bool]:
        i = self.index_of(p)
        if i is None:
            return None
        return self._dots.get(i)

    def row(self, y: int) -> Optional[FixedWidthBitSet]:
        """Биты строки y (ровно size - y штук). None если y вне доски."""
        if not 0 <= y < self.size:
            return None
        tail = self._dots.get(slice(self.index_of(Position(0, y)), None))
        assert tail is not None
        return tail.get(slice(None, self.row_len(y)))

    def iter_all_cells(self) -> Iterator[Position]:
        """Все клетки доски построчно."""
        return iter(self._geo.cells)

    def iter_pegs(self) -> Iterator[Position]:
        """Занятые клетки в порядке возрастания индекса."""
        for i in self._dots.iter_positions():
            p = self.position_of(i)
            if p is not None:
                yield p

    def iter_cells(self) -> Iterator[Tuple[Position, bool]]:
        """Пары (клетка, есть ли колышек)."""
        for p in self._geo.cells:
            yield p, bool(self._dots.get(self.index_of(p)))

    def count(self) -> int:
        return self._dots.count()

    def is_terminal(self) -> bool:
        """Остался ровно один колышек."""
        return self.count() == 1

    # ------------------------------------------------------------------
    # Ходы

    def valid_moves(self, p: Position) -> Optional[Iterator[Tuple[Position, Position]]]:
        """
        Ходы из клетки p: пары (over, to).
        None если в p нет колышка.
        """
        if not self.at(p):
            return None
        return self._moves_from(p)

    def _moves_from(self, p: Position) -> Iterator[Tuple[Position, Position]]:
        for over, to in zip(self.neighbours(p, 1), self.neighbours(p, 2)):
            if over is None or to is None:
                continue
            if self.at(to) is False and self.at(over):
                yield over, to

    def all_valid_moves(self) -> Iterator[Move]:
        """Все ходы на доске: (from, over, to)."""
        for p in self.iter_pegs():
            for over, to in self._moves_from(p):
                yield p, over, to

    def valid_move(self, frm: Position, to: Position) -> Optional[Position]:
        """
        Проверяет прыжок frm -> to.

        Returns:
            Клетку снимаемого колышка, либо None если ход невозможен
        """
        if not self.at(frm):
            return None
        if self.at(to) is not False:
            return None
        for over, target in zip(self.neighbours(frm, 1), self.neighbours(frm, 2)):
            if target == to:
                # Если клетка на расстоянии 2 валидна, то и промежуточная тоже
                assert over is not None and self.valid(over)
                return over if self.at(over) else None
        return None

    def apply_move(self, frm: Position, to: Position) -> Optional['Board']:
        """Новая доска после прыжка; None если ход невозможен."""
        over = self.valid_move(frm, to)
        if over is None:
            return None
        val = self._dots.val
        for p in (frm, over, to):
            val ^= 1 << self.index_of(p)
        return Board(self.size, type(self._dots)(val))

    # ------------------------------------------------------------------
    # Преобразования

    def map(self, fn: Callable[[Position], Position]) -> Optional['Board']:
        return Board.from_positions(self.size, (fn(p) for p in self.iter_pegs()))

    def filter_map(self, fn: Callable[[Position], Optional[Position]]) -> Optional['Board']:
        mapped = (fn(p) for p in self.iter_pegs())
        return Board.from_positions(self.size, (p for p in mapped if p is not None))

    def filter(self, pred: Callable[[Position], bool]) -> 'Board':
        board = Board.from_positions(self.size, (p for p in self.iter_pegs() if pred(p)))
        assert board is not None
        return board

    def flip(self) -> 'Board':
        """Зеркальное отражение: каждая строка разворачивается на месте."""
        val = 0
        for y in range(self.size):
            bits = self.row(y).reverse_first(self.row_len(y))
            val |= bits.val << self.index_of(Position(0, y))
        return Board(self.size, type(self._dots)(val))

    def rotate_right(self) -> 'Board':
        n = self.size - 1
        return self._remap(lambda p: Position(p.y, n - p.x - p.y))

    def rotate_left(self) -> 'Board':
        n = self.size - 1
        return self._remap(lambda p: Position(n - p.x - p.y, p.x))

    def _remap(self, fn: Callable[[Position], Position]) -> 'Board':
        board = self.map(fn)
        assert board is not None, "Поворот переводит доску в себя"
        return board

    def all_variants(self) -> List['Board']:
        """Шесть симметрий треугольника."""
        right = self.rotate_right()
        left = self.rotate_left()
        return [self, self.flip(), right, left, right.flip(), left.flip()]

    def canonicalize(self) -> 'Board':
        """Вариант с наименьшим битовым шаблоном."""
        return min(self.all_variants(), key=lambda b: b._dots.val)

    # ------------------------------------------------------------------

    def __hash__(self) -> int:
        return self._hash

    def __eq__(self, other) -> bool:
        return (isinstance(other, Board) and self.size == other.size
                and self._dots.val == other._dots.val)

    def __lt__(self, other: 'Board') -> bool:
        return (self.size, self._dots.val) < (other.size, other._dots.val)

    def __repr__(self) -> str:
        return f"Board(size={self.size}, {self.count()} pegs, {self._dots.val:#x})"


def _index_of(geo: _Geometry, p: Position) -> Optional[int]:
    x, y = p
    if not (0 <= y < geo.size and 0 <= x < geo.size - y):
        return None
    return x | (y << geo.shift)


def iter_all_cells(size: int) -> Iterator[Position]:
    """Все клетки доски размера size построчно (без создания доски)."""
    return iter(geometry(size).cells)
