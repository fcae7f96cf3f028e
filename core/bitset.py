"""
core/bitset.py

Битовое множество фиксированной ширины.

Хранит один беззнаковый int шириной WIDTH бит; бит i означает, что
элемент i принадлежит множеству. Все выходы за границы публичных
методов чтения возвращают None, а не исключение.
"""

from itertools import count as _count
from typing import Iterable, Iterator, Optional, Union


class FixedWidthBitSet:
    """Базовый класс: конкретная ширина задаётся в подклассах."""
    __slots__ = ('val',)

    WIDTH = 0
    MASK = 0

    def __init__(self, val: int = 0):
        self.val = val & self.MASK

    @classmethod
    def from_positions(cls, positions: Iterable[int]) -> 'FixedWidthBitSet':
        """Собирает множество из номеров установленных битов."""
        val = 0
        for i in positions:
            if not 0 <= i < cls.WIDTH:
                raise ValueError(f"Бит {i} вне ширины {cls.WIDTH}")
            val |= 1 << i
        return cls(val)

    @classmethod
    def from_bools(cls, bits: Iterable[bool]) -> 'FixedWidthBitSet':
        """Собирает множество из последовательности флагов (бит 0 первый)."""
        return cls.from_positions(i for i, bit in enumerate(bits) if bit)

    def get(self, index: Union[int, slice]):
        """
        Чтение с проверкой границ.

        Args:
            index: номер бита или срез [lo:hi), [lo:], [:hi]

        Returns:
            bool для номера, FixedWidthBitSet (сдвинутый к биту 0) для среза,
            None если индекс вне ширины
        """
        if isinstance(index, slice):
            return self._get_range(index)
        if not 0 <= index < self.WIDTH:
            return None
        return bool((self.val >> index) & 1)

    def _get_range(self, sl: slice) -> Optional['FixedWidthBitSet']:
        if sl.step is not None:
            return None
        lo = 0 if sl.start is None else sl.start
        hi = self.WIDTH if sl.stop is None else sl.stop
        if lo < 0 or hi < 0 or hi > self.WIDTH or lo > hi:
            return None
        return self._slice_unchecked(lo, hi)

    def _slice_unchecked(self, lo: int, hi: int) -> 'FixedWidthBitSet':
        # Вызывается только после проверки границ
        return type(self)((self.val & ((1 << hi) - 1)) >> lo)

    def _check_width(self, other: 'FixedWidthBitSet'):
        if type(other) is not type(self):
            raise TypeError(
                f"Нельзя смешивать {type(self).__name__} и {type(other).__name__}"
            )

    def union(self, other: 'FixedWidthBitSet') -> 'FixedWidthBitSet':
        self._check_width(other)
        return type(self)(self.val | other.val)

    def intersect(self, other: 'FixedWidthBitSet') -> 'FixedWidthBitSet':
        self._check_width(other)
        return type(self)(self.val & other.val)

    def union_with(self, other: 'FixedWidthBitSet') -> None:
        self._check_width(other)
        self.val |= other.val

    def intersect_with(self, other: 'FixedWidthBitSet') -> None:
        self._check_width(other)
        self.val &= other.val

    def count(self) -> int:
        """Количество установленных битов (popcount)."""
        return self.val.bit_count()

    def is_empty(self) -> bool:
        return self.val == 0

    def reverse_first(self, i: int) -> 'FixedWidthBitSet':
        """
        Разворачивает порядок первых i битов, остальные обнуляются.
        Используется для зеркального отражения одной строки доски.
        """
        if not 0 <= i <= self.WIDTH:
            raise ValueError(f"Нельзя развернуть {i} бит при ширине {self.WIDTH}")
        if i == 0:
            return type(self)(0)
        bits = format(self.val & ((1 << i) - 1), f'0{i}b')
        return type(self)(int(bits[::-1], 2))

    def reverse(self) -> 'FixedWidthBitSet':
        return self.reverse_first(self.WIDTH)

    def iter_bits(self) -> Iterator[bool]:
        """Бесконечная последовательность битов; после старшего: только False."""
        val = self.val
        for _ in _count():
            yield bool(val & 1)
            val >>= 1

    def iter_positions(self) -> Iterator[int]:
        """Номера установленных битов по возрастанию (не более WIDTH)."""
        val = self.val
        while val:
            low = val & -val
            yield low.bit_length() - 1
            val ^= low

    def __iter__(self) -> Iterator[int]:
        return self.iter_positions()

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, index: int) -> bool:
        return bool(self.get(index))

    def __eq__(self, other) -> bool:
        return type(other) is type(self) and self.val == other.val

    def __lt__(self, other: 'FixedWidthBitSet') -> bool:
        return (self.WIDTH, self.val) < (other.WIDTH, other.val)

    # Множество изменяемое (union_with/intersect_with), поэтому не хешируется
    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.val:b})"


class U32Set(FixedWidthBitSet):
    """Множество на 32-битном слове."""
    __slots__ = ()
    WIDTH = 32
    MASK = (1 << 32) - 1


class U64Set(FixedWidthBitSet):
    """Множество на 64-битном слове."""
    __slots__ = ()
    WIDTH = 64
    MASK = (1 << 64) - 1


BITSET_TYPES = (U32Set, U64Set)


def bitset_for_width(bits: int) -> Optional[type]:
    """Самый узкий тип множества, вмещающий bits младших битов."""
    for cls in BITSET_TYPES:
        if bits <= cls.WIDTH:
            return cls
    return None
