"""
core/utils.py

Общие константы и утилиты треугольной доски.
"""

from typing import List, Tuple

# Шесть направлений треугольной сетки (порядок важен: i-й сосед на
# расстоянии 1 и i-й сосед на расстоянии 2 лежат в одном направлении)
DIRECTIONS: List[Tuple[int, int]] = [
    (1, 0), (0, 1), (-1, 1), (-1, 0), (0, -1), (1, -1)
]

DEFAULT_BOARD_SIZE = 5
MAX_BOARD_SIZE = 8

# Символы для отображения
PEG = '●'       # Колышек
HOLE = '○'      # Пустое место


def row_offset(size: int) -> int:
    """Наименьшая степень двойки >= size (шаг между строками в битах)."""
    offset = 1
    while offset < size:
        offset <<= 1
    return offset


def bits_required(size: int) -> int:
    """Сколько младших битов занимает доска размера size."""
    return (size - 1) * row_offset(size) + size


def triangle_cells(size: int) -> int:
    """Количество клеток треугольника со стороной size."""
    return size * (size + 1) // 2
