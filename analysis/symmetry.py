"""
analysis/symmetry.py

Работа с симметриями треугольной доски.
"""

from typing import Dict, List

from core.board import Board

# Имена вариантов в порядке Board.all_variants()
SYMMETRY_NAMES = (
    'identity', 'flip', 'rotate_right', 'rotate_left',
    'rotate_right_flip', 'rotate_left_flip',
)


def get_all_symmetries(board: Board) -> Dict[str, Board]:
    """Все 6 симметрий доски по именам."""
    return dict(zip(SYMMETRY_NAMES, board.all_variants()))


def count_symmetries(board: Board) -> int:
    """
    Считает различные симметричные образы доски.
    Если позиция симметрична, число < 6.
    """
    return len(set(board.all_variants()))


def equivalent(a: Board, b: Board) -> bool:
    """Доски совпадают с точностью до симметрии."""
    return a.size == b.size and a.canonicalize() == b.canonicalize()


def unique_up_to_symmetry(boards: List[Board]) -> List[Board]:
    """Оставляет по одному представителю каждого класса (порядок сохраняется)."""
    seen = set()
    result = []
    for board in boards:
        key = board.canonicalize()
        if key not in seen:
            seen.add(key)
            result.append(board)
    return result
