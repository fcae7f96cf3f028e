"""
peg_io/visualizer.py

Текстовое представление треугольной доски.
"""

from typing import List, Optional

from core.board import Board, Position
from core.utils import PEG, HOLE


def display_board(board: Board, highlight: Optional[Position] = None) -> str:
    """
    Рисует треугольник: строка 0 сверху, каждая следующая сдвинута на
    полклетки вправо.

    Args:
        board: доска
        highlight: клетка, помеченная скобками

    Returns:
        Строка для вывода
    """
    lines = []
    for y in range(board.size):
        cells = []
        for x in range(board.row_len(y)):
            p = Position(x, y)
            mark = PEG if board.at(p) else HOLE
            cells.append(f"[{mark}]" if p == highlight else f" {mark} ")
        lines.append(" " * y + "".join(cells).rstrip())
    return "\n".join(lines)


def describe_move(before: Board, after: Board) -> Optional[str]:
    """
    Восстанавливает ход по двум соседним доскам.

    Returns:
        "(x,y) → (x,y)" или None, если доски не связаны одним ходом
    """
    for frm, _over, to in before.all_valid_moves():
        if before.apply_move(frm, to) == after:
            return f"({frm.x},{frm.y}) → ({to.x},{to.y})"
    return None


def format_path(boards: List[Board]) -> str:
    """
    Форматирует последовательность досок (например, путь к решению).
    """
    if not boards:
        return "❌ Решение не найдено"

    lines = [f"✅ Путь из {len(boards) - 1} ходов:", display_board(boards[0])]
    for i, (before, after) in enumerate(zip(boards, boards[1:]), 1):
        move = describe_move(before, after) or "?"
        lines.append(f"\n  {i:2}. {move}")
        lines.append(display_board(after))
    return "\n".join(lines)
