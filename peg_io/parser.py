"""
peg_io/parser.py

Парсинг текстовой записи клеток.
"""

import re
from typing import List

from core.board import Position
from utils.error_handling import NotationError

_POSITION_RE = re.compile(r'^\s*\(?\s*(\d+)\s*[,;:\s]\s*(\d+)\s*\)?\s*$')


def parse_position(text: str) -> Position:
    """
    Парсит клетку в формате "x,y" (допускаются скобки и пробелы).

    Raises:
        NotationError: если строка не похожа на клетку
    """
    match = _POSITION_RE.match(text)
    if not match:
        raise NotationError(f"Неверный формат клетки: {text!r}. Ожидается: x,y")
    return Position(int(match.group(1)), int(match.group(2)))


def parse_positions(text: str) -> List[Position]:
    """Список клеток через пробел или '/': "0,0 2,0" -> [(0,0), (2,0)]."""
    parts = [part for part in re.split(r'[\s/]+', text.strip()) if part]
    return [parse_position(part) for part in parts]
