"""
peg_io - Ввод/вывод для треугольного Peg Solitaire

Экспортирует:
- Парсинг клеток
- Текстовую визуализацию доски и пути
"""

from .parser import parse_position, parse_positions
from .visualizer import display_board, describe_move, format_path

__all__ = [
    'parse_position',
    'parse_positions',
    'display_board',
    'describe_move',
    'format_path'
]
