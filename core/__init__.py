"""
core - Ядро треугольного Peg Solitaire

Битовое множество фиксированной ширины и треугольная доска.
"""

from .bitset import FixedWidthBitSet, U32Set, U64Set, bitset_for_width
from .board import Board, Position, Move, pos, iter_all_cells
from .utils import (
    DIRECTIONS, PEG, HOLE, DEFAULT_BOARD_SIZE, MAX_BOARD_SIZE,
    row_offset, bits_required, triangle_cells
)

__all__ = [
    'FixedWidthBitSet', 'U32Set', 'U64Set', 'bitset_for_width',
    'Board', 'Position', 'Move', 'pos', 'iter_all_cells',
    'DIRECTIONS', 'PEG', 'HOLE', 'DEFAULT_BOARD_SIZE', 'MAX_BOARD_SIZE',
    'row_offset', 'bits_required', 'triangle_cells'
]
