"""
analysis - Анализ позиций

Экспортирует:
- Симметрии треугольной доски
"""

from .symmetry import (
    SYMMETRY_NAMES, get_all_symmetries, count_symmetries,
    equivalent, unique_up_to_symmetry
)

__all__ = [
    'SYMMETRY_NAMES',
    'get_all_symmetries',
    'count_symmetries',
    'equivalent',
    'unique_up_to_symmetry'
]
