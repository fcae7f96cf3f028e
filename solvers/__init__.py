"""
solvers - Исследование пространства состояний

Экспортирует:
- GameTree: дерево посещённых досок со слиянием одинаковых состояний
- GameTreeNode: узел дерева
- GameSession: команды undo/redo/sidestep/solve поверх дерева
- ExploreStats: статистика полного перебора
"""

from .base import ExploreStats
from .game_tree import GameTree, GameTreeNode, TERMINAL
from .session import GameSession, SessionState

__all__ = [
    'ExploreStats',
    'GameTree',
    'GameTreeNode',
    'TERMINAL',
    'GameSession',
    'SessionState'
]
