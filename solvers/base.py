"""
solvers/base.py

Статистика обхода дерева состояний.
"""

from dataclasses import dataclass


@dataclass
class ExploreStats:
    """Статистика одного вызова GameTree.explore()."""
    nodes_visited: int = 0
    nodes_created: int = 0
    nodes_reused: int = 0
    moves_applied: int = 0
    solutions: int = 0
    max_frontier: int = 0
    time_elapsed: float = 0.0

    def __str__(self) -> str:
        return (
            f"Visited: {self.nodes_visited}, "
            f"Created: {self.nodes_created}, "
            f"Reused: {self.nodes_reused}, "
            f"Solutions: {self.solutions}, "
            f"Max stack: {self.max_frontier}, "
            f"Time: {self.time_elapsed:.3f}s"
        )
