"""
solvers/game_tree.py

Дерево посещённых состояний доски.

Узлы хранятся в плоском списке и адресуются индексами, которые не
меняются и не переиспользуются. У каждого узла один текущий родитель;
при повторном достижении доски другим путём узел переподвешивается,
а старый родитель сохраняет ссылку на него в своём списке детей.
Поэтому граф по спискам детей может быть DAG, а по указателям
родителей остаётся деревом.
"""

import time
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from core.board import Board, Position
from utils.error_handling import InvalidNodeError
from utils.logging import get_logger
from .base import ExploreStats

# Маркер в solvable_from(): сам узел терминальный
TERMINAL = -1


@dataclass
class GameTreeNode:
    """Одно исследованное состояние."""
    board: Board
    # None только у корня
    parent: Optional[int] = None
    # В порядке посещения; последний ребёнок соответствует последнему ходу
    children: List[int] = field(default_factory=list)

    def is_terminal(self) -> bool:
        return self.board.count() == 1


class GameTree:
    """
    Арена узлов GameTreeNode, корень имеет индекс 0.
    """

    def __init__(self, board: Board):
        self._nodes: List[GameTreeNode] = [GameTreeNode(board)]
        # Доски в арене уникальны, поэтому словарь заменяет поиск по всей таблице
        self._index: Dict[Board, int] = {board: 0}
        self.last_stats: Optional[ExploreStats] = None
        self.logger = get_logger()

    @classmethod
    def start(cls, board: Board) -> 'GameTree':
        """Дерево из одного корня без детей."""
        return cls(board)

    @property
    def size(self) -> int:
        return self._nodes[0].board.size

    def __len__(self) -> int:
        return len(self._nodes)

    def _node(self, idx: int) -> GameTreeNode:
        if not 0 <= idx < len(self._nodes):
            raise InvalidNodeError(f"Нет узла с индексом {idx} (узлов: {len(self._nodes)})")
        return self._nodes[idx]

    # ------------------------------------------------------------------
    # Изменение

    def insert_after(self, parent_idx: int, board: Board) -> Tuple[bool, int]:
        """
        Добавляет доску как ребёнка parent_idx, сливая одинаковые состояния.

        1. Доска уже среди детей parent_idx: ребёнок переносится в конец
           списка (redo всегда ведёт к последнему ходу).
        2. Доска есть в дереве под другим родителем: узел переподвешивается
           к parent_idx и дописывается в его детей.
        3. Иначе создаётся новый узел.

        Returns:
            (reused, idx): reused=True если узел уже существовал

        Raises:
            InvalidNodeError: если parent_idx нет в дереве
        """
        parent = self._node(parent_idx)
        existing = self._index.get(board)

        if existing is not None:
            self._nodes[existing].parent = parent_idx
            if existing in parent.children:
                parent.children.remove(existing)
            parent.children.append(existing)
            return True, existing

        idx = len(self._nodes)
        self._nodes.append(GameTreeNode(board, parent_idx))
        self._index[board] = idx
        parent.children.append(idx)
        return False, idx

    def apply_move(self, idx: int, frm: Position,
                   to: Position) -> Optional[Tuple[bool, int, Board]]:
        """
        Делает ход на доске узла idx.

        Returns:
            (reused, new_idx, new_board) или None если узла нет либо ход невозможен
        """
        node = self.get(idx)
        if node is None:
            return None
        board = node.board.apply_move(frm, to)
        if board is None:
            return None
        reused, new_idx = self.insert_after(idx, board)
        return reused, new_idx, board

    def explore(self, from_idx: int) -> List[int]:
        """
        Полный перебор всех ходов из from_idx.

        Список работ: стек (LIFO), так что обход фактически в глубину.
        В стек попадают только новые узлы; уже существовавшие узлы
        (в том числе созданные до вызова) повторно не раскрываются.

        Returns:
            Индексы посещённых узлов с одним колышком в порядке посещения
        """
        self._node(from_idx)
        stats = ExploreStats()
        start = time.time()

        stack = [from_idx]
        solutions: List[int] = []

        while stack:
            idx = stack.pop()
            board = self._nodes[idx].board
            stats.nodes_visited += 1

            if board.count() == 1:
                solutions.append(idx)

            for frm, _over, to in board.all_valid_moves():
                result = self.apply_move(idx, frm, to)
                assert result is not None, "Ход взят из all_valid_moves"
                reused, new_idx, _ = result
                stats.moves_applied += 1
                if reused:
                    stats.nodes_reused += 1
                else:
                    stats.nodes_created += 1
                    stack.append(new_idx)
            stats.max_frontier = max(stats.max_frontier, len(stack))

        stats.solutions = len(solutions)
        stats.time_elapsed = time.time() - start
        self.last_stats = stats
        self.logger.info(f"explore({from_idx}): {stats}")
        return solutions

    # ------------------------------------------------------------------
    # Навигация

    def get(self, idx: int) -> Optional[GameTreeNode]:
        if not 0 <= idx < len(self._nodes):
            return None
        return self._nodes[idx]

    def board(self, idx: int) -> Optional[Board]:
        node = self.get(idx)
        return node.board if node is not None else None

    def parent(self, idx: int) -> Optional[Tuple[int, GameTreeNode]]:
        """(индекс родителя, родитель); None для корня и неизвестных индексов."""
        node = self.get(idx)
        if node is None or node.parent is None:
            return None
        return node.parent, self._nodes[node.parent]

    def children_indices(self, idx: int) -> Optional[Tuple[int, ...]]:
        node = self.get(idx)
        if node is None:
            return None
        return tuple(node.children)

    def children(self, idx: int) -> Optional[Iterator[Tuple[int, GameTreeNode]]]:
        node = self.get(idx)
        if node is None:
            return None
        return ((ch, self._nodes[ch]) for ch in tuple(node.children))

    def path_to(self, idx: int) -> Optional[List[int]]:
        """Индексы от корня до idx по текущим указателям родителей."""
        if self.get(idx) is None:
            return None
        path = [idx]
        while self._nodes[path[-1]].parent is not None:
            path.append(self._nodes[path[-1]].parent)
            assert len(path) <= len(self._nodes), "Цикл в указателях родителей"
        path.reverse()
        return path

    # ------------------------------------------------------------------
    # Решаемость
    #
    # Без мемоизации: каждый вызов пересчитывает поддерево заново. Для
    # доски размера 5 это быстро, для больших досок число путей растёт
    # комбинаторно.

    def solvable_from(self, idx: int) -> Optional[Iterator[int]]:
        """
        Решаемые дети узла idx, затем TERMINAL если сам узел терминальный.
        Узел решаем, если последовательность непуста.
        """
        node = self.get(idx)
        if node is None:
            return None
        return self._solvable(node)

    def _solvable(self, node: GameTreeNode) -> Iterator[int]:
        for ch in tuple(node.children):
            if next(self._solvable(self._nodes[ch]), None) is not None:
                yield ch
        if node.is_terminal():
            yield TERMINAL

    def is_solvable(self, idx: int) -> Optional[bool]:
        it = self.solvable_from(idx)
        if it is None:
            return None
        return next(it, None) is not None

    def num_solutions(self, idx: int) -> Optional[int]:
        """Число путей по спискам детей до досок с одним колышком."""
        node = self.get(idx)
        if node is None:
            return None
        return self._num_solutions(node)

    def _num_solutions(self, node: GameTreeNode) -> int:
        if node.is_terminal():
            return 1
        return sum(self._num_solutions(self._nodes[ch]) for ch in node.children)

    def __repr__(self) -> str:
        return f"GameTree(size={self.size}, {len(self._nodes)} nodes)"
