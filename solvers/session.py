"""
solvers/session.py

Игровая сессия: текущий узел дерева и команды пользователя.

Не знает ничего об отрисовке и устройствах ввода: слой представления
переводит клики и клавиши в вызовы click/undo/redo/sidestep/solve и
читает board, state, hint_moves() для отрисовки.
"""

import logging
from enum import Enum
from typing import List, Optional

from core.board import Board, Move, Position
from core.utils import DEFAULT_BOARD_SIZE
from utils.logging import get_logger
from .game_tree import GameTree


class SessionState(Enum):
    SELECT_START = "select_start"   # выбор первой пустой клетки
    IDLE = "idle"
    PICKED_UP = "picked_up"         # колышек поднят, ждём клетку назначения


class GameSession:
    """
    Сессия поверх GameTree.

    Начинается с полной доски в состоянии SELECT_START: первый клик по
    колышку убирает его и создаёт стартовую позицию.
    """

    def __init__(self, size: int = DEFAULT_BOARD_SIZE, board: Optional[Board] = None):
        self.tree = GameTree.start(board if board is not None else Board.full(size))
        self.current = 0
        self.state = SessionState.SELECT_START
        self.picked: Optional[Position] = None
        self.logger = get_logger()

    @property
    def board(self) -> Board:
        return self.tree.board(self.current)

    def _set_idle(self):
        self.state = SessionState.IDLE
        self.picked = None

    def _release(self) -> bool:
        """Отпускает поднятый колышек. True если он был поднят."""
        if self.state is SessionState.PICKED_UP:
            self._set_idle()
            return True
        return False

    # ------------------------------------------------------------------
    # Команды

    def click(self, p: Position, chain: bool = False) -> SessionState:
        """
        Клик по клетке p.

        Args:
            p: клетка (клики мимо доски игнорируются)
            chain: после прыжка оставить колышек поднятым на новой клетке
        """
        board = self.board
        has_peg = board.at(p)
        if has_peg is None:
            return self.state

        if self.state is SessionState.SELECT_START:
            if has_peg:
                _, self.current = self.tree.insert_after(
                    self.current, board.filter(lambda q: q != p)
                )
                self._set_idle()
                if self.logger.is_enabled_for(logging.DEBUG):
                    self.logger.debug(f"Старт: убран колышек {tuple(p)}, узел {self.current}")
        elif self.state is SessionState.IDLE:
            if has_peg:
                self.state = SessionState.PICKED_UP
                self.picked = p
        elif p == self.picked:
            self._set_idle()
        else:
            result = self.tree.apply_move(self.current, self.picked, p)
            if result is not None:
                reused, self.current, _ = result
                if self.logger.is_enabled_for(logging.DEBUG):
                    self.logger.debug(
                        f"Ход {tuple(self.picked)} -> {tuple(p)}: узел {self.current}"
                        f"{' (повтор)' if reused else ''}"
                    )
                if chain:
                    self.picked = p
                else:
                    self._set_idle()
        return self.state

    def cancel(self):
        self._release()

    def undo(self) -> bool:
        """Шаг назад к родителю. True если текущий узел сменился."""
        if self._release() or self.state is not SessionState.IDLE:
            return False
        parent = self.tree.parent(self.current)
        if parent is None:
            return False
        parent_idx, _ = parent
        # Переносим текущий узел в конец детей родителя, чтобы redo вернул сюда
        refreshed = self.tree.insert_after(parent_idx, self.board)
        assert refreshed == (True, self.current)
        self.current = parent_idx
        if self.current == 0:
            self.state = SessionState.SELECT_START
        return True

    def redo(self) -> bool:
        """Шаг вперёд к последнему посещённому ребёнку."""
        if self._release():
            return False
        children = self.tree.children_indices(self.current)
        if not children:
            return False
        self.current = children[-1]
        if self.current != 0:
            self._set_idle()
        return True

    def sidestep(self) -> bool:
        """Переход к следующему брату (по кругу)."""
        if self._release() or self.state is not SessionState.IDLE:
            return False
        parent = self.tree.parent(self.current)
        if parent is None:
            return False
        siblings = self.tree.children_indices(parent[0])
        if self.current not in siblings:
            return False
        i = siblings.index(self.current)
        self.current = siblings[(i + 1) % len(siblings)]
        return True

    def solve(self) -> bool:
        """Полный перебор из текущего узла и переход к первому решению."""
        if self._release() or self.state is not SessionState.IDLE:
            return False
        solutions = self.tree.explore(self.current)
        if not solutions:
            return False
        self.current = solutions[0]
        return True

    # ------------------------------------------------------------------
    # Запросы для отрисовки

    @property
    def num_solutions(self) -> int:
        return self.tree.num_solutions(self.current)

    @property
    def solvable(self) -> bool:
        return self.num_solutions > 0

    def hint_moves(self) -> List[Move]:
        """Доступные ходы; при поднятом колышке: только из него."""
        moves = self.board.all_valid_moves()
        if self.state is SessionState.PICKED_UP:
            return [m for m in moves if m[0] == self.picked]
        return list(moves)

    def can_drop(self, p: Position) -> bool:
        if self.state is not SessionState.PICKED_UP:
            return False
        return self.board.valid_move(self.picked, p) is not None
