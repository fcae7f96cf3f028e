#!/usr/bin/env python3
"""
main.py

Точка входа: перебор треугольного Peg Solitaire из заданной позиции.

Использование:
    python main.py                         # доска 5, дырка в (0,0)
    python main.py --size 5 --hole 2,2     # другая стартовая дырка
    python main.py --explore               # полный перебор и первое решение
    python main.py --all-holes             # сводка решаемости по всем дыркам
"""

import sys
import argparse
import logging
import time

from core.board import Board
from core.utils import DEFAULT_BOARD_SIZE, MAX_BOARD_SIZE
from analysis.symmetry import count_symmetries, unique_up_to_symmetry
from peg_io import parse_position, display_board, format_path
from solvers import GameTree
from utils.error_handling import handle_errors, require_position
from utils.logging import get_logger, setup_file_logging


def explore_start(board: Board, show_path: bool = True) -> GameTree:
    """Строит дерево из board, перебирает все ходы и печатает итог."""
    tree = GameTree.start(board)

    start = time.time()
    solutions = tree.explore(0)
    elapsed = time.time() - start

    print(f"\nСостояний: {len(tree)}")
    print(f"Терминальных позиций: {len(solutions)}")
    print(f"⏱ Время: {elapsed:.3f}с")

    if not solutions:
        print("\n❌ Решение не найдено")
        return tree

    finals = [tree.board(i) for i in solutions]
    print(f"Различных с точностью до симметрии: {len(unique_up_to_symmetry(finals))}")

    if show_path:
        path = tree.path_to(solutions[0])
        print()
        print(format_path([tree.board(i) for i in path]))
    return tree


@handle_errors(default_return=1)
def run(args) -> int:
    if args.all_holes:
        summarize_holes(args.size)
        return 0

    hole = require_position(Board.full(args.size), parse_position(args.hole))
    board = Board.start(args.size, hole)

    if args.canonical:
        board = board.canonicalize()

    print(f"\nСтартовая позиция ({board.count()} колышков, "
          f"симметричных образов: {count_symmetries(board)}):")
    print(display_board(board, highlight=hole if not args.canonical else None))

    if args.explore:
        explore_start(board, show_path=not args.quiet)
    else:
        moves = list(board.all_valid_moves())
        print(f"\nДоступно ходов: {len(moves)}")
        for frm, over, to in moves:
            print(f"  ({frm.x},{frm.y}) через ({over.x},{over.y}) → ({to.x},{to.y})")
    return 0


def summarize_holes(size: int):
    """Решаемость для каждой стартовой дырки (по одной на класс симметрии)."""
    starts = unique_up_to_symmetry(
        [Board.start(size, p) for p in Board.full(size).iter_all_cells()]
    )
    print(f"\nДоска размера {size}: {len(starts)} различных стартов")
    for board in starts:
        hole = next(p for p, peg in board.iter_cells() if not peg)
        solutions = GameTree.start(board).explore(0)
        mark = "✅" if solutions else "❌"
        print(f"  {mark} дырка ({hole.x},{hole.y}): терминальных позиций {len(solutions)}")


def main():
    parser = argparse.ArgumentParser(
        description='Triangular Peg Solitaire Explorer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Примеры:
  python main.py --explore             # доска 5, дырка в углу
  python main.py --hole 1,1 --explore  # дырка внутри
  python main.py --size 4 --all-holes  # сводка для доски 4
        """
    )
    parser.add_argument(
        '--size', '-n', type=int, default=DEFAULT_BOARD_SIZE,
        choices=range(1, MAX_BOARD_SIZE + 1), metavar='N',
        help=f'Сторона треугольника 1..{MAX_BOARD_SIZE} (default: {DEFAULT_BOARD_SIZE})'
    )
    parser.add_argument(
        '--hole', default='0,0',
        help='Стартовая пустая клетка x,y (default: 0,0)'
    )
    parser.add_argument(
        '--explore', '-e', action='store_true',
        help='Полный перебор и вывод первого найденного решения'
    )
    parser.add_argument(
        '--all-holes', action='store_true',
        help='Сводка решаемости по всем стартовым дыркам'
    )
    parser.add_argument(
        '--canonical', action='store_true',
        help='Привести стартовую доску к канонической форме'
    )
    parser.add_argument(
        '--quiet', '-q', action='store_true',
        help='Не печатать путь к решению'
    )
    parser.add_argument(
        '--verbose', '-v', action='store_true',
        help='Отладочное логирование'
    )
    parser.add_argument(
        '--log-file',
        help='Дублировать лог в файл'
    )

    args = parser.parse_args()

    level = logging.DEBUG if args.verbose else logging.WARNING
    get_logger().set_level(level)
    if args.log_file:
        setup_file_logging(args.log_file, level)

    print("=" * 50)
    print("🎯 Triangular Peg Solitaire")
    print("=" * 50)

    sys.exit(run(args))


if __name__ == "__main__":
    main()
