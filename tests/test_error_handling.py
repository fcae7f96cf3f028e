"""
tests/test_error_handling.py

Тесты исключений, декоратора handle_errors и логгера.
"""

import sys
import os
import logging
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from core.board import Board, pos
from utils.error_handling import (
    PegSolitaireError, InvalidBoardError, InvalidPositionError,
    InvalidNodeError, NotationError, handle_errors, require_position
)
from utils.logging import get_logger, setup_file_logging


def test_hierarchy():
    for exc in (InvalidBoardError, InvalidPositionError, InvalidNodeError, NotationError):
        assert issubclass(exc, PegSolitaireError)
    assert issubclass(InvalidNodeError, IndexError)
    assert issubclass(NotationError, ValueError)


def test_handle_errors_returns_default():
    @handle_errors(default_return=-1, log_error=False)
    def fail():
        raise InvalidBoardError("плохая доска")

    assert fail() == -1


def test_handle_errors_propagates_foreign_exceptions():
    @handle_errors(default_return=-1, log_error=False)
    def fail():
        raise KeyError("не наша ошибка")

    with pytest.raises(KeyError):
        fail()


def test_handle_errors_passes_result():
    @handle_errors(default_return=None)
    def ok(x):
        return x * 2

    assert ok(21) == 42


def test_require_position():
    board = Board.full(4)
    assert require_position(board, pos(1, 2)) == pos(1, 2)
    with pytest.raises(InvalidPositionError):
        require_position(board, pos(3, 1))


def test_logger_singleton():
    assert get_logger() is get_logger()
    assert get_logger().logger.name == "peg_triangle"


def test_file_logging(tmp_path):
    log_file = tmp_path / "explore.log"
    handler = setup_file_logging(str(log_file), logging.INFO)
    logger = get_logger()
    try:
        logger.set_level(logging.INFO)
        logger.info("запись в файл")
    finally:
        handler.close()
        logger.logger.removeHandler(handler)
    assert "запись в файл" in log_file.read_text(encoding='utf-8')
