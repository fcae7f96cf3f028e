"""
utils/error_handling.py

Исключения и обработка ошибок.

Отсутствие значения (None): штатный ответ запросов к доске и дереву.
Исключения поднимаются только при ошибках вызывающего кода.
"""

from typing import Callable, Any
from functools import wraps

from .logging import get_logger


class PegSolitaireError(Exception):
    """Базовое исключение проекта."""
    pass


class InvalidBoardError(PegSolitaireError):
    """Невалидный размер доски или битовый шаблон вне треугольника."""
    pass


class InvalidPositionError(PegSolitaireError):
    """Позиция вне доски там, где вызывающий обязан передать валидную."""
    pass


class InvalidNodeError(PegSolitaireError, IndexError):
    """Индекс узла вне дерева."""
    pass


class NotationError(PegSolitaireError, ValueError):
    """Ошибка разбора текстовой нотации."""
    pass


def handle_errors(default_return: Any = None, log_error: bool = True):
    """
    Декоратор для обработки ошибок.

    Args:
        default_return: значение по умолчанию при ошибке
        log_error: логировать ли ошибку
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except PegSolitaireError as e:
                if log_error:
                    get_logger().error(f"{func.__name__}: {e}")
                return default_return
        return wrapper
    return decorator


def require_position(board, p):
    """
    Проверяет, что позиция лежит на доске.

    Raises:
        InvalidPositionError: если позиция невалидна
    """
    if not board.valid(p):
        raise InvalidPositionError(f"Позиция {tuple(p)} вне доски размера {board.size}")
    return p
