"""
utils - Логирование и обработка ошибок.
"""

from .logging import SolverLogger, get_logger, setup_file_logging
from .error_handling import (
    PegSolitaireError, InvalidBoardError, InvalidPositionError,
    InvalidNodeError, NotationError, handle_errors, require_position
)

__all__ = [
    'SolverLogger', 'get_logger', 'setup_file_logging',
    'PegSolitaireError', 'InvalidBoardError', 'InvalidPositionError',
    'InvalidNodeError', 'NotationError', 'handle_errors', 'require_position'
]
