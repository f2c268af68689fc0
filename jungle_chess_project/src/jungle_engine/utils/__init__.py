"""
工具模块

包含日志、异常处理和其他通用工具。
"""

from .logger import setup_logger, get_logger, set_level, LoggerMixin, GameEventLogger
from .exceptions import (
    JungleError, ConfigError, OutOfBoundsError, OccupiedError,
    NoPieceError, InvalidBoardTypeError, GameStateError
)

__all__ = [
    'setup_logger', 'get_logger', 'set_level', 'LoggerMixin', 'GameEventLogger',
    'JungleError', 'ConfigError', 'OutOfBoundsError', 'OccupiedError',
    'NoPieceError', 'InvalidBoardTypeError', 'GameStateError'
]
