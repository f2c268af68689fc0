"""
斗兽棋规则引擎

实现斗兽棋的棋盘、物种移动能力、组合式规则校验和对局会话控制。
"""

__version__ = "0.1.0"
__author__ = "Jungle Chess Team"

from .rules_engine import (
    Position, Board, BoardView, TerrainType, Piece, Player, Move,
    GameSession, GameState, MoveOutcome, LayoutGameFactory, create_session
)
from .config import ConfigManager, BoardLayoutConfig, GameConfig
from .utils import setup_logger, get_logger, JungleError

__all__ = [
    "__version__", "__author__",
    "Position", "Board", "BoardView", "TerrainType", "Piece", "Player", "Move",
    "GameSession", "GameState", "MoveOutcome", "LayoutGameFactory", "create_session",
    "ConfigManager", "BoardLayoutConfig", "GameConfig",
    "setup_logger", "get_logger", "JungleError"
]
