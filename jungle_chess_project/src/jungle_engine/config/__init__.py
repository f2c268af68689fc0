"""
配置管理模块

包含棋盘布局配置和对局配置。
"""

from .config_manager import ConfigManager, load_layout_file
from .game_config import (
    PieceSetup, PlayerSetup, BoardLayoutConfig, GameConfig,
    standard_layout, DEFAULT_LAYOUT, DEFAULT_GAME_CONFIG
)

__all__ = [
    'ConfigManager', 'load_layout_file', 'PieceSetup', 'PlayerSetup', 'BoardLayoutConfig', 'GameConfig',
    'standard_layout', 'DEFAULT_LAYOUT', 'DEFAULT_GAME_CONFIG'
]
