"""
斗兽棋规则引擎模块

包含棋盘表示、物种能力、走法校验、会话控制等核心功能。
"""

from .position import Position
from .board import Board, BoardView, Cell, TerrainType, create_board
from .pieces import Piece, Player, Species, SPECIES, get_species
from .movement import (
    Verdict, MovementChain, AdjacencyRange, TerritoryRestriction,
    WaterBlock, LeapOverWater, build_movement_chain
)
from .capture import can_capture
from .move import Move
from .rule_engine import (
    GameRule, CompositeRule, RuleEngine, TurnOwnershipRule, AdjacentOrLeapMovementRule,
    RankBasedCaptureRule, SpecialCaptureRule, WaterMovementRule, TrapRule, DenRule,
    create_rule_engine
)
from .layout import GameFactory, LayoutGameFactory
from .session import GameSession, GameState, MoveOutcome, TurnRecord, create_session

__all__ = [
    'Position', 'Board', 'BoardView', 'Cell', 'TerrainType', 'create_board',
    'Piece', 'Player', 'Species', 'SPECIES', 'get_species',
    'Verdict', 'MovementChain', 'AdjacencyRange', 'TerritoryRestriction',
    'WaterBlock', 'LeapOverWater', 'build_movement_chain', 'can_capture',
    'Move',
    'GameRule', 'CompositeRule', 'RuleEngine', 'TurnOwnershipRule', 'AdjacentOrLeapMovementRule',
    'RankBasedCaptureRule', 'SpecialCaptureRule', 'WaterMovementRule', 'TrapRule', 'DenRule',
    'create_rule_engine',
    'GameFactory', 'LayoutGameFactory',
    'GameSession', 'GameState', 'MoveOutcome', 'TurnRecord', 'create_session'
]
