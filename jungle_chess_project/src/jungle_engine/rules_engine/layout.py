"""
对局工厂

根据布局配置创建棋盘、玩家和初始棋子。布局是可注入的配置数据。
"""

import copy
from typing import List, Optional, Tuple

from .board import Board, TerrainType
from .pieces import Piece, Player, SPECIES, get_species
from .position import Position
from ..config.game_config import BoardLayoutConfig, standard_layout
from ..utils.logger import LoggerMixin


class GameFactory:
    """工厂接口：提供初始棋盘布局、玩家列表和棋子放置"""

    def build(self) -> Tuple[Board, List[Player]]:
        raise NotImplementedError


class LayoutGameFactory(GameFactory, LoggerMixin):
    """
    按布局配置构建对局

    Raises（build 时）:
        ConfigError: 布局无效
        OccupiedError: 两个棋子被放在同一格
    """

    def __init__(self, layout: Optional[BoardLayoutConfig] = None):
        """
        Args:
            layout: 棋盘布局，None表示标准 7x9 布局
        """
        self.layout = copy.deepcopy(layout) if layout is not None else standard_layout()

    def create_board(self) -> Board:
        layout = self.layout
        board = Board(layout.width, layout.height)

        for x, y in layout.water:
            board.set_terrain(Position(x, y), TerrainType.WATER)

        for player in layout.players:
            for x, y in player.traps:
                board.set_terrain(Position(x, y), TerrainType.TRAP, owner=player.player_id)
            x, y = player.den
            board.set_terrain(Position(x, y), TerrainType.DEN, owner=player.player_id)

        return board

    def create_players(self) -> List[Player]:
        return [Player(setup.player_id, setup.name) for setup in self.layout.players]

    def create_pieces(self, board: Board, players: List[Player]):
        """创建棋子，放到棋盘上并登记到所属玩家"""
        by_id = {player.player_id: player for player in players}
        for setup in self.layout.players:
            owner = by_id[setup.player_id]
            for piece_setup in setup.pieces:
                piece = Piece(get_species(piece_setup.species), owner.player_id)
                board.place_piece(piece, Position(piece_setup.x, piece_setup.y))
                owner.add_piece(piece)

    def build(self) -> Tuple[Board, List[Player]]:
        """
        构建棋盘和玩家

        Returns:
            Tuple[Board, List[Player]]: 已放好棋子的棋盘和按行棋顺序排列的玩家
        """
        self.layout.validate(SPECIES.keys())

        board = self.create_board()
        players = self.create_players()
        self.create_pieces(board, players)

        self.log_debug(
            f"创建棋盘 {board.width}x{board.height}, "
            f"玩家 {[p.player_id for p in players]}, 棋子 {len(board.get_pieces())}"
        )
        return board, players
