"""
斗兽棋棋盘数据结构

定义地形、格子、棋盘以及供渲染使用的只读棋盘视图。
"""

import weakref
from enum import IntEnum
from typing import Dict, Iterator, List, Optional, Tuple, TYPE_CHECKING

import numpy as np

from .position import Position
from ..utils.exceptions import ConfigError, OutOfBoundsError, OccupiedError

if TYPE_CHECKING:
    from .pieces import Piece


class TerrainType(IntEnum):
    """地形类型"""
    NORMAL = 0   # 普通陆地
    WATER = 1    # 河流
    TRAP = 2     # 陷阱
    DEN = 3      # 兽穴


class Cell:
    """
    棋盘格子

    持有地形类型、陷阱/兽穴的所属玩家，以及对占据棋子的弱引用。
    棋子的生命周期由创建它的玩家负责，格子只记录放置关系。
    """

    def __init__(self, position: Position, terrain: TerrainType = TerrainType.NORMAL,
                 owner: Optional[int] = None):
        self.position = position
        self.terrain = terrain
        self.owner = owner
        self._occupant_ref: Optional[weakref.ReferenceType] = None

    @property
    def occupant(self) -> Optional['Piece']:
        """占据该格子的棋子；棋子已被回收时返回None"""
        if self._occupant_ref is None:
            return None
        return self._occupant_ref()

    @property
    def is_occupied(self) -> bool:
        return self.occupant is not None

    def set_occupant(self, piece: 'Piece'):
        self._occupant_ref = weakref.ref(piece)

    def clear_occupant(self) -> Optional['Piece']:
        piece = self.occupant
        self._occupant_ref = None
        return piece

    def __repr__(self) -> str:
        owner = f", owner={self.owner}" if self.owner is not None else ""
        return f"Cell({tuple(self.position)}, {self.terrain.name}{owner}, occupant={self.occupant!r})"


class Board:
    """
    斗兽棋棋盘

    维护 Position -> Cell 的映射。宽高在构造时固定，
    每个界内坐标恰好对应一个格子，越界访问抛出 OutOfBoundsError。
    """

    def __init__(self, width: int, height: int):
        """
        初始化棋盘，所有格子为普通地形

        Args:
            width: 列数
            height: 行数
        """
        if width <= 0 or height <= 0:
            raise ConfigError("board", f"棋盘尺寸必须为正数: {width}x{height}")

        self.width = width
        self.height = height
        self._cells: Dict[Position, Cell] = {
            Position(x, y): Cell(Position(x, y))
            for y in range(height)
            for x in range(width)
        }

    # ==================== 格子访问 ====================

    def in_bounds(self, pos) -> bool:
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    def get_cell(self, pos) -> Cell:
        """
        获取格子

        Raises:
            OutOfBoundsError: 坐标超出 [0,width)x[0,height)
        """
        cell = self._cells.get(Position.coerce(pos))
        if cell is None:
            raise OutOfBoundsError(pos, self.width, self.height)
        return cell

    def cells(self) -> Iterator[Cell]:
        """按行优先顺序遍历所有格子"""
        for y in range(self.height):
            for x in range(self.width):
                yield self._cells[Position(x, y)]

    def set_terrain(self, pos, terrain: TerrainType, owner: Optional[int] = None):
        """
        设置格子地形

        坐标不存在时不做任何操作；重复设置同一地形是幂等的。
        """
        cell = self._cells.get(Position.coerce(pos))
        if cell is None:
            return
        cell.terrain = terrain
        cell.owner = owner

    # ==================== 地形查询 ====================

    def get_terrain(self, pos) -> TerrainType:
        return self.get_cell(pos).terrain

    def get_terrain_owner(self, pos) -> Optional[int]:
        return self.get_cell(pos).owner

    def is_water(self, pos) -> bool:
        return self.get_terrain(pos) == TerrainType.WATER

    def is_trap(self, pos) -> bool:
        return self.get_terrain(pos) == TerrainType.TRAP

    def is_den(self, pos) -> bool:
        return self.get_terrain(pos) == TerrainType.DEN

    def find_dens(self, owner: Optional[int] = None) -> List[Position]:
        """查找兽穴坐标，可按所属玩家过滤"""
        return [
            cell.position for cell in self.cells()
            if cell.terrain == TerrainType.DEN and (owner is None or cell.owner == owner)
        ]

    def has_leap_path(self, from_pos, to_pos) -> bool:
        """
        检查是否存在跳河路径

        要求起止点位于同一行或同一列，中间格子全部为河流（至少一格）
        且没有会游泳的棋子占据，目标格子本身不是河流。

        Args:
            from_pos: 起始位置
            to_pos: 目标位置

        Returns:
            bool: 是否可以跳过河流
        """
        from_pos = Position.coerce(from_pos)
        to_pos = Position.coerce(to_pos)
        if not from_pos.is_straight_line_to(to_pos):
            return False
        if not (self.in_bounds(from_pos) and self.in_bounds(to_pos)):
            return False

        dx = (to_pos.x > from_pos.x) - (to_pos.x < from_pos.x)
        dy = (to_pos.y > from_pos.y) - (to_pos.y < from_pos.y)

        current = from_pos.offset(dx, dy)
        crossed = 0
        while current != to_pos:
            cell = self._cells[current]
            if cell.terrain != TerrainType.WATER:
                return False
            occupant = cell.occupant
            if occupant is not None and occupant.is_amphibious:
                return False
            crossed += 1
            current = current.offset(dx, dy)

        return crossed > 0 and self._cells[to_pos].terrain != TerrainType.WATER

    # ==================== 棋子放置 ====================

    def get_occupant(self, pos) -> Optional['Piece']:
        return self.get_cell(pos).occupant

    def is_empty(self, pos) -> bool:
        return self.get_occupant(pos) is None

    def place_piece(self, piece: 'Piece', pos):
        """
        放置棋子

        更新棋子的当前位置（首次放置时同时记录初始位置），并登记到目标格子。
        棋子原来所在的格子会被清空，保证一个棋子只占一个格子。

        Raises:
            OccupiedError: 目标格子已被其他棋子占据
        """
        pos = Position.coerce(pos)
        cell = self.get_cell(pos)
        occupant = cell.occupant
        if occupant is not None and occupant is not piece:
            raise OccupiedError(pos, occupant)

        previous = piece.position
        if previous is not None and previous != pos and self.in_bounds(previous):
            previous_cell = self._cells[previous]
            if previous_cell.occupant is piece:
                previous_cell.clear_occupant()

        cell.set_occupant(piece)
        piece.set_initial_position(pos)
        piece.position = pos

    def remove_occupant(self, pos) -> Optional['Piece']:
        """
        清除格子上的棋子引用

        只解除放置关系，不销毁棋子，棋子仍归其玩家所有。

        Returns:
            Optional[Piece]: 被移开的棋子
        """
        return self.get_cell(pos).clear_occupant()

    def get_pieces(self, owner: Optional[int] = None) -> List[Tuple[Position, 'Piece']]:
        """
        获取棋盘上所有棋子的位置

        Args:
            owner: 指定玩家，None表示获取所有棋子

        Returns:
            List[Tuple[Position, Piece]]: [(位置, 棋子), ...]
        """
        pieces = []
        for cell in self.cells():
            piece = cell.occupant
            if piece is not None and (owner is None or piece.owner == owner):
                pieces.append((cell.position, piece))
        return pieces

    def find_piece(self, piece: 'Piece') -> Optional[Position]:
        for cell in self.cells():
            if cell.occupant is piece:
                return cell.position
        return None

    # ==================== 格式转换 ====================

    def to_matrix(self, first_player: Optional[int] = None) -> np.ndarray:
        """
        转换为矩阵格式

        先手玩家的棋子记为正的等级，其他玩家记为负的等级，空格为0。

        Args:
            first_player: 记为正数的玩家，None表示棋盘上编号最小的玩家

        Returns:
            np.ndarray: height x width 的整数矩阵，按 [y, x] 索引
        """
        matrix = np.zeros((self.height, self.width), dtype=int)
        pieces = self.get_pieces()
        if first_player is None and pieces:
            first_player = min(piece.owner for _, piece in pieces)

        for pos, piece in pieces:
            sign = 1 if piece.owner == first_player else -1
            matrix[pos.y, pos.x] = sign * piece.rank
        return matrix

    def terrain_matrix(self) -> np.ndarray:
        """
        地形矩阵

        Returns:
            np.ndarray: height x width 的 TerrainType 取值矩阵
        """
        matrix = np.zeros((self.height, self.width), dtype=int)
        for cell in self.cells():
            matrix[cell.position.y, cell.position.x] = int(cell.terrain)
        return matrix

    def snapshot(self) -> Tuple[Tuple[Position, str, int, int], ...]:
        """
        棋子放置快照，用于精确比较两个时刻的棋盘状态

        Returns:
            按坐标排序的 (位置, 物种, 所属玩家, 棋子对象id) 元组
        """
        return tuple(
            (pos, piece.species.name, piece.owner, id(piece))
            for pos, piece in sorted(self.get_pieces(), key=lambda item: (item[0].y, item[0].x))
        )

    def __repr__(self) -> str:
        return f"Board({self.width}x{self.height}, pieces={len(self.get_pieces())})"


class BoardView:
    """
    只读棋盘视图

    交给渲染等外部协作者使用，只暴露查询接口。
    """

    def __init__(self, board: Board):
        self._board = board

    @property
    def width(self) -> int:
        return self._board.width

    @property
    def height(self) -> int:
        return self._board.height

    def in_bounds(self, pos) -> bool:
        return self._board.in_bounds(pos)

    def get_terrain(self, pos) -> TerrainType:
        return self._board.get_terrain(pos)

    def get_terrain_owner(self, pos) -> Optional[int]:
        return self._board.get_terrain_owner(pos)

    def get_occupant(self, pos) -> Optional['Piece']:
        return self._board.get_occupant(pos)

    def has_leap_path(self, from_pos, to_pos) -> bool:
        return self._board.has_leap_path(from_pos, to_pos)

    def get_pieces(self, owner: Optional[int] = None) -> List[Tuple[Position, 'Piece']]:
        return self._board.get_pieces(owner)

    def find_dens(self, owner: Optional[int] = None) -> List[Position]:
        return self._board.find_dens(owner)

    def to_matrix(self, first_player: Optional[int] = None) -> np.ndarray:
        return self._board.to_matrix(first_player)

    def terrain_matrix(self) -> np.ndarray:
        return self._board.terrain_matrix()

    def snapshot(self):
        return self._board.snapshot()


def create_board(width: int, height: int) -> Board:
    """创建全部为普通地形的棋盘"""
    return Board(width, height)
