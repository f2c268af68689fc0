"""
斗兽棋棋子与玩家

物种以数据描述（等级、移动能力链、吃子特例标签），由通用的求值器解释，
不为每种动物单独建类。
"""

import itertools
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Tuple

from .position import Position
from .movement import MovementChain, build_movement_chain
from . import capture


# 移动能力标签
TERRITORY = 'territory'        # 禁止进入己方兽穴
WATER_BLOCK = 'water_block'    # 禁止下河
LEAP = 'leap'                  # 跳河
ADJACENT = 'adjacent'          # 正交走一步

# 吃子特例标签
APEX = 'apex'                  # 最高等级物种
SLAYS_APEX = 'slays_apex'      # 能吃最高等级物种


@dataclass(frozen=True)
class Species:
    """物种定义"""
    name: str
    rank: int
    symbol: str
    movement: Tuple[str, ...]
    capture_tags: FrozenSet[str] = frozenset()
    amphibious: bool = False

    @property
    def can_leap(self) -> bool:
        return LEAP in self.movement

    @property
    def movement_chain(self) -> MovementChain:
        return build_movement_chain(self.movement)


GROUND_CHAIN = (TERRITORY, WATER_BLOCK, ADJACENT)
JUMPER_CHAIN = (TERRITORY, WATER_BLOCK, LEAP, ADJACENT)
SWIMMER_CHAIN = (TERRITORY, ADJACENT)

# 标准物种表
SPECIES: Dict[str, Species] = {
    'elephant': Species('elephant', 8, 'E', GROUND_CHAIN, frozenset({APEX})),
    'lion': Species('lion', 7, 'L', JUMPER_CHAIN),
    'tiger': Species('tiger', 6, 'T', JUMPER_CHAIN),
    'leopard': Species('leopard', 5, 'P', GROUND_CHAIN),
    'dog': Species('dog', 4, 'D', GROUND_CHAIN),
    'wolf': Species('wolf', 3, 'W', GROUND_CHAIN),
    'cat': Species('cat', 2, 'C', GROUND_CHAIN),
    'rat': Species('rat', 1, 'R', SWIMMER_CHAIN, frozenset({SLAYS_APEX}), amphibious=True),
}


def get_species(name: str) -> Species:
    """按名称查找物种，不区分大小写"""
    try:
        return SPECIES[name.lower()]
    except KeyError:
        raise KeyError(f"未知物种: {name}") from None


_piece_counter = itertools.count(1)


class Piece:
    """
    棋子

    属于唯一的玩家（以玩家编号记录）。初始位置在第一次放置时记录且不再改变，
    当前位置在每次成功走子后更新。
    """

    def __init__(self, species: Species, owner: int, piece_id: Optional[str] = None):
        self.species = species
        self.owner = owner
        self.piece_id = piece_id or f"{owner}-{species.name}-{next(_piece_counter)}"
        self._initial_position: Optional[Position] = None
        self.position: Optional[Position] = None

    @property
    def rank(self) -> int:
        return self.species.rank

    @property
    def name(self) -> str:
        return self.species.name

    @property
    def is_amphibious(self) -> bool:
        return self.species.amphibious

    @property
    def initial_position(self) -> Optional[Position]:
        return self._initial_position

    def set_initial_position(self, pos: Position):
        """只在第一次调用时记录初始位置"""
        if self._initial_position is None:
            self._initial_position = Position.coerce(pos)

    def can_move(self, board, from_pos, to_pos) -> bool:
        """按物种的移动能力链判断走法"""
        return self.species.movement_chain.allows(self, board, from_pos, to_pos)

    def can_capture(self, target: 'Piece', board, from_pos=None, to_pos=None) -> bool:
        """判断能否吃掉目标棋子，位置缺省时取两枚棋子的当前位置"""
        return capture.can_capture(
            self, target, board,
            from_pos if from_pos is not None else self.position,
            to_pos if to_pos is not None else target.position,
        )

    def __repr__(self) -> str:
        pos = tuple(self.position) if self.position is not None else None
        return f"Piece({self.species.name}, owner={self.owner}, pos={pos})"


@dataclass(eq=False)
class Player:
    """
    玩家

    拥有一组有序的棋子。被吃的棋子从列表中移除，悔棋时按原索引放回。
    """
    player_id: int
    name: str = ""
    pieces: List[Piece] = field(default_factory=list)

    def __post_init__(self):
        if not self.name:
            self.name = f"Player {self.player_id}"

    def add_piece(self, piece: Piece):
        self.pieces.append(piece)

    def owns(self, piece: Piece) -> bool:
        return any(p is piece for p in self.pieces)

    def remove_piece(self, piece: Piece) -> int:
        """
        移除棋子

        Returns:
            int: 棋子原来在列表中的索引
        """
        for index, owned in enumerate(self.pieces):
            if owned is piece:
                del self.pieces[index]
                return index
        raise ValueError(f"{self.name} 不拥有棋子 {piece!r}")

    def restore_piece(self, piece: Piece, index: Optional[int] = None):
        """把棋子放回列表的原索引"""
        if index is None or index > len(self.pieces):
            self.pieces.append(piece)
        else:
            self.pieces.insert(index, piece)

    @property
    def has_pieces(self) -> bool:
        return len(self.pieces) > 0

    def __eq__(self, other) -> bool:
        if not isinstance(other, Player):
            return False
        return self.player_id == other.player_id

    def __hash__(self) -> int:
        return hash(self.player_id)
