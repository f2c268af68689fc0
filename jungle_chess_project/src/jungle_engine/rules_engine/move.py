"""
斗兽棋走法数据结构

走法是值对象，执行后不可变，既用于改变棋局也用于悔棋还原。
"""

from dataclasses import dataclass, replace
from typing import Optional, TYPE_CHECKING

from .position import Position

if TYPE_CHECKING:
    from .pieces import Piece


@dataclass(frozen=True)
class Move:
    """
    走法类

    包含起始位置、目标位置、移动的棋子，执行后记录被吃的棋子
    及其在所属玩家棋子列表中的原索引。
    """
    from_pos: Position
    to_pos: Position
    piece: 'Piece'
    captured: Optional['Piece'] = None
    captured_index: Optional[int] = None

    def __post_init__(self):
        """把坐标统一转换为Position"""
        object.__setattr__(self, 'from_pos', Position.coerce(self.from_pos))
        object.__setattr__(self, 'to_pos', Position.coerce(self.to_pos))

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def distance(self) -> int:
        return self.from_pos.manhattan(self.to_pos)

    def with_capture(self, captured: 'Piece', captured_index: int) -> 'Move':
        """返回记录了被吃棋子的新走法"""
        return replace(self, captured=captured, captured_index=captured_index)

    def to_coordinate_notation(self) -> str:
        """
        转换为坐标记法

        Returns:
            str: 坐标记法字符串，如 "a2a3"
        """
        return f"{self.from_pos.to_notation()}{self.to_pos.to_notation()}"

    def __str__(self) -> str:
        return self.to_coordinate_notation()

    def __repr__(self) -> str:
        return (f"Move(from_pos={tuple(self.from_pos)}, to_pos={tuple(self.to_pos)}, "
                f"piece={self.piece.name}, captured={self.captured.name if self.captured else None})")

    def __eq__(self, other) -> bool:
        if not isinstance(other, Move):
            return False
        return (self.from_pos == other.from_pos and
                self.to_pos == other.to_pos and
                self.piece is other.piece)

    def __hash__(self) -> int:
        return hash((self.from_pos, self.to_pos, id(self.piece)))

    def to_dict(self) -> dict:
        """转换为字典"""
        return {
            'from_pos': tuple(self.from_pos),
            'to_pos': tuple(self.to_pos),
            'piece': self.piece.name,
            'owner': self.piece.owner,
            'captured': self.captured.name if self.captured else None,
        }
