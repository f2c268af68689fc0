"""
棋盘坐标

不可变的 (x, y) 坐标，按值比较，可作为字典键。
"""

from typing import List, NamedTuple, Tuple, Union


# 上下左右四个正交方向
ORTHOGONAL_DIRECTIONS = [(0, 1), (0, -1), (1, 0), (-1, 0)]


class Position(NamedTuple):
    """棋盘坐标 (x: 列, y: 行)"""
    x: int
    y: int

    @classmethod
    def coerce(cls, value: Union['Position', Tuple[int, int]]) -> 'Position':
        """把 (x, y) 元组转换为Position"""
        if isinstance(value, Position):
            return value
        x, y = value
        return cls(int(x), int(y))

    def offset(self, dx: int, dy: int) -> 'Position':
        return Position(self.x + dx, self.y + dy)

    def neighbors(self) -> List['Position']:
        """四个正交相邻坐标（不做边界检查）"""
        return [self.offset(dx, dy) for dx, dy in ORTHOGONAL_DIRECTIONS]

    def manhattan(self, other: 'Position') -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def is_straight_line_to(self, other: 'Position') -> bool:
        """是否与目标位于同一行或同一列（且不重合）"""
        return self != other and (self.x == other.x or self.y == other.y)

    def to_notation(self) -> str:
        """
        转换为坐标记法

        Returns:
            str: 列用字母、行用数字，如 (0, 2) -> "a2"
        """
        return f"{chr(ord('a') + self.x)}{self.y}"

    @classmethod
    def from_notation(cls, notation: str) -> 'Position':
        """从坐标记法创建Position，如 "a2" -> (0, 2)"""
        notation = notation.strip().lower()
        if len(notation) < 2 or not notation[0].isalpha() or not notation[1:].isdigit():
            raise ValueError(f"无效的坐标记法: {notation}")
        return cls(ord(notation[0]) - ord('a'), int(notation[1:]))
