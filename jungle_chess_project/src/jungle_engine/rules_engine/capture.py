"""
吃子规则

按优先级从高到低：
1. 在河中的鼠不能吃岸上的棋子，岸上的棋子也不能吃河中的鼠；
2. 落入对方陷阱的棋子可以被任意等级吃掉；
3. 鼠可以吃象；
4. 其余情况按等级比较，攻击方等级不低于目标即可。

岸上的象仍然可以按等级吃岸上的鼠，只有河中的鼠不能被岸上的棋子吃。
"""

from typing import TYPE_CHECKING

from .board import TerrainType
from .position import Position

if TYPE_CHECKING:
    from .pieces import Piece


def water_blocks_capture(attacker: 'Piece', target: 'Piece', board,
                         from_pos: Position, to_pos: Position) -> bool:
    """河中与岸上之间的吃子被阻断"""
    attacker_in_water = board.get_terrain(from_pos) == TerrainType.WATER
    target_in_water = board.get_terrain(to_pos) == TerrainType.WATER

    if attacker.is_amphibious and attacker_in_water and not target_in_water:
        return True
    if target.is_amphibious and target_in_water and not attacker_in_water:
        return True
    return False


def is_trapped(target: 'Piece', board, to_pos: Position) -> bool:
    """目标是否处在不属于自己一方的陷阱中"""
    if board.get_terrain(to_pos) != TerrainType.TRAP:
        return False
    return board.get_terrain_owner(to_pos) != target.owner


def rank_allows_capture(attacker: 'Piece', target: 'Piece', board, to_pos: Position) -> bool:
    """等级比较以及陷阱、鼠吃象两个放宽特例"""
    from .pieces import APEX, SLAYS_APEX

    if is_trapped(target, board, to_pos):
        return True
    if SLAYS_APEX in attacker.species.capture_tags and APEX in target.species.capture_tags:
        return True
    return attacker.rank >= target.rank


def can_capture(attacker: 'Piece', target: 'Piece', board, from_pos, to_pos) -> bool:
    """
    判断攻击方能否吃掉目标

    Args:
        attacker: 攻击方棋子
        target: 目标棋子
        board: 棋盘（需要地形查询）
        from_pos: 攻击方所在位置
        to_pos: 目标所在位置

    Returns:
        bool: 是否可以吃子
    """
    if attacker.owner == target.owner:
        return False

    from_pos = Position.coerce(from_pos)
    to_pos = Position.coerce(to_pos)
    if water_blocks_capture(attacker, target, board, from_pos, to_pos):
        return False
    return rank_allows_capture(attacker, target, board, to_pos)
