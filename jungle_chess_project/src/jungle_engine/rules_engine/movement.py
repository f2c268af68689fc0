"""
移动能力链

每种动物的移动规则是一条有序的谓词链。谓词依次求值，每个谓词可以
放行、拒绝或交给下一个谓词；第一个给出明确结论的谓词决定结果，
全部弃权则拒绝。这是“先到先得”的或链，与规则引擎的与组合不同。
"""

from enum import Enum
from functools import lru_cache
from typing import Dict, Optional, Tuple, TYPE_CHECKING

from .board import TerrainType
from .position import Position
from ..utils.exceptions import ConfigError, InvalidBoardTypeError

if TYPE_CHECKING:
    from .pieces import Piece


class Verdict(Enum):
    """谓词结论"""
    ALLOW = "allow"    # 放行，链终止
    DENY = "deny"      # 拒绝，链终止
    PASS = "pass"      # 弃权，交给下一个谓词


class MovementPredicate:
    """移动谓词基类"""

    name = "movement"
    # 谓词需要的棋盘查询方法
    required_queries: Tuple[str, ...] = ()

    def check(self, piece: 'Piece', board, from_pos: Position, to_pos: Position) -> Verdict:
        raise NotImplementedError

    def __call__(self, piece: 'Piece', board, from_pos: Position, to_pos: Position) -> Verdict:
        for query in self.required_queries:
            if not callable(getattr(board, query, None)):
                raise InvalidBoardTypeError(self.name, type(board).__name__, query)
        return self.check(piece, board, from_pos, to_pos)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class AdjacencyRange(MovementPredicate):
    """正交走一步；链的最后一环，不会弃权"""

    name = "adjacency_range"
    required_queries = ('in_bounds',)

    def check(self, piece, board, from_pos, to_pos):
        if board.in_bounds(to_pos) and from_pos.manhattan(to_pos) == 1:
            return Verdict.ALLOW
        return Verdict.DENY


class TerritoryRestriction(MovementPredicate):
    """禁止进入己方兽穴，兽穴归属取自配置的地形所属玩家"""

    name = "territory_restriction"
    required_queries = ('get_terrain', 'get_terrain_owner')

    def check(self, piece, board, from_pos, to_pos):
        if board.get_terrain(to_pos) == TerrainType.DEN and board.get_terrain_owner(to_pos) == piece.owner:
            return Verdict.DENY
        return Verdict.PASS


class WaterBlock(MovementPredicate):
    """非两栖物种不能下河"""

    name = "water_block"
    required_queries = ('get_terrain',)

    def check(self, piece, board, from_pos, to_pos):
        if board.get_terrain(to_pos) == TerrainType.WATER and not piece.is_amphibious:
            return Verdict.DENY
        return Verdict.PASS


class LeapOverWater(MovementPredicate):
    """沿直线跳过一段连续且无鼠阻挡的河流，落点不能是河流"""

    name = "leap_over_water"
    required_queries = ('has_leap_path',)

    def check(self, piece, board, from_pos, to_pos):
        if board.has_leap_path(from_pos, to_pos):
            return Verdict.ALLOW
        return Verdict.PASS


PREDICATES: Dict[str, MovementPredicate] = {
    'territory': TerritoryRestriction(),
    'water_block': WaterBlock(),
    'leap': LeapOverWater(),
    'adjacent': AdjacencyRange(),
}


class MovementChain:
    """
    移动谓词链

    按顺序求值，第一个非弃权结论即为结果。
    """

    def __init__(self, predicates: Tuple[MovementPredicate, ...]):
        self.predicates = predicates

    def evaluate(self, piece: 'Piece', board, from_pos, to_pos) -> Tuple[Verdict, Optional[str]]:
        """
        求值整条链

        Returns:
            Tuple[Verdict, Optional[str]]: (结论, 给出结论的谓词名)
        """
        from_pos = Position.coerce(from_pos)
        to_pos = Position.coerce(to_pos)
        # 棋盘外的起点或落点直接拒绝，不再查询地形
        in_bounds = getattr(board, 'in_bounds', None)
        if callable(in_bounds) and not (in_bounds(from_pos) and in_bounds(to_pos)):
            return Verdict.DENY, AdjacencyRange.name
        for predicate in self.predicates:
            verdict = predicate(piece, board, from_pos, to_pos)
            if verdict is not Verdict.PASS:
                return verdict, predicate.name
        return Verdict.DENY, None

    def allows(self, piece: 'Piece', board, from_pos, to_pos) -> bool:
        verdict, _ = self.evaluate(piece, board, from_pos, to_pos)
        return verdict is Verdict.ALLOW

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(predicate.name for predicate in self.predicates)

    def __repr__(self) -> str:
        return f"MovementChain({' -> '.join(self.names)})"


@lru_cache(maxsize=None)
def build_movement_chain(tags: Tuple[str, ...]) -> MovementChain:
    """
    根据标签构造移动链

    Args:
        tags: 谓词标签序列，如 ('territory', 'water_block', 'adjacent')

    Raises:
        ConfigError: 未知标签，或链不以 adjacent 结尾
    """
    unknown = [tag for tag in tags if tag not in PREDICATES]
    if unknown:
        raise ConfigError("movement", f"未知的移动能力: {unknown}")
    if not tags or tags[-1] != 'adjacent' or 'adjacent' in tags[:-1]:
        raise ConfigError("movement", f"移动链必须以 adjacent 结尾: {tags}")
    return MovementChain(tuple(PREDICATES[tag] for tag in tags))
