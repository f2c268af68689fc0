"""
斗兽棋规则引擎

组合式校验器：每条规则实现 validate(move, board) -> bool，
组合规则要求所有子规则通过（逻辑与），遇到第一条失败即短路。
校验只返回布尔值，非法走法不抛出异常。
"""

from typing import Callable, List, Optional

from .board import TerrainType
from .capture import rank_allows_capture, water_blocks_capture
from .move import Move
from ..utils.logger import LoggerMixin


class GameRule:
    """规则基类"""

    name = "rule"

    def validate(self, move: Move, board) -> bool:
        raise NotImplementedError

    def first_failure(self, move: Move, board) -> Optional[str]:
        """
        返回第一条拒绝该走法的规则名

        Returns:
            Optional[str]: 规则名，走法合法时返回None
        """
        return None if self.validate(move, board) else self.name

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class CompositeRule(GameRule):
    """
    组合规则

    按添加顺序求值子规则，全部通过才算通过。
    """

    name = "composite"

    def __init__(self, name: str = "composite", rules: Optional[List[GameRule]] = None):
        self.name = name
        self.rules: List[GameRule] = list(rules or [])

    def add_rule(self, rule: GameRule) -> 'CompositeRule':
        self.rules.append(rule)
        return self

    def remove_rule(self, rule: GameRule):
        self.rules.remove(rule)

    def validate(self, move: Move, board) -> bool:
        return all(rule.validate(move, board) for rule in self.rules)

    def first_failure(self, move: Move, board) -> Optional[str]:
        for rule in self.rules:
            failure = rule.first_failure(move, board)
            if failure is not None:
                return failure
        return None

    def __repr__(self) -> str:
        return f"CompositeRule({self.name}, {self.rules!r})"


class TurnOwnershipRule(GameRule):
    """走子的棋子必须属于当前行棋方"""

    name = "turn_ownership"

    def __init__(self, turn_provider: Callable[[], int]):
        """
        Args:
            turn_provider: 返回当前行棋玩家编号的回调，由会话注入
        """
        self.turn_provider = turn_provider

    def validate(self, move, board):
        return move.piece.owner == self.turn_provider()


class AdjacentOrLeapMovementRule(GameRule):
    """委托给棋子的移动能力链（正交一步或狮虎跳河）"""

    name = "movement"

    def validate(self, move, board):
        return move.piece.can_move(board, move.from_pos, move.to_pos)


class RankBasedCaptureRule(GameRule):
    """目标格有棋子时：不能吃己方，按等级（含陷阱、鼠吃象特例）判断"""

    name = "rank_capture"

    def validate(self, move, board):
        defender = board.get_occupant(move.to_pos)
        if defender is None:
            return True

        attacker = move.piece
        if attacker.owner == defender.owner:
            return False

        return rank_allows_capture(attacker, defender, board, move.to_pos)


class SpecialCaptureRule(GameRule):
    """河中与岸上之间不能互吃"""

    name = "special_capture"

    def validate(self, move, board):
        defender = board.get_occupant(move.to_pos)
        if defender is None:
            return True

        return not water_blocks_capture(move.piece, defender, board, move.from_pos, move.to_pos)


class WaterMovementRule(GameRule):
    """非两栖棋子不能停在河里"""

    name = "water_movement"

    def validate(self, move, board):
        if board.get_terrain(move.to_pos) == TerrainType.WATER:
            return move.piece.is_amphibious
        return True


class TrapRule(GameRule):
    """陷阱对移动没有限制，陷阱削弱在吃子规则中处理"""

    name = "trap"

    def validate(self, move, board):
        return True


class DenRule(GameRule):
    """不能进入己方兽穴；进入对方兽穴合法且直接获胜"""

    name = "den"

    def validate(self, move, board):
        if board.get_terrain(move.to_pos) != TerrainType.DEN:
            return True
        return board.get_terrain_owner(move.to_pos) != move.piece.owner


class RuleEngine(LoggerMixin):
    """
    规则引擎

    持有顶层组合规则，负责校验走法并给出拒绝原因。
    """

    def __init__(self, root: CompositeRule):
        self.root = root

    def validate(self, move: Move, board) -> bool:
        return self.root.validate(move, board)

    def first_failure(self, move: Move, board) -> Optional[str]:
        failure = self.root.first_failure(move, board)
        if failure is not None:
            self.log_debug(f"走法 {move} 被规则拒绝: {failure}")
        return failure

    def is_legal_move(self, move: Move, board) -> bool:
        return self.first_failure(move, board) is None

    @property
    def rule_names(self) -> List[str]:
        return [rule.name for rule in self.root.rules]


def create_capture_rules() -> CompositeRule:
    """吃子组合规则：等级规则 与 特例规则"""
    return CompositeRule("capture", [
        RankBasedCaptureRule(),
        SpecialCaptureRule(),
    ])


def create_rule_engine(turn_provider: Callable[[], int]) -> RuleEngine:
    """
    构造顶层规则引擎

    求值顺序：行棋方 -> 移动 -> 吃子 -> 河流 -> 陷阱 -> 兽穴

    Args:
        turn_provider: 返回当前行棋玩家编号的回调
    """
    root = CompositeRule("engine", [
        TurnOwnershipRule(turn_provider),
        AdjacentOrLeapMovementRule(),
        create_capture_rules(),
        WaterMovementRule(),
        TrapRule(),
        DenRule(),
    ])
    return RuleEngine(root)
