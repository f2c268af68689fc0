"""
测试RuleEngine类的功能

测试组合规则的顺序、短路求值和拒绝原因。
"""

from jungle_chess_project.src.jungle_engine.config.game_config import (
    PieceSetup, standard_layout
)
from jungle_chess_project.src.jungle_engine.rules_engine import (
    CompositeRule, DenRule, GameRule, LayoutGameFactory, Move, TrapRule,
    WaterMovementRule, create_rule_engine, get_species, Piece
)


def build_board(player1_pieces, player2_pieces, water=None):
    """
    按标准地形构建棋盘，替换双方初始棋子

    格子只弱引用棋子，调用方必须持有返回的玩家列表。
    """
    layout = standard_layout()
    layout.players[0].pieces = [PieceSetup(name, x, y) for name, x, y in player1_pieces]
    layout.players[1].pieces = [PieceSetup(name, x, y) for name, x, y in player2_pieces]
    if water:
        layout.water.extend([list(cell) for cell in water])
    return LayoutGameFactory(layout).build()


class CountingRule(GameRule):
    """记录被调用次数的规则"""

    def __init__(self, name, result):
        self.name = name
        self.result = result
        self.calls = 0

    def validate(self, move, board):
        self.calls += 1
        return self.result


class TestCompositeRule:
    """组合规则测试"""

    def setup_method(self):
        self.board, self.players = build_board([('dog', 0, 0)], [('dog', 6, 8)])
        self.move = Move((0, 0), (0, 1), self.board.get_occupant((0, 0)))

    def test_all_pass(self):
        """测试全部通过"""
        composite = CompositeRule("all", [CountingRule("a", True), CountingRule("b", True)])
        assert composite.validate(self.move, self.board)
        assert composite.first_failure(self.move, self.board) is None

    def test_short_circuit(self):
        """测试遇到第一条失败即停止"""
        first = CountingRule("first", True)
        failing = CountingRule("failing", False)
        never = CountingRule("never", True)
        composite = CompositeRule("chain", [first, failing, never])

        assert not composite.validate(self.move, self.board)
        assert composite.first_failure(self.move, self.board) == "failing"
        assert never.calls == 0

    def test_nested_failure_reports_leaf(self):
        """测试嵌套组合报告最内层的规则名"""
        inner = CompositeRule("inner", [CountingRule("leaf", False)])
        outer = CompositeRule("outer").add_rule(CountingRule("ok", True)).add_rule(inner)
        assert outer.first_failure(self.move, self.board) == "leaf"

    def test_add_and_remove(self):
        """测试添加和移除规则"""
        failing = CountingRule("failing", False)
        composite = CompositeRule("chain")
        assert composite.validate(self.move, self.board)

        composite.add_rule(failing)
        assert not composite.validate(self.move, self.board)

        composite.remove_rule(failing)
        assert composite.validate(self.move, self.board)


class TestRuleEngine:
    """规则引擎测试"""

    def setup_method(self):
        self.current = 1
        self.engine = create_rule_engine(lambda: self.current)

    def test_rule_order(self):
        """测试规则求值顺序"""
        assert self.engine.rule_names == [
            'turn_ownership', 'movement', 'capture', 'water_movement', 'trap', 'den']
        capture = self.engine.root.rules[2]
        assert [rule.name for rule in capture.rules] == ['rank_capture', 'special_capture']

    def test_turn_ownership(self):
        """测试只能走当前行棋方的棋子"""
        board, self.players = build_board([('dog', 0, 0)], [('dog', 6, 8)])
        move = Move((6, 8), (6, 7), board.get_occupant((6, 8)))
        assert self.engine.first_failure(move, board) == 'turn_ownership'

        self.current = 2
        assert self.engine.is_legal_move(move, board)

    def test_turn_checked_before_movement(self):
        """测试行棋方规则先于移动规则"""
        board, self.players = build_board([('dog', 0, 0)], [('dog', 6, 8)])
        move = Move((6, 8), (4, 4), board.get_occupant((6, 8)))
        assert self.engine.first_failure(move, board) == 'turn_ownership'

    def test_rank_capture_rejected(self):
        """测试等级不足被 rank_capture 拒绝"""
        board, self.players = build_board([('cat', 3, 3)], [('dog', 3, 4)])
        move = Move((3, 3), (3, 4), board.get_occupant((3, 3)))
        assert self.engine.first_failure(move, board) == 'rank_capture'

    def test_capture_own_piece_rejected(self):
        """测试吃己方棋子被拒绝"""
        board, self.players = build_board([('lion', 3, 3), ('cat', 3, 4)], [('dog', 6, 8)])
        move = Move((3, 3), (3, 4), board.get_occupant((3, 3)))
        assert self.engine.first_failure(move, board) == 'rank_capture'

    def test_rat_in_water_cannot_capture_land_elephant(self):
        """测试河中的鼠吃岸上的象被 special_capture 拒绝"""
        board, self.players = build_board([('rat', 1, 3)], [('elephant', 0, 3)])
        move = Move((1, 3), (0, 3), board.get_occupant((1, 3)))
        assert self.engine.first_failure(move, board) == 'special_capture'

    def test_land_elephant_cannot_reach_rat_in_water(self):
        """测试象不能下河吃鼠"""
        board, self.players = build_board([('elephant', 0, 3)], [('rat', 1, 3)])
        move = Move((0, 3), (1, 3), board.get_occupant((0, 3)))
        assert self.engine.first_failure(move, board) == 'movement'

    def test_leap_accepted_and_blocked(self):
        """测试跳河被接受，河中有鼠时被拒绝"""
        board, self.players = build_board([('lion', 1, 2)], [('dog', 6, 8)])
        move = Move((1, 2), (1, 6), board.get_occupant((1, 2)))
        assert self.engine.is_legal_move(move, board)

        board, self.players = build_board([('lion', 1, 2)], [('rat', 1, 4)])
        move = Move((1, 2), (1, 6), board.get_occupant((1, 2)))
        assert self.engine.first_failure(move, board) == 'movement'

    def test_leap_capture(self):
        """测试跳河落点可以吃子"""
        board, self.players = build_board([('tiger', 0, 4)], [('wolf', 3, 4)])
        move = Move((0, 4), (3, 4), board.get_occupant((0, 4)))
        assert self.engine.is_legal_move(move, board)

    def test_own_den_rejected(self):
        """测试不能进入己方兽穴"""
        board, self.players = build_board([('elephant', 3, 1)], [('dog', 6, 8)])
        move = Move((3, 1), (3, 0), board.get_occupant((3, 1)))
        assert self.engine.first_failure(move, board) == 'movement'

    def test_opponent_den_accepted(self):
        """测试可以进入对方兽穴"""
        board, self.players = build_board([('cat', 3, 7)], [('dog', 6, 8)])
        move = Move((3, 7), (3, 8), board.get_occupant((3, 7)))
        assert self.engine.is_legal_move(move, board)

    def test_off_board_destination_rejected(self):
        """测试落点在棋盘外时被 movement 拒绝而不是抛出异常"""
        board, self.players = build_board([('lion', 0, 0)], [('dog', 6, 8)])
        lion = board.get_occupant((0, 0))
        for target in ((-1, 0), (0, -1)):
            move = Move((0, 0), target, lion)
            assert not self.engine.validate(move, board)
            assert self.engine.first_failure(move, board) == 'movement'

    def test_validate_has_no_side_effects(self):
        """测试校验不修改棋盘"""
        board, self.players = build_board([('lion', 3, 3)], [('dog', 3, 4)])
        before = board.snapshot()
        move = Move((3, 3), (3, 4), board.get_occupant((3, 3)))
        assert self.engine.validate(move, board)
        assert board.snapshot() == before


class TestTerrainRules:
    """地形规则单独测试"""

    def setup_method(self):
        self.board, self.players = build_board([('dog', 3, 1)], [('dog', 3, 7)])

    def test_water_movement_rule(self):
        """测试非两栖棋子不能停在河里"""
        dog = Piece(get_species('dog'), owner=1)
        rat = Piece(get_species('rat'), owner=1)
        assert not WaterMovementRule().validate(Move((1, 2), (1, 3), dog), self.board)
        assert WaterMovementRule().validate(Move((1, 2), (1, 3), rat), self.board)
        assert WaterMovementRule().validate(Move((0, 2), (0, 3), dog), self.board)

    def test_trap_rule_never_restricts(self):
        """测试陷阱不限制进入"""
        dog = self.board.get_occupant((3, 7))
        assert TrapRule().validate(Move((3, 7), (3, 8), dog), self.board)
        assert TrapRule().validate(Move((3, 7), (2, 7), dog), self.board)

    def test_den_rule(self):
        """测试兽穴规则独立于移动链生效"""
        own = self.board.get_occupant((3, 1))
        assert not DenRule().validate(Move((3, 1), (3, 0), own), self.board)
        assert DenRule().validate(Move((3, 1), (2, 1), own), self.board)

        opponent = self.board.get_occupant((3, 7))
        assert not DenRule().validate(Move((3, 7), (3, 8), opponent), self.board)
        assert DenRule().validate(Move((3, 1), (3, 0), opponent), self.board)
