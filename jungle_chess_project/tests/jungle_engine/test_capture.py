"""
测试吃子规则
"""

from jungle_chess_project.src.jungle_engine.rules_engine import (
    Board, Piece, TerrainType, can_capture, get_species
)
from jungle_chess_project.src.jungle_engine.rules_engine.capture import (
    is_trapped, water_blocks_capture
)


def make_board() -> Board:
    board = Board(7, 9)
    for y in (3, 4, 5):
        for x in (1, 2, 4, 5):
            board.set_terrain((x, y), TerrainType.WATER)
    for x, y in ((2, 0), (4, 0), (3, 1)):
        board.set_terrain((x, y), TerrainType.TRAP, owner=1)
    for x, y in ((2, 8), (4, 8), (3, 7)):
        board.set_terrain((x, y), TerrainType.TRAP, owner=2)
    return board


def place(board: Board, name: str, owner: int, pos) -> Piece:
    piece = Piece(get_species(name), owner)
    board.place_piece(piece, pos)
    return piece


class TestRankCapture:
    """等级比较测试"""

    def setup_method(self):
        self.board = make_board()

    def test_higher_or_equal_rank(self):
        """测试等级不低于目标即可吃子"""
        lion = place(self.board, 'lion', 1, (3, 3))
        dog = place(self.board, 'dog', 2, (3, 4))
        other_lion = place(self.board, 'lion', 2, (6, 6))

        assert lion.can_capture(dog, self.board)
        assert not dog.can_capture(lion, self.board)
        assert lion.can_capture(other_lion, self.board)

    def test_cannot_capture_own_piece(self):
        """测试不能吃己方棋子"""
        lion = place(self.board, 'lion', 1, (3, 3))
        cat = place(self.board, 'cat', 1, (3, 4))
        assert not lion.can_capture(cat, self.board)

    def test_rat_captures_elephant(self):
        """测试鼠吃象"""
        rat = place(self.board, 'rat', 1, (3, 3))
        elephant = place(self.board, 'elephant', 2, (3, 4))
        assert rat.can_capture(elephant, self.board)

    def test_elephant_captures_rat_on_land(self):
        """测试岸上的象按等级可以吃岸上的鼠"""
        elephant = place(self.board, 'elephant', 1, (3, 3))
        rat = place(self.board, 'rat', 2, (3, 4))
        assert elephant.can_capture(rat, self.board)

    def test_rat_cannot_capture_other_pieces(self):
        """测试鼠吃象的特例只针对象"""
        rat = place(self.board, 'rat', 1, (3, 3))
        cat = place(self.board, 'cat', 2, (3, 4))
        assert not rat.can_capture(cat, self.board)


class TestTrapCapture:
    """陷阱测试"""

    def setup_method(self):
        self.board = make_board()

    def test_trapped_in_opponent_trap(self):
        """测试落入对方陷阱的棋子可被任意等级吃掉"""
        lion = place(self.board, 'lion', 2, (2, 0))
        cat = place(self.board, 'cat', 1, (1, 0))

        assert is_trapped(lion, self.board, (2, 0))
        assert cat.can_capture(lion, self.board)

    def test_own_trap_does_not_weaken(self):
        """测试己方陷阱不削弱自己"""
        lion = place(self.board, 'lion', 2, (2, 8))
        cat = place(self.board, 'cat', 1, (1, 8))

        assert not is_trapped(lion, self.board, (2, 8))
        assert not cat.can_capture(lion, self.board)


class TestWaterCapture:
    """河中与岸上吃子测试"""

    def setup_method(self):
        self.board = make_board()

    def test_rat_in_water_cannot_capture_elephant_on_land(self):
        """测试河中的鼠不能吃岸上的象"""
        rat = place(self.board, 'rat', 1, (1, 3))
        elephant = place(self.board, 'elephant', 2, (0, 3))

        assert water_blocks_capture(rat, elephant, self.board, (1, 3), (0, 3))
        assert not rat.can_capture(elephant, self.board)

    def test_land_piece_cannot_capture_rat_in_water(self):
        """测试岸上的棋子不能吃河中的鼠"""
        elephant = place(self.board, 'elephant', 1, (0, 3))
        rat = place(self.board, 'rat', 2, (1, 3))
        assert not elephant.can_capture(rat, self.board)

    def test_rats_in_water(self):
        """测试河中的鼠可以互吃"""
        rat = place(self.board, 'rat', 1, (1, 3))
        other_rat = place(self.board, 'rat', 2, (1, 4))
        assert rat.can_capture(other_rat, self.board)
        assert other_rat.can_capture(rat, self.board)

    def test_rat_from_water_cannot_capture_rat_on_land(self):
        """测试河中的鼠不能吃岸上的鼠"""
        rat = place(self.board, 'rat', 1, (1, 3))
        other_rat = place(self.board, 'rat', 2, (0, 3))
        assert not can_capture(rat, other_rat, self.board, (1, 3), (0, 3))
