"""
对局会话

会话持有棋盘和玩家，负责行棋顺序、走法执行、悔棋历史和终局判定。
单线程同步设计：在多参与者环境中，调用方需要把同一会话的
request_move / undo / pass_turn 串行化。
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple, Union

from .board import Board, BoardView, TerrainType
from .layout import GameFactory, LayoutGameFactory
from .move import Move
from .pieces import Piece, Player
from .position import Position
from .rule_engine import RuleEngine, create_rule_engine
from ..config.game_config import GameConfig
from ..utils.exceptions import GameStateError, NoPieceError
from ..utils.logger import LoggerMixin, game_event_logger


class GameState(Enum):
    """会话状态"""
    IDLE = "idle"                        # 尚未开始
    AWAITING_MOVE = "awaiting_move"      # 等待当前玩家走子
    VALIDATING = "validating"            # 校验走法中
    EXECUTING = "executing"              # 执行走法中
    GAME_OVER = "game_over"              # 已结束（终态）


@dataclass(frozen=True)
class MoveOutcome:
    """走子结果"""
    accepted: bool
    move: Optional[Move] = None
    captured: Optional[Piece] = None
    game_over: bool = False
    winner: Optional[int] = None
    reason: str = ""                     # 被拒绝时的原因（规则名或错误说明）
    error: Optional[Exception] = None    # 可恢复的错误，如 NoPieceError

    @classmethod
    def rejected(cls, reason: str, move: Optional[Move] = None,
                 error: Optional[Exception] = None) -> 'MoveOutcome':
        return cls(accepted=False, move=move, reason=reason, error=error)


@dataclass(frozen=True)
class TurnRecord:
    """历史记录项：一次走子或一次让步（move 为 None）"""
    player_id: int
    move: Optional[Move] = None

    @property
    def is_pass(self) -> bool:
        return self.move is None


PlayerRef = Union[int, Player]


class GameSession(LoggerMixin):
    """
    对局会话

    持有棋盘、有序玩家列表、当前行棋索引和走法增量历史。
    行棋索引始终指向有效玩家。
    """

    def __init__(self, board: Board, players: List[Player],
                 config: Optional[GameConfig] = None,
                 factory: Optional[GameFactory] = None):
        """
        初始化会话

        Args:
            board: 已放好棋子的棋盘
            players: 按行棋顺序排列的玩家
            config: 对局配置
            factory: 用于 reset 重建对局的工厂
        """
        if not players:
            raise GameStateError("创建会话", "玩家列表为空")

        self._state = GameState.IDLE
        self.config = config or GameConfig()
        self._factory = factory
        self._board = board
        self._players = list(players)
        self._turn_index = 0
        self._history: List[TurnRecord] = []
        self._winner: Optional[int] = None
        self._rule_engine: RuleEngine = create_rule_engine(self.current_player)

        self._state = GameState.AWAITING_MOVE

    # ==================== 状态查询 ====================

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def is_over(self) -> bool:
        return self._state == GameState.GAME_OVER

    @property
    def winner(self) -> Optional[int]:
        return self._winner

    @property
    def players(self) -> Tuple[Player, ...]:
        return tuple(self._players)

    @property
    def turn_index(self) -> int:
        return self._turn_index

    @property
    def rule_engine(self) -> RuleEngine:
        return self._rule_engine

    @property
    def history(self) -> Tuple[TurnRecord, ...]:
        return tuple(self._history)

    @property
    def move_count(self) -> int:
        return len(self._history)

    @property
    def last_move(self) -> Optional[Move]:
        for record in reversed(self._history):
            if record.move is not None:
                return record.move
        return None

    def current_player(self) -> int:
        """当前行棋玩家编号"""
        return self._players[self._turn_index].player_id

    def board(self) -> BoardView:
        """只读棋盘视图，供渲染等外部协作者使用"""
        return BoardView(self._board)

    def get_player(self, player_id: int) -> Player:
        for player in self._players:
            if player.player_id == player_id:
                return player
        raise GameStateError("查找玩家", f"未知玩家编号: {player_id}")

    # ==================== 走子 ====================

    def build_move(self, from_pos, to_pos) -> Move:
        """
        根据起点棋子构造候选走法

        Raises:
            OutOfBoundsError: 坐标越界
            NoPieceError: 起点没有棋子
        """
        from_pos = Position.coerce(from_pos)
        to_pos = Position.coerce(to_pos)
        self._board.get_cell(to_pos)

        piece = self._board.get_occupant(from_pos)
        if piece is None:
            raise NoPieceError(from_pos)
        return Move(from_pos, to_pos, piece)

    def request_move(self, from_pos, to_pos) -> MoveOutcome:
        """
        请求走子

        非法走法是正常的被拒绝结果，不修改棋局也不写入历史。

        Args:
            from_pos: 起始位置
            to_pos: 目标位置

        Returns:
            MoveOutcome: 走子结果

        Raises:
            OutOfBoundsError: 坐标越界（调用方的编程错误）
        """
        if self._state == GameState.GAME_OVER:
            return MoveOutcome.rejected("game_over")

        try:
            move = self.build_move(from_pos, to_pos)
        except NoPieceError as e:
            game_event_logger.rejected(f"{tuple(from_pos)}->{tuple(to_pos)}", "no_piece")
            return MoveOutcome.rejected("no_piece", error=e)

        self._state = GameState.VALIDATING
        failure = self._rule_engine.first_failure(move, self._board)
        if failure is not None:
            self._state = GameState.AWAITING_MOVE
            game_event_logger.rejected(move, failure)
            return MoveOutcome.rejected(failure, move=move)

        self._state = GameState.EXECUTING
        executed = self._execute(move)
        self._history.append(TurnRecord(move.piece.owner, executed))
        self._advance_turn()
        game_event_logger.move(move.piece.owner, executed)

        winner = self._detect_winner(executed)
        if winner is not None:
            self._winner = winner
            self._state = GameState.GAME_OVER
            game_event_logger.game_over(winner, self.move_count)
        else:
            self._state = GameState.AWAITING_MOVE

        return MoveOutcome(
            accepted=True,
            move=executed,
            captured=executed.captured,
            game_over=self._winner is not None,
            winner=self._winner,
        )

    def _execute(self, move: Move) -> Move:
        """执行已校验的走法，返回记录了吃子信息的走法"""
        board = self._board
        target = board.get_occupant(move.to_pos)

        if target is not None:
            owner = self.get_player(target.owner)
            captured_index = owner.remove_piece(target)
            board.remove_occupant(move.to_pos)
            target.position = None
            move = move.with_capture(target, captured_index)
            game_event_logger.capture(move.piece, target, move.to_pos)

        board.remove_occupant(move.from_pos)
        board.place_piece(move.piece, move.to_pos)
        return move

    def _detect_winner(self, move: Move) -> Optional[int]:
        """进入对方兽穴，或对手没有剩余棋子时，走子方获胜"""
        mover = move.piece.owner
        if (self._board.get_terrain(move.to_pos) == TerrainType.DEN and
                self._board.get_terrain_owner(move.to_pos) != mover):
            return mover

        if all(not player.has_pieces for player in self._players if player.player_id != mover):
            return mover
        return None

    def _advance_turn(self):
        self._turn_index = (self._turn_index + 1) % len(self._players)

    def pass_turn(self) -> bool:
        """
        让步：不走子直接轮到下一位玩家

        不经过规则引擎，但会写入历史，悔棋时同样回退行棋方。

        Returns:
            bool: 对局已结束时返回False
        """
        if self._state == GameState.GAME_OVER:
            return False
        game_event_logger.passed(self.current_player())
        self._history.append(TurnRecord(self.current_player()))
        self._advance_turn()
        return True

    # ==================== 悔棋 ====================

    def undo(self) -> bool:
        """
        撤销最近一步

        还原走子棋子和被吃棋子（按原索引放回玩家列表），回退行棋方，
        并清除被撤销走法造成的胜负。

        Returns:
            bool: 历史为空或不允许悔棋时返回False
        """
        if not self.config.allow_undo or not self._history:
            return False

        record = self._history.pop()
        move = record.move
        if move is not None:
            board = self._board
            board.remove_occupant(move.to_pos)
            board.place_piece(move.piece, move.from_pos)
            if move.captured is not None:
                self.get_player(move.captured.owner).restore_piece(move.captured, move.captured_index)
                board.place_piece(move.captured, move.to_pos)

        self._turn_index = (self._turn_index - 1) % len(self._players)
        self._winner = None
        self._state = GameState.AWAITING_MOVE
        game_event_logger.undone(move)
        return True

    undo_last_move = undo

    # ==================== 走法提示 ====================

    def get_legal_moves(self, player: Optional[PlayerRef] = None) -> List[Move]:
        """
        列出指定玩家的正交一步合法走法

        跳河走法不在列举范围内，结果只用于界面提示。

        Args:
            player: 玩家或玩家编号，None表示当前玩家

        Returns:
            List[Move]: 规则引擎接受的候选走法，对局结束后为空
        """
        if self.is_over:
            return []
        if player is None:
            player = self.current_player()
        owner = player if isinstance(player, Player) else self.get_player(player)

        legal_moves = []
        for piece in owner.pieces:
            if piece.position is None:
                continue
            for target in piece.position.neighbors():
                if not self._board.in_bounds(target):
                    continue
                move = Move(piece.position, target, piece)
                if self._rule_engine.validate(move, self._board):
                    legal_moves.append(move)
        return legal_moves

    # ==================== 重置 ====================

    def reset(self):
        """
        用工厂重新创建棋盘和玩家，回到初始状态

        Raises:
            GameStateError: 会话没有关联工厂
        """
        if self._factory is None:
            raise GameStateError("重置会话", "会话没有关联工厂")

        self._board, players = self._factory.build()
        self._players = list(players)
        self._turn_index = 0
        self._history.clear()
        self._winner = None
        self._state = GameState.AWAITING_MOVE
        self.log_info("会话已重置")

    def __repr__(self) -> str:
        return (f"GameSession(state={self._state.value}, current_player={self.current_player()}, "
                f"moves={len(self._history)}, winner={self._winner})")


def create_session(factory: Optional[GameFactory] = None,
                   config: Optional[GameConfig] = None) -> GameSession:
    """
    创建会话

    Args:
        factory: 提供初始布局的工厂，None表示标准布局
        config: 对局配置

    Returns:
        GameSession: 新的会话
    """
    factory = factory or LayoutGameFactory()
    board, players = factory.build()
    return GameSession(board, players, config=config, factory=factory)
