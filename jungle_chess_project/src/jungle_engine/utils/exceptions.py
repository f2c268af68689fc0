"""
异常定义

定义斗兽棋规则引擎的各种异常类型。

非法走法不是异常：玩家经常尝试非法走法，规则引擎只返回布尔结果，
会话以 MoveOutcome 的形式拒绝。这里只定义配置错误和结构性误用。
"""


class JungleError(Exception):
    """
    斗兽棋引擎基础异常

    所有斗兽棋相关异常的基类。
    """

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__

    def __str__(self):
        return f"[{self.error_code}] {self.message}"


class ConfigError(JungleError):
    """
    配置错误异常

    棋盘尺寸无效或初始布局格式错误时抛出，在会话创建阶段是致命的。
    """

    def __init__(self, config_name: str, reason: str = ""):
        message = f"配置错误 - {config_name}"
        if reason:
            message += f": {reason}"
        super().__init__(message, "CONFIG_ERROR")
        self.config_name = config_name
        self.reason = reason


class OutOfBoundsError(JungleError):
    """
    越界异常

    访问棋盘范围之外的位置时抛出。属于调用方的编程错误，不应被吞掉。
    """

    def __init__(self, position, width: int, height: int):
        message = f"位置越界: {tuple(position)}, 棋盘大小 {width}x{height}"
        super().__init__(message, "OUT_OF_BOUNDS")
        self.position = position
        self.width = width
        self.height = height


class OccupiedError(JungleError):
    """
    格子已被占用异常

    布局阶段把棋子放到已有其他棋子的格子上时抛出。
    """

    def __init__(self, position, occupant=None):
        message = f"格子已被占用: {tuple(position)}"
        if occupant is not None:
            message += f" - {occupant}"
        super().__init__(message, "OCCUPIED")
        self.position = position
        self.occupant = occupant


class NoPieceError(JungleError):
    """
    起点无棋子异常

    从空格子请求走子时抛出，会话会把它转换为被拒绝的走法结果。
    """

    def __init__(self, position):
        message = f"起始位置没有棋子: {tuple(position)}"
        super().__init__(message, "NO_PIECE")
        self.position = position


class InvalidBoardTypeError(JungleError):
    """
    棋盘类型错误异常

    移动能力作用在缺少所需地形查询的棋盘对象上时抛出，属于组合错误。
    """

    def __init__(self, capability: str, board_type: str, missing: str = ""):
        message = f"棋盘类型无效: {capability} 不支持 {board_type}"
        if missing:
            message += f" (缺少 {missing})"
        super().__init__(message, "INVALID_BOARD_TYPE")
        self.capability = capability
        self.board_type = board_type
        self.missing = missing


class GameStateError(JungleError):
    """
    游戏状态异常

    当游戏状态无效或不一致时抛出。
    """

    def __init__(self, state_description: str, reason: str = ""):
        message = f"游戏状态错误: {state_description}"
        if reason:
            message += f" - {reason}"
        super().__init__(message, "GAME_STATE_ERROR")
        self.state_description = state_description
        self.reason = reason
