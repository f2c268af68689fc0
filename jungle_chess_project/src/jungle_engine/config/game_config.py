"""
游戏配置数据结构

定义棋盘布局（地形、兽穴、陷阱、初始棋子）和对局配置，以及标准默认布局。
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from ..utils.exceptions import ConfigError


@dataclass
class PieceSetup:
    """初始棋子"""
    species: str                        # 物种名称
    x: int                              # 列
    y: int                              # 行


@dataclass
class PlayerSetup:
    """玩家布局"""
    player_id: int                      # 玩家编号
    name: str = ""                      # 显示名称
    den: List[int] = field(default_factory=list)             # 兽穴坐标 [x, y]
    traps: List[List[int]] = field(default_factory=list)     # 陷阱坐标列表
    pieces: List[PieceSetup] = field(default_factory=list)   # 初始棋子


@dataclass
class BoardLayoutConfig:
    """棋盘布局配置"""
    width: int = 7                      # 列数
    height: int = 9                     # 行数
    water: List[List[int]] = field(default_factory=list)     # 河流坐标列表
    players: List[PlayerSetup] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BoardLayoutConfig':
        """
        从字典（通常来自YAML）创建布局

        Raises:
            ConfigError: 数据结构不完整或类型错误
        """
        if not isinstance(data, dict):
            raise ConfigError("layout", f"布局必须是映射类型, 实际为 {type(data).__name__}")
        try:
            players = [
                PlayerSetup(
                    player_id=int(player['player_id']),
                    name=str(player.get('name', '')),
                    den=[int(v) for v in player.get('den', [])],
                    traps=[[int(v) for v in trap] for trap in player.get('traps', [])],
                    pieces=[
                        PieceSetup(species=str(piece['species']), x=int(piece['x']), y=int(piece['y']))
                        for piece in player.get('pieces', [])
                    ],
                )
                for player in data.get('players', [])
            ]
            return cls(
                width=int(data.get('width', 7)),
                height=int(data.get('height', 9)),
                water=[[int(v) for v in cell] for cell in data.get('water', [])],
                players=players,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigError("layout", f"布局格式错误: {e}") from e

    def validate(self, species_names: Optional[Iterable[str]] = None):
        """
        验证布局

        Args:
            species_names: 已知物种名称，None表示不检查物种

        Raises:
            ConfigError: 尺寸无效、坐标越界、玩家不足或物种未知
        """
        if self.width <= 0 or self.height <= 0:
            raise ConfigError("layout", f"棋盘尺寸必须为正数: {self.width}x{self.height}")

        def check_coord(coord, what: str):
            if len(coord) != 2:
                raise ConfigError("layout", f"{what}坐标格式错误: {coord}")
            x, y = coord
            if not (0 <= x < self.width and 0 <= y < self.height):
                raise ConfigError("layout", f"{what}坐标越界: {coord}")

        for cell in self.water:
            check_coord(cell, "河流")

        if len(self.players) < 2:
            raise ConfigError("layout", f"至少需要两名玩家, 实际 {len(self.players)}")

        ids = [player.player_id for player in self.players]
        if len(set(ids)) != len(ids):
            raise ConfigError("layout", f"玩家编号重复: {ids}")

        known = {name.lower() for name in species_names} if species_names is not None else None
        for player in self.players:
            if not player.den:
                raise ConfigError("layout", f"玩家 {player.player_id} 缺少兽穴")
            check_coord(player.den, "兽穴")
            for trap in player.traps:
                check_coord(trap, "陷阱")
            for piece in player.pieces:
                check_coord([piece.x, piece.y], "棋子")
                if known is not None and piece.species.lower() not in known:
                    raise ConfigError("layout", f"未知物种: {piece.species}")


@dataclass
class GameConfig:
    """对局配置"""
    allow_undo: bool = True             # 是否允许悔棋
    log_level: str = 'INFO'             # 日志级别
    layout_file: str = ''               # 自定义布局文件，空表示使用标准布局


def _standard_pieces(mirror: bool) -> List[PieceSetup]:
    """标准初始布局，mirror=True 时为上方玩家（中心对称）"""
    base = [
        ('lion', 0, 0), ('tiger', 6, 0),
        ('dog', 1, 1), ('cat', 5, 1),
        ('rat', 0, 2), ('leopard', 2, 2), ('wolf', 4, 2), ('elephant', 6, 2),
    ]
    if mirror:
        return [PieceSetup(name, 6 - x, 8 - y) for name, x, y in base]
    return [PieceSetup(name, x, y) for name, x, y in base]


def standard_layout() -> BoardLayoutConfig:
    """
    标准 7x9 斗兽棋布局

    河流位于 x∈{1,2,4,5}, y∈{3,4,5}；玩家1的兽穴在 (3,0)，玩家2的兽穴在 (3,8)，
    每个兽穴三面各有一个陷阱。
    """
    return BoardLayoutConfig(
        width=7,
        height=9,
        water=[[x, y] for y in (3, 4, 5) for x in (1, 2, 4, 5)],
        players=[
            PlayerSetup(
                player_id=1,
                name="Player 1",
                den=[3, 0],
                traps=[[2, 0], [4, 0], [3, 1]],
                pieces=_standard_pieces(mirror=False),
            ),
            PlayerSetup(
                player_id=2,
                name="Player 2",
                den=[3, 8],
                traps=[[2, 8], [4, 8], [3, 7]],
                pieces=_standard_pieces(mirror=True),
            ),
        ],
    )


# 默认配置实例
DEFAULT_LAYOUT = standard_layout()
DEFAULT_GAME_CONFIG = GameConfig()
