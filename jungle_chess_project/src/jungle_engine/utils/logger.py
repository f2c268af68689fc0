"""
日志系统

所有记录器都挂在 'jungle' 之下：类通过 LoggerMixin 获得 jungle.<类名>，
对局事件统一由 GameEventLogger 写入 jungle.game。
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional, Union

ROOT_LOGGER_NAME = 'jungle'

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _parse_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.INFO)


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: Union[str, int] = 'INFO',
    log_file: Optional[str] = None,
    log_dir: str = 'logs/jungle_engine',
    max_size: int = 5,  # MB
    backup_count: int = 3,
    console_output: bool = True
) -> logging.Logger:
    """
    配置日志记录器

    重复调用会替换已有的处理器，命令行每次启动都按新的级别重新配置。

    Args:
        name: 日志记录器名称
        level: 日志级别，名称或数值
        log_file: 日志文件名，None表示不写文件
        log_dir: 日志目录
        max_size: 单个日志文件最大大小(MB)
        backup_count: 轮转保留的文件数量
        console_output: 是否输出到控制台

    Returns:
        logging.Logger: 配置好的日志记录器
    """
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    log_level = _parse_level(level)
    logger.setLevel(log_level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_path / log_file,
            maxBytes=max_size * 1024 * 1024,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """获取 jungle 命名空间下的记录器，名称不带前缀时自动补上"""
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + '.'):
        name = f'{ROOT_LOGGER_NAME}.{name}'
    return logging.getLogger(name)


def set_level(level: Union[str, int], name: str = ROOT_LOGGER_NAME):
    """调整记录器及其处理器的级别"""
    logger = get_logger(name)
    log_level = _parse_level(level)
    logger.setLevel(log_level)
    for handler in logger.handlers:
        handler.setLevel(log_level)


class LoggerMixin:
    """为类提供 jungle.<类名> 记录器"""

    @property
    def logger(self) -> logging.Logger:
        return get_logger(self.__class__.__name__)

    def log_info(self, message: str, *args, **kwargs):
        self.logger.info(message, *args, **kwargs)

    def log_warning(self, message: str, *args, **kwargs):
        self.logger.warning(message, *args, **kwargs)

    def log_error(self, message: str, *args, **kwargs):
        self.logger.error(message, *args, **kwargs)

    def log_debug(self, message: str, *args, **kwargs):
        self.logger.debug(message, *args, **kwargs)


class GameEventLogger:
    """
    对局事件记录器

    走子和拒绝记为DEBUG，吃子、悔棋、让步和终局记为INFO。
    """

    def __init__(self, name: str = 'game'):
        self.logger = get_logger(name)

    def move(self, player_id: int, move):
        self.logger.debug(f"玩家 {player_id} 走子 {move}")

    def rejected(self, move, reason: str):
        self.logger.debug(f"走法 {move} 被拒绝: {reason}")

    def capture(self, attacker, target, pos):
        self.logger.info(
            f"{attacker.name}({attacker.owner}) 吃掉 {target.name}({target.owner}) 于 {tuple(pos)}"
        )

    def passed(self, player_id: int):
        self.logger.info(f"玩家 {player_id} 让步")

    def undone(self, move):
        self.logger.info(f"悔棋: {move if move is not None else '让步'}")

    def game_over(self, winner: int, move_count: int):
        self.logger.info(f"对局结束, 胜者: 玩家 {winner}, 共 {move_count} 步")


# 全局对局事件记录器实例
game_event_logger = GameEventLogger()
