"""
配置管理器

负责加载、保存和管理棋盘布局与对局配置。
"""

import copy
import json
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any, Dict, Type, TypeVar

import yaml

from .game_config import (
    BoardLayoutConfig, GameConfig,
    DEFAULT_LAYOUT, DEFAULT_GAME_CONFIG
)
from ..utils.exceptions import ConfigError
from ..utils.logger import get_logger

T = TypeVar('T')

logger = get_logger('config')


def _read_file(config_file: Path) -> Any:
    with open(config_file, 'r', encoding='utf-8') as f:
        if config_file.suffix in ('.yaml', '.yml'):
            return yaml.safe_load(f)
        return json.load(f)


def load_layout_file(path) -> BoardLayoutConfig:
    """
    从任意YAML/JSON文件加载布局，不创建配置目录

    Raises:
        ConfigError: 文件不存在、无法解析或布局无效
    """
    layout_file = Path(path)
    if not layout_file.exists():
        raise ConfigError("layout", f"布局文件不存在: {layout_file}")

    try:
        data = _read_file(layout_file)
    except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError("layout", f"无法解析布局文件 {layout_file}: {e}") from e

    layout = BoardLayoutConfig.from_dict(data)
    layout.validate()
    logger.info(f"成功加载布局: {layout_file}")
    return layout


class ConfigManager:
    """
    配置管理器

    配置以YAML文件保存在配置目录中，首次使用时写入默认配置。
    对局配置读取失败时回退到默认值；布局配置错误是致命的。
    """

    def __init__(self, config_dir: str = "jungle_chess_project/configs/jungle_engine"):
        """
        初始化配置管理器

        Args:
            config_dir: 配置文件目录
        """
        self.config_dir = Path(config_dir)
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self.config_files = {
            'game': self.config_dir / 'game_config.yaml',
            'layout': self.config_dir / 'layout_config.yaml',
        }

        self.default_configs = {
            'game': DEFAULT_GAME_CONFIG,
            'layout': DEFAULT_LAYOUT,
        }

        self._initialize_default_configs()

    def _initialize_default_configs(self):
        """初始化默认配置文件"""
        for config_name, config_obj in self.default_configs.items():
            config_file = self.config_files[config_name]
            if not config_file.exists():
                self.save_config(config_name, config_obj)
                logger.info(f"创建默认配置文件: {config_file}")

    def save_config(self, config_name: str, config_obj: Any):
        """
        保存配置

        Args:
            config_name: 配置名称
            config_obj: 配置对象
        """
        config_file = self.config_files.get(config_name)
        if not config_file:
            raise ValueError(f"未知的配置名称: {config_name}")

        self._write(config_file, asdict(config_obj))
        logger.info(f"成功保存配置: {config_file}")

    def get_game_config(self) -> GameConfig:
        """
        获取对局配置

        文件缺失或损坏时记录日志并返回默认配置。
        """
        config_file = self.config_files['game']
        if not config_file.exists():
            logger.warning(f"配置文件不存在: {config_file}，使用默认配置")
            return copy.deepcopy(DEFAULT_GAME_CONFIG)

        try:
            data = self._read(config_file) or {}
            config = self._dict_to_dataclass(data, GameConfig)
            logger.info(f"成功加载配置: {config_file}")
            return config
        except (OSError, yaml.YAMLError, json.JSONDecodeError, TypeError, AttributeError) as e:
            logger.error(f"加载配置文件失败: {config_file}, 错误: {e}")
            return copy.deepcopy(DEFAULT_GAME_CONFIG)

    def get_layout(self) -> BoardLayoutConfig:
        """获取配置目录中的布局"""
        return self.load_layout(self.config_files['layout'])

    def load_layout(self, path) -> BoardLayoutConfig:
        """
        从任意YAML/JSON文件加载布局

        Args:
            path: 布局文件路径

        Returns:
            BoardLayoutConfig: 通过结构校验的布局

        Raises:
            ConfigError: 文件不存在、无法解析或布局无效
        """
        return load_layout_file(path)

    def update_config(self, config_name: str, **kwargs):
        """
        修改对局配置中的若干项并写回文件

        未知的配置项会被忽略并记录警告。布局不支持逐项修改，应整体保存。
        """
        if config_name != 'game':
            raise ValueError(f"不支持逐项修改的配置: {config_name}")

        config = self.get_game_config()
        known = {f.name for f in fields(GameConfig)}
        for key, value in kwargs.items():
            if key in known:
                setattr(config, key, value)
            else:
                logger.warning(f"忽略未知的对局配置项: {key}")

        self.save_config(config_name, config)

    def reset_config(self, config_name: str):
        """用默认值覆盖配置文件（game 或 layout）"""
        self.save_config(config_name, self.default_configs[config_name])
        logger.info(f"{config_name} 配置已恢复默认")

    def _read(self, config_file: Path) -> Any:
        return _read_file(config_file)

    def _write(self, config_file: Path, data: Dict[str, Any]):
        with open(config_file, 'w', encoding='utf-8') as f:
            if config_file.suffix in ('.yaml', '.yml'):
                yaml.dump(data, f, default_flow_style=False,
                          allow_unicode=True, indent=2, sort_keys=False)
            else:
                json.dump(data, f, ensure_ascii=False, indent=2)

    def _dict_to_dataclass(self, data: Dict[str, Any], dataclass_type: Type[T]) -> T:
        """按数据类字段取值，多余的键记录后丢弃"""
        if not isinstance(data, dict):
            raise TypeError(f"{dataclass_type.__name__} 需要映射类型, 实际为 {type(data).__name__}")

        known = {f.name for f in fields(dataclass_type)}
        extra = sorted(set(data) - known)
        if extra:
            logger.warning(f"{dataclass_type.__name__} 忽略未知字段: {extra}")
        return dataclass_type(**{k: v for k, v in data.items() if k in known})
