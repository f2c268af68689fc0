"""
Jungle Chess 源代码模块

- jungle_engine: 斗兽棋规则引擎
"""

from . import jungle_engine

__all__ = [
    "jungle_engine",
]
