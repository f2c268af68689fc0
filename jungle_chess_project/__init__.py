"""
斗兽棋系统 (Jungle Chess)

斗兽棋规则引擎与控制台对弈前端。
"""

__version__ = "0.1.0"
__author__ = "Jungle Chess Team"
__description__ = "斗兽棋规则引擎 - 地形、物种能力、组合式走法校验与可悔棋的对局会话"

# 导入主要模块
from jungle_chess_project.src import jungle_engine

__all__ = [
    "jungle_engine",
    "__version__",
    "__author__",
    "__description__",
]
