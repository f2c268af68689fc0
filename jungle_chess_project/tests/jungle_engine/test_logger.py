"""
测试日志系统
"""

import logging

from jungle_chess_project.src.jungle_engine.rules_engine import create_session
from jungle_chess_project.src.jungle_engine.utils.logger import (
    LoggerMixin, get_logger, set_level, setup_logger
)


class Dummy(LoggerMixin):
    pass


class TestLogger:
    """日志记录器测试"""

    def test_namespace(self):
        """测试记录器都在 jungle 命名空间下"""
        assert get_logger().name == 'jungle'
        assert get_logger('config').name == 'jungle.config'
        assert get_logger('jungle.game').name == 'jungle.game'
        assert Dummy().logger.name == 'jungle.Dummy'

    def test_setup_replaces_handlers(self, tmp_path):
        """测试重复配置不会叠加处理器"""
        name = 'jungle.test_setup'
        setup_logger(name, level='DEBUG', log_file='test.log', log_dir=str(tmp_path))
        logger = setup_logger(name, level='WARNING', console_output=False,
                              log_file='test.log', log_dir=str(tmp_path))
        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING

        set_level('DEBUG', name)
        assert logger.level == logging.DEBUG
        assert all(handler.level == logging.DEBUG for handler in logger.handlers)

        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

    def test_game_events(self, caplog):
        """测试吃子和终局记录为INFO"""
        caplog.set_level(logging.DEBUG, logger='jungle')
        session = create_session()
        session.request_move((0, 2), (0, 3))
        session.pass_turn()
        session.undo()

        messages = [record.getMessage() for record in caplog.records if record.name == 'jungle.game']
        assert any('走子' in message for message in messages)
        assert any('让步' in message for message in messages)
        assert any('悔棋' in message for message in messages)
