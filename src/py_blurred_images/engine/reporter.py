"""结果汇报模块。

每个级别的任务全部完成后输出一次汇总，按声明顺序。
"""

from collections.abc import Callable

from ..models.blur_config import ResolvedOptions
from ..models.blur_result import LevelSummary
from ..utils.logging_helpers import get_logger
from ..utils.message_formatter import MessageFormatter


logger = get_logger()


class ResultReporter:
    """级别汇总输出器"""

    def __init__(self, sink: Callable[[str], None] | None = None):
        """
        Args:
            sink: 汇总消息的接收函数，默认写入 INFO 日志
        """
        self.sink = sink or logger.info

    def report(self, options: ResolvedOptions, count: int) -> LevelSummary:
        """汇报单个级别，计数为 0 时不输出"""
        if count > 0:
            self.sink(MessageFormatter.level_summary(count, options.name or ""))
        return LevelSummary(level_id=options.id, name=options.name, count=count)
