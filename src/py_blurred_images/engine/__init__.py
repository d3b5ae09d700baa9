"""模糊处理引擎模块。

包含任务配置构建、编排执行与结果汇报。
"""

from .config import BlurTask, ConfigBuilder
from .orchestrator import BlurOrchestrator, LevelPlan
from .reporter import ResultReporter


__all__ = [
    "BlurOrchestrator",
    "BlurTask",
    "ConfigBuilder",
    "LevelPlan",
    "ResultReporter",
]
