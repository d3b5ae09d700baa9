"""图像模糊处理接口。

基于编排器的简洁用户接口，负责为每次运行选择渲染引擎。
"""

from pathlib import Path
from typing import Any

from .core.graphics import GraphicsEngine, get_engine
from .engine.config import BlurTask, ConfigBuilder
from .engine.orchestrator import BlurOrchestrator
from .engine.reporter import ResultReporter
from .models import BlurOptions, FileGroup, RunResult
from .utils.logging_helpers import get_logger


logger = get_logger()


class ImageBlurrer:
    """图像模糊处理器。

    每次运行创建独立的编排器与渲染引擎，不共享全局状态。
    """

    def __init__(
        self,
        engine: GraphicsEngine | None = None,
        reporter: ResultReporter | None = None,
    ):
        """初始化处理器。

        Args:
            engine: 指定的渲染引擎，None 时按选项中的 engine 创建
            reporter: 级别汇总输出器
        """
        self.engine = engine
        self.reporter = reporter
        self.config_builder = ConfigBuilder()

    def run(
        self,
        options: BlurOptions | dict[str, Any] | None,
        files: list[FileGroup] | list[dict[str, Any]],
        base_dir: str | Path | None = None,
        target: str | None = None,
    ) -> RunResult:
        """执行一次模糊处理。

        Args:
            options: 全局选项（模型或原始字典）
            files: 文件组列表
            base_dir: 相对路径的基准目录
            target: 目标名称，仅用于结果标识

        Returns:
            RunResult: 运行结果

        Raises:
            ConfigurationError: 配置错误
            EngineError: 引擎错误

        Examples:
            >>> blurrer = ImageBlurrer()
            >>> result = blurrer.run(
            ...     {"levels": [{"level": 3, "name": "high"}]},
            ...     [{"src": ["photo.jpg"], "dest": "out/photo.jpg"}],
            ... )
        """
        if not isinstance(options, BlurOptions):
            options = self.config_builder.build_options(options)
        groups = [
            g if isinstance(g, FileGroup) else self.config_builder.build_file_groups([g])[0]
            for g in files
        ]

        engine = self.engine or get_engine(options.engine)
        orchestrator = BlurOrchestrator(engine, self.reporter)

        logger.debug(f"开始运行 {target or '-'}，引擎: {engine.name}")
        return orchestrator.run(options, groups, base_dir=base_dir, target=target)

    def run_task(self, task: BlurTask) -> RunResult:
        """执行单个目标"""
        return self.run(task.options, task.files, base_dir=task.base_dir, target=task.name)

    def run_tasks(self, tasks: list[BlurTask]) -> list[RunResult]:
        """按声明顺序执行多个目标，遇到致命错误立即停止"""
        return [self.run_task(task) for task in tasks]

    def run_task_file(
        self, path: str | Path, target: str | None = None
    ) -> list[RunResult]:
        """加载任务文件并执行"""
        return self.run_tasks(self.config_builder.load(path, target))

    def run_task_dict(
        self,
        data: dict[str, Any],
        target: str | None = None,
        base_dir: str | Path | None = None,
    ) -> list[RunResult]:
        """执行任务字典"""
        return self.run_tasks(self.config_builder.build_tasks(data, base_dir, target))


def blur_images(
    options: dict[str, Any] | None,
    files: list[dict[str, Any]],
    base_dir: str | Path | None = None,
) -> RunResult:
    """便捷函数：使用默认引擎选择执行一次模糊处理"""
    return ImageBlurrer().run(options, files, base_dir=base_dir)
