"""模糊处理编排模块。

规划 (文件 × 级别) 任务并由单线程循环按声明顺序逐个执行。
"""

from dataclasses import dataclass, field
from pathlib import Path

from ..core.graphics import GraphicsEngine
from ..core.naming import PathResolver, apply_naming
from ..core.resolver import resolve_levels
from ..core.validator import filter_valid_levels
from ..exceptions import ConfigurationError, EngineError
from ..models.blur_config import (
    BlurOptions,
    FileGroup,
    FileJob,
    JobState,
    ResolvedOptions,
)
from ..models.blur_result import JobResult, LevelSummary, RunResult
from ..utils.file_helpers import FileMapping, find_image_files
from ..utils.logging_helpers import get_logger
from ..utils.message_formatter import MessageFormatter
from .reporter import ResultReporter


logger = get_logger()


@dataclass
class LevelPlan:
    """单个级别的全部任务，执行完毕后汇报"""

    options: ResolvedOptions
    jobs: list[FileJob] = field(default_factory=list)


class BlurOrchestrator:
    """模糊处理编排器

    严格串行：每个任务完成后才开始下一个，级别汇总在该级别全部任务之后。
    任何引擎错误都会终止整次运行，已写入的文件保留。
    """

    def __init__(
        self,
        engine: GraphicsEngine,
        reporter: ResultReporter | None = None,
    ):
        self.engine = engine
        self.reporter = reporter or ResultReporter()

    def run(
        self,
        options: BlurOptions,
        files: list[FileGroup],
        base_dir: str | Path | None = None,
        target: str | None = None,
    ) -> RunResult:
        """执行一次运行

        Raises:
            ConfigurationError: 配置错误
            EngineError: 引擎探测或写入失败
        """
        plans, skipped_levels = self.plan(options, files, base_dir)

        results: list[JobResult] = []
        summaries: list[LevelSummary] = []
        tally: dict[int, int] = {}

        for level_plan in plans:
            tally[level_plan.options.id] = 0
            for job in level_plan.jobs:
                results.append(self.process_job(job, tally))
            summaries.append(
                self.reporter.report(level_plan.options, tally[level_plan.options.id])
            )

        return RunResult(
            target=target,
            results=results,
            summaries=summaries,
            skipped_levels=skipped_levels,
        )

    def plan(
        self,
        options: BlurOptions,
        files: list[FileGroup],
        base_dir: str | Path | None = None,
    ) -> tuple[list[LevelPlan], list[int]]:
        """解析、校验级别并为每个合法级别生成任务

        目标目录在规划阶段创建。

        Returns:
            tuple: (级别计划列表, 被跳过的级别 id)
        """
        resolved = resolve_levels(options)
        valid_levels, skipped_levels = filter_valid_levels(resolved)

        base = Path(base_dir) if base_dir else Path.cwd()
        mappings = self._expand_groups(files, base)
        if not mappings:
            logger.warning(MessageFormatter.no_source_files())

        plans = []
        for level in valid_levels:
            named = apply_naming(level)
            jobs = [
                FileJob(
                    source=mapping.source,
                    destination=PathResolver.resolve_destination(
                        mapping.source,
                        mapping.destination,
                        named,
                        custom_dest=group.custom_dest,
                        root=mapping.root,
                        base_dir=base,
                    ),
                    options=named,
                )
                for mapping, group in mappings
            ]
            plans.append(LevelPlan(options=named, jobs=jobs))

        return plans, skipped_levels

    def _expand_groups(
        self, files: list[FileGroup], base_dir: Path
    ) -> list[tuple[FileMapping, FileGroup]]:
        """展开所有文件组，保持声明顺序"""
        expanded: list[tuple[FileMapping, FileGroup]] = []

        for group in files:
            if not group.src:
                raise ConfigurationError("无法读取配置：文件组缺少 src，是否指定了目标?")
            if not group.dest and not group.custom_dest:
                raise ConfigurationError(f"文件组缺少 dest 或 custom_dest: {group.src}")

            mappings = find_image_files(
                group.src, group.dest, group.cwd, group.expand, base_dir
            )

            if not group.expand and len(mappings) > 1:
                raise ConfigurationError(
                    "单文件格式下无法处理多个源文件，多文件请使用 expand 展开: "
                    + ", ".join(str(m.source) for m in mappings)
                )

            expanded.extend((mapping, group) for mapping in mappings)

        return expanded

    def process_job(self, job: FileJob, tally: dict[int, int]) -> JobResult:
        """执行单个任务

        PENDING -> SKIP_EXISTING | PROCESSING -> SKIP_ANIMATED | DONE | FAILED
        """
        options = job.options

        if options.skip_existing and job.destination.exists():
            job.state = JobState.SKIP_EXISTING
            logger.debug(f"文件已存在: {job.destination}")
            return self._job_result(job)

        job.state = JobState.PROCESSING
        try:
            probe = self.engine.identify(job.source)

            if probe.is_animated and not options.allow_animated:
                job.state = JobState.SKIP_ANIMATED
                logger.debug(f"{job.destination} 是动画图片 - 跳过")
                return self._job_result(job)

            (
                self.engine.open(job.source)
                .blur(options.blur_radius, options.blur_sigma)
                .quality(options.quality)
                .write(job.destination)
            )
        except EngineError as e:
            job.state = JobState.FAILED
            if e.input_path is None:
                e.input_path = job.source
            raise

        job.state = JobState.DONE
        tally[options.id] = tally.get(options.id, 0) + 1
        logger.debug(f"模糊完成: {job.source} -> {job.destination}")

        written = job.destination.stat().st_size if job.destination.exists() else 0
        return self._job_result(job, bytes_written=written)

    @staticmethod
    def _job_result(job: FileJob, bytes_written: int = 0) -> JobResult:
        return JobResult(
            source=job.source,
            destination=job.destination,
            level_id=job.options.id,
            level_name=job.options.name,
            state=job.state,
            bytes_written=bytes_written,
        )
