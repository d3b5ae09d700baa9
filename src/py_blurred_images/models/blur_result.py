"""模糊结果模型。

定义单个任务、单个级别以及整次运行的结果数据结构。
"""

from pathlib import Path
from typing import Any

from humanize import naturalsize
from pydantic import BaseModel, Field

from .blur_config import JobState


class BaseResult(BaseModel):
    """结果基类，包含通用字段和方法"""

    success: bool = Field(True, description="是否成功")
    error: str | None = Field(None, description="错误信息")

    @staticmethod
    def format_size(size_bytes: int) -> str:
        """格式化文件大小为人类可读格式"""
        return naturalsize(size_bytes, binary=True)


class JobResult(BaseResult):
    """单个 (文件 × 级别) 任务的结果"""

    source: Path = Field(description="源文件路径")
    destination: Path = Field(description="目标文件路径")
    level_id: int = Field(description="级别序号")
    level_name: str | None = Field(None, description="级别显示名称")
    state: JobState = Field(description="终止状态")
    bytes_written: int = Field(0, description="写入的字节数")

    @property
    def written(self) -> bool:
        return self.state == JobState.DONE


class LevelSummary(BaseModel):
    """单个级别的统计"""

    level_id: int
    name: str | None = None
    count: int = 0


class RunResult(BaseResult):
    """一次运行（一个目标）的结果"""

    target: str | None = Field(None, description="目标名称")
    results: list[JobResult] = Field(default_factory=list, description="任务结果")
    summaries: list[LevelSummary] = Field(
        default_factory=list, description="按声明顺序的级别统计"
    )
    skipped_levels: list[int] = Field(
        default_factory=list, description="校验失败而被跳过的级别序号"
    )

    def get_total_count(self) -> int:
        return len(self.results)

    def get_written_count(self) -> int:
        return sum(1 for r in self.results if r.written)

    def get_skipped_count(self) -> int:
        return sum(
            1
            for r in self.results
            if r.state in (JobState.SKIP_EXISTING, JobState.SKIP_ANIMATED)
        )

    def get_total_bytes_written(self) -> int:
        return sum(r.bytes_written for r in self.results)

    def get_tally(self) -> dict[int, int]:
        """级别序号 -> 成功输出的文件数"""
        return {s.level_id: s.count for s in self.summaries}

    def get_summary(self) -> str:
        """运行摘要"""
        if not self.success:
            return f"处理失败: {self.error}"

        return (
            f"输出 {self.get_written_count()}/{self.get_total_count()} 个文件, "
            f"跳过 {self.get_skipped_count()} 个, "
            f"共写入 {self.format_size(self.get_total_bytes_written())}"
        )

    def to_dict(self) -> dict[str, Any]:
        """转换为可序列化的字典"""
        return {
            "target": self.target,
            "success": self.success,
            "error": self.error,
            "written": self.get_written_count(),
            "skipped": self.get_skipped_count(),
            "bytes_written": self.get_total_bytes_written(),
            "summary": self.get_summary(),
            "levels": [s.model_dump() for s in self.summaries],
            "files": [
                {
                    "source": str(r.source),
                    "destination": str(r.destination),
                    "level": r.level_name,
                    "state": r.state.value,
                }
                for r in self.results
            ],
        }
