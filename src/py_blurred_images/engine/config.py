"""配置构建器模块。

加载任务文件（JSON / TOML），合并任务级与目标级选项并完成校验。
"""

import json
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ConfigurationError
from ..models.blur_config import BlurOptions, FileGroup
from ..utils.logging_helpers import get_logger


logger = get_logger()


class TargetConfig(BaseModel):
    """单个目标：目标级选项与文件组"""

    options: dict[str, Any] = Field(default_factory=dict)
    files: list[dict[str, Any]] = Field(default_factory=list)


class TaskFile(BaseModel):
    """任务文件结构"""

    options: dict[str, Any] = Field(default_factory=dict)
    targets: dict[str, TargetConfig] = Field(default_factory=dict)


@dataclass
class BlurTask:
    """一个可执行的目标"""

    name: str | None
    options: BlurOptions
    files: list[FileGroup]
    base_dir: Path = field(default_factory=Path.cwd)


class ConfigBuilder:
    """任务配置构建器

    把原始字典转换为经过校验的模型，校验失败统一转为 ConfigurationError。
    """

    def build_options(self, raw: dict[str, Any] | None = None) -> BlurOptions:
        """构建全局选项"""
        try:
            return BlurOptions.model_validate(raw or {})
        except PydanticValidationError as e:
            raise ConfigurationError(
                f"选项配置无效: {self._format_validation_error(e)}"
            ) from e

    def build_file_groups(self, raw_groups: list[Any]) -> list[FileGroup]:
        """构建文件组列表"""
        groups = []
        for index, raw in enumerate(raw_groups):
            try:
                groups.append(FileGroup.model_validate(raw))
            except PydanticValidationError as e:
                raise ConfigurationError(
                    f"无法读取文件组配置 #{index}，是否指定了 src? "
                    f"{self._format_validation_error(e)}"
                ) from e
        return groups

    def build_tasks(
        self,
        data: dict[str, Any],
        base_dir: str | Path | None = None,
        target: str | None = None,
    ) -> list[BlurTask]:
        """从任务字典构建目标列表

        Args:
            data: 任务文件内容
            base_dir: 相对路径的基准目录
            target: 只构建指定目标，None 表示全部目标（按声明顺序）

        Raises:
            ConfigurationError: 结构无效或目标不存在
        """
        try:
            task_file = TaskFile.model_validate(data)
        except PydanticValidationError as e:
            raise ConfigurationError(
                f"任务配置无效: {self._format_validation_error(e)}"
            ) from e

        base = Path(base_dir) if base_dir else Path.cwd()

        if target is not None and target not in task_file.targets:
            raise ConfigurationError(
                f"目标不存在: {target}，可用目标: {', '.join(task_file.targets)}"
            )

        names = [target] if target is not None else list(task_file.targets)
        tasks = []
        for name in names:
            target_config = task_file.targets[name]
            # 目标级选项覆盖任务级选项（浅合并）
            merged = {**task_file.options, **target_config.options}
            tasks.append(
                BlurTask(
                    name=name,
                    options=self.build_options(merged),
                    files=self.build_file_groups(target_config.files),
                    base_dir=base,
                )
            )
        return tasks

    def load(self, path: str | Path, target: str | None = None) -> list[BlurTask]:
        """加载任务文件，相对路径以任务文件所在目录为基准"""
        path = Path(path)
        if not path.is_file():
            raise ConfigurationError(f"任务文件不存在: {path}", path)

        try:
            match path.suffix.lower():
                case ".toml":
                    with path.open("rb") as f:
                        data = tomllib.load(f)
                case _:
                    with path.open(encoding="utf-8") as f:
                        data = json.load(f)
        except (json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
            raise ConfigurationError(f"任务文件解析失败: {e}", path) from e

        logger.debug(f"加载任务文件: {path}")
        return self.build_tasks(data, base_dir=path.parent.resolve(), target=target)

    def _format_validation_error(self, error: PydanticValidationError) -> str:
        """格式化验证错误"""
        messages = []
        for err in error.errors():
            field_path = ".".join(str(loc) for loc in err["loc"])
            msg = err["msg"]
            if field_path:
                messages.append(f"{field_path}: {msg}")
            else:
                messages.append(msg)
        return "; ".join(messages)
