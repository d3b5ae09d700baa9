"""模糊配置模型。

定义全局选项、模糊级别、文件组以及合并后的级别选项。
"""

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)

from ..config import get_config
from .constants import DEFAULT_LEVELS, PERCENT_SIGN


# 模板中可用的 camelCase 字段名
_TEMPLATE_ALIASES = {
    "outputName": "output_name",
    "skipExisting": "skip_existing",
    "newFilesOnly": "skip_existing",
    "allowAnimated": "allow_animated",
    "tryAnimated": "allow_animated",
}


def _default_engine() -> str:
    return get_config().blur.ENGINE


def _default_quality() -> int:
    return get_config().blur.QUALITY


class UnitOptions(BaseModel):
    """单位配置"""

    percentage: str = Field("pc", description="由级别推导名称时使用的后缀")


class BlurLevel(BaseModel):
    """单个模糊级别，未设置的字段继承全局选项"""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str | None = None
    level: int | float | str | None = None
    quality: int | float | str | None = None
    suffix: str | None = None
    rename: bool | None = None
    separator: str | None = None
    skip_existing: bool | None = Field(
        None, validation_alias=AliasChoices("skip_existing", "skipExisting", "newFilesOnly")
    )
    allow_animated: bool | None = Field(
        None, validation_alias=AliasChoices("allow_animated", "allowAnimated", "tryAnimated")
    )


class BlurOptions(BaseModel):
    """全局选项，带有文档化的默认值"""

    model_config = ConfigDict(populate_by_name=True)

    engine: str = Field(default_factory=_default_engine, description="渲染引擎 pil/im/gm")
    skip_existing: bool = Field(
        True,
        validation_alias=AliasChoices("skip_existing", "skipExisting", "newFilesOnly"),
        description="目标文件已存在时跳过",
    )
    quality: int | float | str = Field(
        default_factory=_default_quality, description="输出质量，非法值只跳过对应级别"
    )
    rename: bool = Field(True, description="是否在文件名后追加级别名称")
    separator: str = Field("-", description="文件名与级别名称之间的分隔符")
    suffix: str | None = Field(None, description="追加在名称之后的后缀")
    allow_animated: bool = Field(
        False,
        validation_alias=AliasChoices("allow_animated", "allowAnimated", "tryAnimated"),
        description="是否处理动画图片",
    )
    units: UnitOptions = Field(default_factory=UnitOptions)
    levels: list[BlurLevel] | None = Field(
        default_factory=lambda: [BlurLevel(**lvl) for lvl in DEFAULT_LEVELS],
        description="模糊级别列表，按声明顺序处理",
    )

    @field_validator("engine")
    @classmethod
    def normalize_engine(cls, v: str) -> str:
        return v.lower()


class FileGroup(BaseModel):
    """文件组：源文件模式与目标位置"""

    model_config = ConfigDict(populate_by_name=True)

    src: list[str] = Field(description="源文件路径或 glob 模式")
    dest: str | None = Field(None, description="目标路径")
    cwd: str | None = Field(None, description="展开模式下的根目录")
    expand: bool = Field(False, description="是否逐文件展开")
    custom_dest: str | None = Field(
        None,
        validation_alias=AliasChoices("custom_dest", "customDest"),
        description="目标目录模板，例如 out/{%= level %}/",
    )

    @field_validator("src", mode="before")
    @classmethod
    def coerce_src(cls, v: Any) -> Any:
        if isinstance(v, str):
            return [v]
        return v


class ResolvedOptions(BaseModel):
    """全局选项与单个级别合并后的结果，每个级别创建一次"""

    model_config = ConfigDict(frozen=True)

    id: int
    engine: str
    level: int | float | str | None
    name: str | None = None
    quality: int | float | str | None
    rename: bool
    separator: str | None = None
    suffix: str | None = None
    skip_existing: bool
    allow_animated: bool
    units: UnitOptions
    output_name: str = ""
    extras: dict[str, Any] = Field(default_factory=dict)

    @property
    def blur_radius(self) -> float:
        """去掉百分号后的级别值，作为模糊半径"""
        return float(str(self.level).replace(PERCENT_SIGN, ""))

    @property
    def blur_sigma(self) -> float:
        return self.blur_radius / 3

    def template_context(self, **overrides: Any) -> dict[str, Any]:
        """模板可访问的字段"""
        context = dict(self.extras)
        context.update(self.model_dump(exclude={"extras"}))
        context.update(
            {alias: context[field] for alias, field in _TEMPLATE_ALIASES.items()}
        )
        context.update(overrides)
        return context


class JobState(str, Enum):
    """单个文件任务的状态"""

    PENDING = "pending"
    SKIP_EXISTING = "skip_existing"
    SKIP_ANIMATED = "skip_animated"
    PROCESSING = "processing"
    DONE = "done"
    FAILED = "failed"


class FileJob(BaseModel):
    """一个 (源文件 × 级别) 任务"""

    source: Path
    destination: Path
    options: ResolvedOptions
    state: JobState = JobState.PENDING
