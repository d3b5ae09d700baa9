"""数据模型包。

定义模糊处理相关的数据结构和模型。
"""

from .blur_config import (
    BlurLevel,
    BlurOptions,
    FileGroup,
    FileJob,
    JobState,
    ResolvedOptions,
    UnitOptions,
)
from .blur_result import (
    JobResult,
    LevelSummary,
    RunResult,
)
from .constants import (
    DEFAULT_LEVELS,
    GFX_ENGINES,
    LEVEL_PATTERN,
    TEMPLATE_TOKEN,
    EngineInfo,
    get_engine_info,
)
from .image_metadata import ImageProbe


__all__ = [
    "DEFAULT_LEVELS",
    "GFX_ENGINES",
    "LEVEL_PATTERN",
    "TEMPLATE_TOKEN",
    "BlurLevel",
    "BlurOptions",
    "EngineInfo",
    "FileGroup",
    "FileJob",
    "ImageProbe",
    "JobResult",
    "JobState",
    "LevelSummary",
    "ResolvedOptions",
    "RunResult",
    "UnitOptions",
    "get_engine_info",
]
