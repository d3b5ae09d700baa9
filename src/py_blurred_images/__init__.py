"""批量图像模糊库。

为每张源图片按多个模糊级别生成模糊版本，用于构建资源。
"""

__version__ = "1.0.0"
__description__ = "批量图像模糊处理，支持多级别、模板化输出路径"

# 核心功能导出
from .blurrer import ImageBlurrer, blur_images
from .exceptions import (
    BlurError,
    ConfigurationError,
    EngineError,
    EngineUnavailableError,
    LevelValidationError,
)
from .models.blur_result import JobResult, LevelSummary, RunResult


__all__ = [
    "BlurError",
    "ConfigurationError",
    "EngineError",
    "EngineUnavailableError",
    "ImageBlurrer",
    "JobResult",
    "LevelSummary",
    "LevelValidationError",
    "RunResult",
    "blur_images",
    "get_version",
]


def get_version() -> str:
    """获取版本号。"""
    return __version__
