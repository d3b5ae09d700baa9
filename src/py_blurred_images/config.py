"""统一配置管理模块。

提供应用程序的全局配置管理，包括默认值、环境变量支持等。
"""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class BlurDefaults:
    """模糊处理相关的默认配置"""

    # 渲染引擎：pil / im / gm
    ENGINE: str = "pil"

    # 质量设置
    QUALITY: int = 100

    # 外部引擎命令超时（秒）
    COMMAND_TIMEOUT: float = 300.0


@dataclass(frozen=True)
class LoggingDefaults:
    """日志相关的默认配置"""

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig:
    """应用程序配置管理器

    支持环境变量覆盖默认配置
    """

    def __init__(self):
        self.blur = BlurDefaults()
        self.logging = LoggingDefaults()

        # 从环境变量加载配置
        self._load_from_env()

    def _load_from_env(self):
        """从环境变量加载配置"""
        if engine := os.getenv("BLUR_ENGINE"):
            object.__setattr__(self.blur, "ENGINE", engine.lower())

        if quality := os.getenv("BLUR_QUALITY"):
            object.__setattr__(self.blur, "QUALITY", int(quality))

        if log_level := os.getenv("BLUR_LOG_LEVEL"):
            object.__setattr__(self.logging, "LOG_LEVEL", log_level.upper())


# 全局配置实例
config = AppConfig()


def get_config() -> AppConfig:
    """获取全局配置实例"""
    return config


def reset_config():
    """重置配置（主要用于测试）"""
    global config
    config = AppConfig()
