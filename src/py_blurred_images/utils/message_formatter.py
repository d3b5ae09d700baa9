"""消息格式化工具模块。

提供统一的警告、错误与汇总消息格式化功能。
"""

from pathlib import Path
from typing import Any


class MessageFormatter:
    """统一的消息格式化器"""

    @staticmethod
    def file_not_found(file_path: str | Path) -> str:
        """文件不存在错误消息"""
        return f"文件不存在: {file_path}"

    @staticmethod
    def operation_failed(
        operation: str, target: str | Path, error: Exception | None = None
    ) -> str:
        """操作失败消息"""
        msg = f"{operation}失败: {target}"
        if error:
            msg += f" - {error}"
        return msg

    @staticmethod
    def format_error(operation: str, path: str | Path, error: Exception) -> str:
        """格式化通用错误消息"""
        return f"{operation}失败 [{path}]: {error}"

    @staticmethod
    def invalid_level(level: Any) -> str:
        """模糊级别非法"""
        return f"模糊级别无效 ({level})，跳过该级别"

    @staticmethod
    def missing_level() -> str:
        return "必须指定模糊级别 (level)，跳过该级别"

    @staticmethod
    def invalid_quality(quality: Any) -> str:
        """质量值非法"""
        return f"质量值无效 ({quality})，取值必须在 1 - 100 之间且大于 1，跳过该级别"

    @staticmethod
    def no_source_files() -> str:
        return "无法处理：未找到有效的源文件 (no valid source files were found)"

    @staticmethod
    def engine_install_hint(
        name: str, install: str, url: str, alternative_code: str, alternative_name: str
    ) -> str:
        """外部渲染引擎缺失时的修复提示"""
        return (
            f"请确认 {name} 已正确安装。\n"
            f"`{install}` 或参考 {url} 了解详情。\n"
            f"也可以将 options.engine 设置为 '{alternative_code}' "
            f"以使用 {alternative_name}。"
        )

    @staticmethod
    def level_summary(count: int, name: str) -> str:
        """单个级别的处理汇总"""
        noun = "file" if count == 1 else "files"
        return f"{count} {noun} blurred for {name}"
