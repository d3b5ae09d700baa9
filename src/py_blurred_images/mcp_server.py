"""图像模糊 MCP 服务器。

通过 MCP 工具暴露任务执行与图片探测。
"""

from pathlib import Path
from typing import Any

from fastmcp import FastMCP

from .blurrer import ImageBlurrer
from .core.graphics import get_engine
from .exceptions import BlurError, ErrorHandler
from .utils.logging_helpers import configure_logging, get_logger
from .utils.message_formatter import MessageFormatter


# MCP 服务器响应类型定义
MCPBlurResponse = dict[str, Any]
MCPImageInfoResponse = dict[str, Any]


class MCPResponseBuilder:
    """MCP 服务器响应构建器，专门用于构建符合 MCP 协议的响应格式。"""

    @staticmethod
    def error(
        message: str,
        error_type: str = "general",
        details: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """构建错误结果。

        Args:
            message: 错误消息
            error_type: 错误类型
            details: 额外的错误详情

        Returns:
            dict: 标准化的错误响应
        """
        result = {
            "success": False,
            "error": message,
            "error_type": error_type,
        }

        if details:
            result["details"] = details

        return result

    @staticmethod
    def from_exception(error: Exception) -> dict[str, Any]:
        """根据异常类型构建错误结果"""
        details = None
        if isinstance(error, BlurError) and error.input_path is not None:
            details = {"file_path": str(error.input_path)}
        return MCPResponseBuilder.error(
            message=getattr(error, "message", str(error)),
            error_type=ErrorHandler.error_type(error),
            details=details,
        )

    @staticmethod
    def file_error(message: str, file_path: str | None = None) -> dict[str, Any]:
        """构建文件相关错误结果。"""
        details = {"file_path": file_path} if file_path else None
        return MCPResponseBuilder.error(
            message=message,
            error_type="file",
            details=details,
        )


configure_logging()
logger = get_logger()

# 创建MCP应用
mcp: FastMCP[Any] = FastMCP("图像模糊服务")


@mcp.tool()
def blur_images(
    task: dict[str, Any],
    target: str | None = None,
    base_dir: str | None = None,
) -> MCPBlurResponse:
    """按任务配置生成多级别模糊图片

    Args:
        task: 任务配置，结构为
            {"options": {...}, "targets": {"名称": {"options": {...}, "files": [...]}}}
        target: 只执行指定目标（可选）
        base_dir: 相对路径的基准目录（可选，默认当前目录）

    Returns:
        dict: 每个目标的输出统计

    使用场景:
        blur_images({
            "options": {"levels": [{"level": 1, "name": "low"}]},
            "targets": {"dist": {"files": [
                {"expand": True, "cwd": "src/", "src": ["img/**/*.{jpg,png}"], "dest": "dist/"}
            ]}},
        })
    """
    try:
        results = ImageBlurrer().run_task_dict(task, target=target, base_dir=base_dir)
        return {
            "success": True,
            "results": [r.to_dict() for r in results],
            "error": None,
        }
    except BlurError as e:
        ErrorHandler.handle_fatal(e, "MCP 模糊任务")
        return MCPResponseBuilder.from_exception(e)
    except Exception as e:
        logger.error(MessageFormatter.operation_failed("MCP 模糊任务", base_dir or ".", e))
        return MCPResponseBuilder.error(str(e), "processing")


@mcp.tool()
def get_image_info(input_path: str, engine: str = "pil") -> MCPImageInfoResponse:
    """探测图片信息（格式、尺寸、帧数、是否动画）

    Args:
        input_path: 输入图像文件路径
        engine: 渲染引擎 pil / im / gm

    Returns:
        dict: 图片信息
    """
    path = Path(input_path)
    if not path.exists():
        return MCPResponseBuilder.file_error(
            MessageFormatter.file_not_found(input_path), input_path
        )

    try:
        probe = get_engine(engine).identify(path)
    except BlurError as e:
        return MCPResponseBuilder.from_exception(e)

    return {
        "success": True,
        "file_path": str(probe.file_path),
        "file_size": probe.file_size,
        "file_size_human": probe.get_file_size_human(),
        "format": probe.format,
        "mode": probe.mode,
        "width": probe.width,
        "height": probe.height,
        "frame_count": probe.frame_count,
        "delay": probe.delay,
        "is_animated": probe.is_animated,
    }


# ============================================================================
# 应用入口
# ============================================================================


def main() -> None:
    """启动 MCP 服务器"""
    logger.info("启动图像模糊 MCP 服务器")
    mcp.run()


if __name__ == "__main__":
    main()
