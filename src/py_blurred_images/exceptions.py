"""模糊处理异常模块。

定义统一的异常类和错误处理机制，包含引擎异常转换装饰器。
"""

from collections.abc import Callable
from functools import wraps
from pathlib import Path
from typing import TypeVar

from PIL.Image import DecompressionBombError, UnidentifiedImageError

from .models.constants import EngineInfo, get_engine_info
from .utils.logging_helpers import get_logger
from .utils.message_formatter import MessageFormatter


logger = get_logger()
T = TypeVar("T")


class BlurError(Exception):
    """模糊处理错误基类"""

    def __init__(self, message: str, input_path: Path | None = None):
        super().__init__(message)
        self.message = message
        self.input_path = input_path


class ConfigurationError(BlurError):
    """配置错误，终止整次运行"""

    pass


class LevelValidationError(BlurError):
    """级别校验错误，仅跳过对应级别"""

    pass


class EngineError(BlurError):
    """渲染引擎 identify/write 失败，终止整次运行"""

    pass


class EngineUnavailableError(EngineError):
    """渲染引擎未安装"""

    def __init__(self, info: EngineInfo, detail: str | None = None):
        alternative = get_engine_info(info.alternative)
        hint = MessageFormatter.engine_install_hint(
            info.name,
            info.install,
            info.url,
            info.alternative,
            alternative.name if alternative else info.alternative,
        )
        message = f"{detail}\n{hint}" if detail else hint
        super().__init__(message)
        self.info = info


def handle_engine_errors(operation_name: str = "图像处理"):
    """渲染引擎操作的异常转换装饰器

    Args:
        operation_name: 操作名称，用于日志记录
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except EngineError:
                raise
            except UnidentifiedImageError as e:
                logger.error(f"{operation_name} - 无法识别图像格式: {e}")
                raise EngineError(f"无法识别的图像格式: {e}") from e
            except DecompressionBombError as e:
                logger.error(f"{operation_name} - 图像过大: {e}")
                raise EngineError(f"图像文件过大，可能存在安全风险: {e}") from e
            except FileNotFoundError as e:
                logger.error(f"{operation_name} - 文件不存在: {e}")
                raise EngineError(MessageFormatter.file_not_found(e.filename or e)) from e
            except OSError as e:
                logger.error(f"{operation_name} - 文件操作失败: {e}")
                raise EngineError(f"文件操作失败: {e}") from e
            except (ValueError, TypeError) as e:
                logger.error(f"{operation_name} - 参数错误: {e}")
                raise EngineError(f"参数错误: {e}") from e
            except Exception as e:
                logger.error(f"{operation_name} - 未知错误: {e}")
                raise EngineError(f"图像处理失败: {e}") from e

        return wrapper

    return decorator


class ErrorHandler:
    """统一错误处理器

    提供标准化的错误日志记录与退出码映射。
    """

    @staticmethod
    def _log_error(
        operation: str, path: Path | str, error: Exception, level: str = "error"
    ) -> None:
        """标准化的错误日志记录

        Args:
            operation: 操作名称
            path: 相关文件路径
            error: 异常对象
            level: 日志级别 ("error", "warning", "debug")
        """
        log_msg = MessageFormatter.format_error(operation, path, error)
        getattr(logger, level, logger.error)(log_msg)

    @staticmethod
    def handle_fatal(error: BlurError, operation: str = "模糊处理") -> int:
        """记录致命错误并返回进程退出码"""
        match error:
            case ConfigurationError():
                ErrorHandler._log_error(
                    f"{operation} - 配置错误", error.input_path or "-", error
                )
            case EngineError():
                ErrorHandler._log_error(
                    f"{operation} - 引擎错误", error.input_path or "-", error
                )
            case _:
                ErrorHandler._log_error(operation, error.input_path or "-", error)
        return 1

    @staticmethod
    def error_type(error: Exception) -> str:
        """异常对应的响应错误类型"""
        match error:
            case ConfigurationError():
                return "configuration"
            case EngineError():
                return "engine"
            case FileNotFoundError():
                return "file"
            case _:
                return "processing"
