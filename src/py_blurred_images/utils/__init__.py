"""工具模块包。

提供纯工具函数，不包含业务逻辑。
"""

from .file_helpers import (
    FileMapping,
    expand_braces,
    find_image_files,
    match_patterns,
)
from .logging_helpers import configure_logging, get_logger
from .message_formatter import MessageFormatter


__all__ = [
    "FileMapping",
    "MessageFormatter",
    "configure_logging",
    "expand_braces",
    "find_image_files",
    "get_logger",
    "match_patterns",
]
