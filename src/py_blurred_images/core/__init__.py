"""核心处理模块。

级别解析、校验、命名以及渲染引擎适配。
"""

from .graphics import GraphicsEngine, ImageOperation, get_engine
from .naming import (
    PathResolver,
    add_prefix_suffix,
    apply_naming,
    get_display_name,
    relative_source_dir,
    render_template,
)
from .resolver import resolve_levels
from .validator import LevelValidators, filter_valid_levels


__all__ = [
    "GraphicsEngine",
    "ImageOperation",
    "LevelValidators",
    "PathResolver",
    "add_prefix_suffix",
    "apply_naming",
    "filter_valid_levels",
    "get_display_name",
    "get_engine",
    "relative_source_dir",
    "render_template",
    "resolve_levels",
]
