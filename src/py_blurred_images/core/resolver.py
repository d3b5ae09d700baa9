"""级别配置解析模块。

把全局选项与每个级别的覆盖项合并为独立的 ResolvedOptions。
"""

from typing import Any

from ..exceptions import ConfigurationError
from ..models.blur_config import BlurOptions, ResolvedOptions
from ..utils.logging_helpers import get_logger


logger = get_logger()

# 运行期只允许一个渲染引擎，级别不能覆盖
_RUN_SCOPED_FIELDS = frozenset({"engine", "levels"})
_DERIVED_FIELDS = frozenset({"id", "engine", "level", "output_name", "extras"})


def resolve_levels(options: BlurOptions) -> list[ResolvedOptions]:
    """按声明顺序为每个级别生成合并后的选项

    Args:
        options: 全局选项

    Returns:
        list[ResolvedOptions]: 每个级别一项，id 从 0 开始连续编号

    Raises:
        ConfigurationError: levels 缺失、不是列表或为空
    """
    levels = options.levels
    if not isinstance(levels, list) or not levels:
        raise ConfigurationError("未定义任何模糊级别 (levels)")

    base = options.model_dump(exclude=set(_RUN_SCOPED_FIELDS))
    known_fields = set(ResolvedOptions.model_fields)
    resolved: list[ResolvedOptions] = []

    for index, level in enumerate(levels):
        overrides = {
            key: value
            for key, value in level.model_dump(exclude_none=True).items()
            if key not in _RUN_SCOPED_FIELDS
        }
        merged: dict[str, Any] = {**base, **overrides}

        fields = {k: v for k, v in merged.items() if k in known_fields}
        extras = {k: v for k, v in merged.items() if k not in known_fields}

        resolved.append(
            ResolvedOptions(
                id=index,
                engine=options.engine,
                level=merged.get("level"),
                extras=extras,
                **{k: v for k, v in fields.items() if k not in _DERIVED_FIELDS},
            )
        )

    logger.debug(f"解析得到 {len(resolved)} 个模糊级别")
    return resolved
