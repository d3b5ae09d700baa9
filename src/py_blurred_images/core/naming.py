"""文件命名与目标路径模块。

计算级别显示名称、输出文件名后缀，并解析自定义目标目录模板。
"""

from pathlib import Path
from typing import Any

from ..exceptions import ConfigurationError
from ..models.blur_config import ResolvedOptions
from ..models.constants import PERCENT_SIGN, TEMPLATE_TOKEN
from ..utils.logging_helpers import get_logger


logger = get_logger()


def format_number(value: float) -> str:
    """整数值不带小数部分，其余保持最短表示"""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def get_display_name(name: str | None, level: Any, unit: str = "pc") -> str | None:
    """生成级别显示名称

    显式名称优先，否则由级别数值推导，如 2 -> "2pc"、"50%" -> "50pc"。
    """
    if name:
        return name
    if level is None or level == "":
        return None
    return format_number(float(str(level).replace(PERCENT_SIGN, ""))) + unit


def add_prefix_suffix(
    value: str | None, prefix: str | None, suffix: str | None, rename: bool
) -> str:
    """为值添加前缀和/或后缀

    rename 为 False 时只保留后缀，名称与分隔符都被忽略。
    """
    if rename:
        return (prefix or "") + (value or "") + (suffix or "")
    return suffix or ""


def apply_naming(options: ResolvedOptions) -> ResolvedOptions:
    """为级别填充显示名称和输出文件名后缀"""
    name = get_display_name(options.name, options.level, options.units.percentage)
    output_name = add_prefix_suffix(
        name, options.separator, options.suffix, options.rename
    )
    return options.model_copy(update={"name": name, "output_name": output_name})


def _render_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float):
        return format_number(value)
    return str(value)


def render_template(template: str, context: dict[str, Any]) -> str:
    """替换模板中的 {%= field %} 占位符

    Raises:
        ConfigurationError: 引用了不存在的字段
    """

    def replace(match) -> str:
        field = match.group(1)
        if field not in context:
            raise ConfigurationError(f"目标模板引用了未知字段: {field} ({template})")
        return _render_value(context[field])

    return TEMPLATE_TOKEN.sub(replace, template)


def relative_source_dir(source: Path, root: Path | None) -> str:
    """源文件相对根目录的所在目录，去掉根前缀与文件名

    非空结果以 "/" 结尾，位于根目录时返回空字符串。
    """
    parent = source.parent
    if root is not None:
        try:
            parent = parent.relative_to(root)
        except ValueError:
            # 不在根目录内，保留完整目录
            pass

    posix = parent.as_posix()
    if posix in ("", "."):
        return ""
    return posix.rstrip("/") + "/"


def ensure_directory(dir_path: Path) -> None:
    """目录不存在时创建

    运行是串行的，检查后创建不存在竞争。
    """
    if not dir_path.is_dir():
        dir_path.mkdir(parents=True, exist_ok=True)
        logger.debug(f"创建目录: {dir_path}")


class PathResolver:
    """目标路径解析器"""

    @staticmethod
    def resolve_destination(
        source: Path,
        destination: Path | None,
        options: ResolvedOptions,
        custom_dest: str | None = None,
        root: Path | None = None,
        base_dir: Path | None = None,
    ) -> Path:
        """解析最终的输出文件路径

        Args:
            source: 源文件路径
            destination: 文件组给出的目标文件路径
            options: 已命名的级别选项
            custom_dest: 目标目录模板，存在时进入模板模式
            root: 源文件的根目录，用于计算模板字段 path
            base_dir: 相对模板路径的基准目录

        Returns:
            Path: 输出文件路径
        """
        if custom_dest:
            # 模板模式：目录结构区分不同级别，不再追加 output_name
            context = options.template_context(path=relative_source_dir(source, root))
            directory = Path(render_template(custom_dest, context))
            if base_dir is not None:
                # 绝对模板路径拼接后保持不变
                directory = base_dir / directory
            ensure_directory(directory)
            return directory / source.name

        if destination is None:
            raise ConfigurationError("文件组未指定目标路径 (dest)", source)

        directory = destination.parent
        ensure_directory(directory)
        return directory / f"{destination.stem}{options.output_name}{destination.suffix}"
