"""文件组展开工具模块。

把文件组中的 glob 模式展开为 (源文件, 目标文件, 根目录) 映射。
"""

import re
from dataclasses import dataclass
from pathlib import Path

from .logging_helpers import get_logger


logger = get_logger()

_BRACE_PATTERN = re.compile(r"\{([^{}]*,[^{}]*)\}")


@dataclass(frozen=True)
class FileMapping:
    """单个源文件及其目标位置"""

    source: Path
    destination: Path | None
    root: Path | None


def expand_braces(pattern: str) -> list[str]:
    """展开 {a,b} 形式的备选项，如 "*.{jpg,png}" -> ["*.jpg", "*.png"]"""
    match = _BRACE_PATTERN.search(pattern)
    if not match:
        return [pattern]

    head, tail = pattern[: match.start()], pattern[match.end() :]
    expanded: list[str] = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(f"{head}{option}{tail}"))
    return expanded


def match_patterns(patterns: list[str], root: Path) -> list[Path]:
    """按顺序匹配模式，"!" 开头的模式从已匹配结果中排除

    Args:
        patterns: glob 模式列表
        root: 匹配的根目录

    Returns:
        list[Path]: 去重后保持声明顺序的文件列表
    """
    matched: dict[Path, None] = {}

    for raw in patterns:
        exclude = raw.startswith("!")
        pattern = raw[1:] if exclude else raw

        for expanded in expand_braces(pattern):
            if Path(expanded).is_absolute():
                hits = [Path(expanded)] if Path(expanded).is_file() else []
            else:
                hits = sorted(p for p in root.glob(expanded) if p.is_file())

            for hit in hits:
                if exclude:
                    matched.pop(hit, None)
                else:
                    matched.setdefault(hit, None)

    return list(matched)


def find_image_files(
    src: list[str],
    dest: str | None,
    cwd: str | None,
    expand: bool,
    base_dir: Path,
) -> list[FileMapping]:
    """展开单个文件组

    Args:
        src: 源文件模式
        dest: 目标路径；展开模式下是目录，单文件模式下是文件
        cwd: 展开模式下的根目录
        expand: 是否逐文件展开
        base_dir: 相对路径的基准目录

    Returns:
        list[FileMapping]: 文件映射列表
    """
    root = base_dir / cwd if cwd else base_dir

    if not root.is_dir():
        logger.warning(f"目录不存在: {root}")
        return []

    sources = match_patterns(src, root)

    if not expand:
        # 单文件模式的源数量由调用方检查
        destination = base_dir / dest if dest else None
        return [
            FileMapping(source=source, destination=destination, root=root)
            for source in sources
        ]

    mappings = []
    for source in sources:
        try:
            relative = source.relative_to(root)
        except ValueError:
            # 绝对路径模式，不在根目录内
            relative = Path(source.name)
        destination = base_dir / dest / relative if dest else relative
        mappings.append(FileMapping(source=source, destination=destination, root=root))
    return mappings
