"""模糊处理相关常量定义。

包括级别语法、默认级别以及外部渲染引擎信息。
"""

import re
from dataclasses import dataclass
from typing import Any, Final


# 合法值: 1, '1', '1%', '1.1%', '11.11111%', '.5'
# 非法值: -1, '1.1.1%', '1a', 'a1'
LEVEL_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[0-9]*\.?[0-9]+%?$")

# 模板占位符语法: {%= field %}
TEMPLATE_TOKEN: Final[re.Pattern[str]] = re.compile(r"\{%=\s*([A-Za-z_][\w]*)\s*%\}")

PERCENT_SIGN: Final[str] = "%"

DEFAULT_LEVELS: Final[list[dict[str, Any]]] = [
    {"name": "low", "level": 1},
    {"name": "medium", "level": 5},
    {"name": "high", "level": 9},
]


@dataclass(frozen=True)
class EngineInfo:
    """外部渲染引擎信息"""

    code: str
    name: str
    install: str
    url: str
    alternative: str


GFX_ENGINES: Final[dict[str, EngineInfo]] = {
    "pil": EngineInfo(
        code="pil",
        name="Pillow",
        install="pip install Pillow",
        url="https://pillow.readthedocs.io/en/stable/installation.html",
        alternative="im",
    ),
    "im": EngineInfo(
        code="im",
        name="ImageMagick",
        install="brew install imagemagick",
        url="https://imagemagick.org/script/download.php",
        alternative="gm",
    ),
    "gm": EngineInfo(
        code="gm",
        name="GraphicsMagick",
        install="brew install graphicsmagick",
        url="http://www.graphicsmagick.org/download.html",
        alternative="im",
    ),
}


def get_engine_info(code: str) -> EngineInfo | None:
    """按代码获取引擎信息"""
    return GFX_ENGINES.get(code.lower()) if code else None
