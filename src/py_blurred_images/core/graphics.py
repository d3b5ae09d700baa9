"""渲染引擎接口模块。

定义 identify / blur / quality / write 能力接口，编排逻辑只依赖这里的抽象。
"""

from abc import ABC, abstractmethod
from pathlib import Path

from ..exceptions import ConfigurationError
from ..models.constants import GFX_ENGINES, EngineInfo
from ..models.image_metadata import ImageProbe
from ..utils.logging_helpers import get_logger


logger = get_logger()


class ImageOperation:
    """一次待执行的图像处理，链式记录 blur 与 quality，write 时交给引擎执行"""

    def __init__(self, engine: "GraphicsEngine", source: Path):
        self.engine = engine
        self.source = source
        self.radius: float | None = None
        self.sigma: float | None = None
        self.quality_value: float | None = None

    def blur(self, radius: float, sigma: float | None = None) -> "ImageOperation":
        self.radius = radius
        self.sigma = radius / 3 if sigma is None else sigma
        return self

    def quality(self, value: float) -> "ImageOperation":
        self.quality_value = value
        return self

    def write(self, destination: str | Path) -> None:
        self.engine.render(self, Path(destination))


class GraphicsEngine(ABC):
    """渲染引擎基类"""

    def __init__(self, code: str):
        self.code = code
        self.info: EngineInfo = GFX_ENGINES[code]

    @property
    def name(self) -> str:
        return self.info.name

    @abstractmethod
    def identify(self, path: str | Path) -> ImageProbe:
        """探测源图片的元数据

        Raises:
            EngineError: 探测失败
        """

    def open(self, path: str | Path) -> ImageOperation:
        return ImageOperation(self, Path(path))

    @abstractmethod
    def render(self, operation: ImageOperation, destination: Path) -> None:
        """执行处理并写入目标文件

        Raises:
            EngineError: 写入失败
        """


def get_engine(code: str) -> GraphicsEngine:
    """按代码创建渲染引擎

    Args:
        code: pil / im / gm

    Raises:
        ConfigurationError: 未知的引擎代码
    """
    normalized = (code or "").lower()
    if normalized not in GFX_ENGINES:
        raise ConfigurationError(
            f"无效的渲染引擎: {code}，可用引擎: {', '.join(sorted(GFX_ENGINES))}"
        )

    # 延迟导入，避免循环导入
    if normalized == "pil":
        from .pillow_engine import PillowEngine

        engine: GraphicsEngine = PillowEngine()
    else:
        from .magick_engine import MagickEngine

        engine = MagickEngine(normalized)

    logger.debug(f"使用渲染引擎: {engine.name}")
    return engine
