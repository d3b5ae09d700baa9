"""测试配置文件。

提供测试所需的fixtures和配置。
"""

import tempfile
from pathlib import Path

import pytest
from PIL import Image, ImageDraw

from py_blurred_images.core.graphics import GraphicsEngine, ImageOperation
from py_blurred_images.exceptions import EngineError
from py_blurred_images.models.image_metadata import ImageProbe


def create_photo(path: Path, size: tuple[int, int] = (64, 48)) -> Path:
    """创建带噪点的 JPEG/PNG 图片"""
    path.parent.mkdir(parents=True, exist_ok=True)
    img = Image.effect_noise(size, 60).convert("RGB")
    draw = ImageDraw.Draw(img)
    draw.rectangle([8, 8, size[0] // 2, size[1] // 2], fill=(200, 40, 40))
    img.save(path)
    return path


def create_animated_gif(path: Path, frames: int = 3) -> Path:
    """创建多帧动画 GIF，每帧颜色不同"""
    path.parent.mkdir(parents=True, exist_ok=True)
    colors = ["red", "green", "blue", "yellow", "white"]
    images = [
        Image.new("RGB", (32, 32), color=colors[i % len(colors)]) for i in range(frames)
    ]
    images[0].save(
        path, save_all=True, append_images=images[1:], duration=100, loop=0
    )
    return path


def create_placeholder(path: Path) -> Path:
    """创建占位文件，仅供录制引擎使用"""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"placeholder")
    return path


class RecordingEngine(GraphicsEngine):
    """记录调用顺序的测试引擎"""

    def __init__(
        self,
        animated: set[str] | None = None,
        fail_on: set[str] | None = None,
        events: list | None = None,
    ):
        super().__init__("pil")
        self.animated = animated or set()
        self.fail_on = fail_on or set()
        self.events = events if events is not None else []

    @property
    def writes(self) -> list[tuple]:
        return [e for e in self.events if e[0] == "write"]

    def identify(self, path: str | Path) -> ImageProbe:
        path = Path(path)
        self.events.append(("identify", path))
        if path.name in self.fail_on:
            raise EngineError(f"identify failed: {path}")

        frame_count = 3 if path.name in self.animated else 1
        return ImageProbe(
            file_path=path,
            format="GIF" if frame_count > 1 else "JPEG",
            frame_count=frame_count,
            delay=10 if frame_count > 1 else None,
        )

    def render(self, operation: ImageOperation, destination: Path) -> None:
        self.events.append(
            (
                "write",
                operation.source,
                destination,
                operation.radius,
                operation.sigma,
                operation.quality_value,
            )
        )
        destination.write_bytes(b"blurred")


@pytest.fixture
def temp_dir():
    """临时目录fixture"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def recording_engine() -> RecordingEngine:
    return RecordingEngine()


@pytest.fixture
def panther(temp_dir: Path) -> Path:
    """src/panther.jpg"""
    return create_photo(temp_dir / "src" / "panther.jpg")


def create_options(**kwargs):
    """创建完整的 BlurOptions，提供默认值"""
    from py_blurred_images.models.blur_config import BlurOptions

    defaults = {
        "engine": "pil",
        "skip_existing": True,
        "quality": 100,
        "rename": True,
        "separator": "-",
        "allow_animated": False,
    }
    defaults.update(kwargs)
    return BlurOptions(**defaults)


def make_resolved(**level):
    """按单个级别生成已命名的 ResolvedOptions"""
    from py_blurred_images.core.naming import apply_naming
    from py_blurred_images.core.resolver import resolve_levels

    global_keys = {"quality", "rename", "separator", "suffix", "units"}
    global_options = {k: level.pop(k) for k in list(level) if k in global_keys}
    options = create_options(levels=[level], **global_options)
    return apply_naming(resolve_levels(options)[0])
