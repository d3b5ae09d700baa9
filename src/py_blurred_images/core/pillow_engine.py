"""Pillow 渲染引擎。

在进程内完成探测、高斯模糊与保存，动画图片逐帧处理。
"""

from pathlib import Path
from typing import Any

from PIL import Image, ImageFilter, ImageSequence

from ..exceptions import handle_engine_errors
from ..models.image_metadata import ImageProbe
from ..utils.logging_helpers import get_logger
from .graphics import GraphicsEngine, ImageOperation


logger = get_logger()

# GaussianBlur 可直接处理的颜色模式
_FILTERABLE_MODES = frozenset({"L", "RGB", "RGBA", "CMYK"})


def get_save_parameters(format_name: str | None, quality: float | None) -> dict[str, Any]:
    """获取保存参数

    Args:
        format_name: Pillow 格式名称
        quality: 输出质量，None 表示使用 Pillow 默认值
    """
    params: dict[str, Any] = {}

    match format_name:
        case "JPEG":
            params["optimize"] = True
            if quality is not None:
                params["quality"] = max(1, min(100, round(quality)))
        case "WEBP":
            params["method"] = 6
            if quality is not None:
                params["quality"] = max(1, min(100, round(quality)))
        case "PNG":
            params["optimize"] = True

    return params


def _prepare_frame(frame: Image.Image, target_format: str | None) -> Image.Image:
    """转换为可滤波且目标格式支持的颜色模式"""
    if frame.mode not in _FILTERABLE_MODES:
        has_alpha = frame.mode in ("LA", "PA", "RGBa") or "transparency" in frame.info
        frame = frame.convert("RGBA" if has_alpha else "RGB")

    # JPEG 不支持透明度
    if target_format == "JPEG" and frame.mode == "RGBA":
        frame = frame.convert("RGB")

    return frame


class PillowEngine(GraphicsEngine):
    """基于 Pillow 的渲染引擎"""

    def __init__(self):
        super().__init__("pil")

    @handle_engine_errors("图片探测")
    def identify(self, path: str | Path) -> ImageProbe:
        path = Path(path)

        with Image.open(path) as img:
            return ImageProbe(
                file_path=path,
                file_size=path.stat().st_size,
                format=img.format or "UNKNOWN",
                width=img.width,
                height=img.height,
                mode=img.mode,
                frame_count=getattr(img, "n_frames", 1),
                delay=img.info.get("duration"),
            )

    @handle_engine_errors("图片写入")
    def render(self, operation: ImageOperation, destination: Path) -> None:
        with Image.open(operation.source) as img:
            # 输出格式由目标扩展名决定，未知时沿用源格式
            target_format = (
                Image.registered_extensions().get(destination.suffix.lower())
                or img.format
            )

            frames: list[Image.Image] = []
            durations: list[int] = []
            for frame in ImageSequence.Iterator(img):
                durations.append(frame.info.get("duration", 0))
                frames.append(self._blur_frame(frame.copy(), operation, target_format))

            params = get_save_parameters(target_format, operation.quality_value)
            if icc_profile := img.info.get("icc_profile"):
                params["icc_profile"] = icc_profile

            if len(frames) > 1:
                params.update(
                    save_all=True,
                    append_images=frames[1:],
                    duration=durations,
                    loop=img.info.get("loop", 0),
                )

            frames[0].save(destination, format=target_format, **params)

        logger.debug(f"Pillow 写入完成: {destination} ({len(frames)} 帧)")

    @staticmethod
    def _blur_frame(
        frame: Image.Image, operation: ImageOperation, target_format: str | None
    ) -> Image.Image:
        frame = _prepare_frame(frame, target_format)
        if operation.radius:
            # Pillow 的 GaussianBlur 参数即标准差 sigma
            frame = frame.filter(ImageFilter.GaussianBlur(operation.sigma))
        return frame
