"""ImageMagick / GraphicsMagick 渲染引擎。

通过 subprocess 调用命令行工具完成探测与模糊。
"""

import shutil
import subprocess
from pathlib import Path

from ..config import get_config
from ..exceptions import EngineError, EngineUnavailableError, handle_engine_errors
from ..models.image_metadata import ImageProbe
from ..utils.logging_helpers import get_logger
from .graphics import GraphicsEngine, ImageOperation
from .naming import format_number


logger = get_logger()

# 每帧一行：格式|宽|高|延迟|场景号
IDENTIFY_FORMAT = "%m|%w|%h|%T|%s\n"


class MagickEngine(GraphicsEngine):
    """命令行渲染引擎，code 为 "im" 或 "gm" """

    def __init__(self, code: str = "im", timeout: float | None = None):
        super().__init__(code)
        self.timeout = timeout or get_config().blur.COMMAND_TIMEOUT

    def _toolchain(self) -> tuple[list[str], list[str]]:
        """返回 (convert 命令, identify 命令)"""
        if self.code == "gm":
            gm = shutil.which("gm")
            if not gm:
                raise EngineUnavailableError(self.info, "未找到 gm 命令")
            return [gm, "convert"], [gm, "identify"]

        if magick := shutil.which("magick"):
            return [magick], [magick, "identify"]

        # ImageMagick 6 只提供独立命令
        convert = shutil.which("convert")
        identify = shutil.which("identify")
        if convert and identify:
            return [convert], [identify]

        raise EngineUnavailableError(
            self.info, "未找到 magick 命令（或 convert + identify）"
        )

    def _run(self, cmd: list[str]) -> str:
        logger.debug(f"执行命令: {' '.join(cmd)}")
        try:
            proc = subprocess.run(
                cmd, capture_output=True, text=True, timeout=self.timeout
            )
        except FileNotFoundError as e:
            raise EngineUnavailableError(self.info, str(e)) from e
        except subprocess.TimeoutExpired as e:
            raise EngineError(f"{self.name} 命令超时 ({self.timeout}s): {cmd[0]}") from e

        if proc.returncode != 0:
            raise EngineError(
                f"{self.name} 执行失败 (退出码 {proc.returncode}): {proc.stderr.strip()}"
            )
        return proc.stdout

    @handle_engine_errors("图片探测")
    def identify(self, path: str | Path) -> ImageProbe:
        path = Path(path)
        _, identify_cmd = self._toolchain()

        output = self._run([*identify_cmd, "-format", IDENTIFY_FORMAT, str(path)])
        frames = [line.split("|") for line in output.splitlines() if line.strip()]
        if not frames:
            raise EngineError(f"{self.name} 未返回图片信息: {path}", path)

        fmt, width, height, delay, _scene = (frames[0] + [""] * 5)[:5]
        return ImageProbe(
            file_path=path,
            file_size=path.stat().st_size,
            format=fmt.strip().upper() or "UNKNOWN",
            width=int(width or 0),
            height=int(height or 0),
            frame_count=len(frames),
            delay=float(delay) if delay.strip() else None,
        )

    @handle_engine_errors("图片写入")
    def render(self, operation: ImageOperation, destination: Path) -> None:
        convert_cmd, _ = self._toolchain()

        cmd = [*convert_cmd, str(operation.source)]
        if operation.radius is not None:
            cmd += [
                "-blur",
                f"{format_number(operation.radius)}x{format_number(operation.sigma)}",
            ]
        if operation.quality_value is not None:
            cmd += ["-quality", format_number(operation.quality_value)]
        cmd.append(str(destination))

        self._run(cmd)
