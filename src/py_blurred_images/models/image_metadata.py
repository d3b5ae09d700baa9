"""图像元数据模型。

渲染引擎 identify 操作的结果。
"""

from pathlib import Path

from humanize import naturalsize
from pydantic import BaseModel, Field, computed_field


class ImageProbe(BaseModel):
    """源图片探测信息"""

    file_path: Path
    file_size: int = Field(default=0, description="文件大小（字节）")
    format: str = Field(default="UNKNOWN", description="图片格式")
    width: int = Field(default=0, description="图片宽度")
    height: int = Field(default=0, description="图片高度")
    mode: str | None = Field(default=None, description="颜色模式")
    frame_count: int = Field(default=1, description="帧数 (scene)")
    delay: float | None = Field(default=None, description="帧延迟")

    @computed_field
    def is_animated(self) -> bool:
        """多帧且带帧延迟标记即视为动画"""
        return self.frame_count > 1 and self.delay is not None

    def get_file_size_human(self) -> str:
        """人性化显示文件大小"""
        return naturalsize(self.file_size, binary=True)
