"""渲染引擎测试。

覆盖 Pillow 引擎的探测与写入，以及命令行引擎的命令构造与错误转换。
"""

import subprocess
from pathlib import Path

import pytest
from PIL import Image
from PIL.Image import DecompressionBombError

from py_blurred_images.core import magick_engine, pillow_engine
from py_blurred_images.core.graphics import get_engine
from py_blurred_images.core.magick_engine import MagickEngine
from py_blurred_images.core.pillow_engine import PillowEngine, get_save_parameters
from py_blurred_images.exceptions import (
    ConfigurationError,
    EngineError,
    EngineUnavailableError,
)
from tests.conftest import create_animated_gif, create_photo, create_placeholder


class TestGetEngine:
    """引擎选择测试"""

    def test_pillow_is_default_choice(self):
        engine = get_engine("pil")
        assert isinstance(engine, PillowEngine)
        assert engine.name == "Pillow"

    @pytest.mark.parametrize("code,name", [("im", "ImageMagick"), ("GM", "GraphicsMagick")])
    def test_command_line_engines(self, code, name):
        engine = get_engine(code)
        assert isinstance(engine, MagickEngine)
        assert engine.name == name

    def test_unknown_engine_is_fatal(self):
        with pytest.raises(ConfigurationError):
            get_engine("vips")


class TestPillowEngine:
    """Pillow 引擎测试"""

    def test_identify_still_image(self, panther: Path):
        probe = PillowEngine().identify(panther)

        assert probe.format == "JPEG"
        assert (probe.width, probe.height) == (64, 48)
        assert probe.frame_count == 1
        assert not probe.is_animated

    def test_identify_animated_gif(self, temp_dir: Path):
        gif = create_animated_gif(temp_dir / "tmnt.gif")

        probe = PillowEngine().identify(gif)

        assert probe.frame_count == 3
        assert probe.delay is not None
        assert probe.is_animated

    def test_identify_missing_file(self, temp_dir: Path):
        with pytest.raises(EngineError):
            PillowEngine().identify(temp_dir / "missing.jpg")

    def test_identify_not_an_image(self, temp_dir: Path):
        with pytest.raises(EngineError):
            PillowEngine().identify(create_placeholder(temp_dir / "fake.jpg"))

    def test_render_blurs_image(self, panther: Path, temp_dir: Path):
        engine = PillowEngine()
        destination = temp_dir / "out" / "panther-high.jpg"
        destination.parent.mkdir()

        engine.open(panther).blur(9).quality(80).write(destination)

        assert destination.exists()
        with Image.open(panther) as original, Image.open(destination) as blurred:
            assert blurred.size == original.size
            assert blurred.format == "JPEG"
            assert list(blurred.getdata()) != list(original.getdata())

    def test_render_png_to_png(self, temp_dir: Path):
        source = create_photo(temp_dir / "tmnt.png")
        destination = temp_dir / "tmnt-low.png"

        PillowEngine().open(source).blur(1).quality(100).write(destination)

        with Image.open(destination) as img:
            assert img.format == "PNG"

    def test_render_keeps_all_frames(self, temp_dir: Path):
        gif = create_animated_gif(temp_dir / "tmnt.gif", frames=3)
        destination = temp_dir / "tmnt-low.gif"

        PillowEngine().open(gif).blur(2).quality(100).write(destination)

        with Image.open(destination) as img:
            assert img.n_frames == 3

    def test_render_missing_source(self, temp_dir: Path):
        with pytest.raises(EngineError):
            PillowEngine().open(temp_dir / "missing.jpg").blur(1).write(temp_dir / "out.jpg")

    @pytest.mark.parametrize(
        "error", [DecompressionBombError("too many pixels"), RuntimeError("decoder crashed")]
    )
    def test_unexpected_pillow_errors_become_engine_errors(self, monkeypatch, panther, error):
        def failing_open(*args, **kwargs):
            raise error

        monkeypatch.setattr(pillow_engine.Image, "open", failing_open)
        engine = PillowEngine()

        with pytest.raises(EngineError):
            engine.identify(panther)
        with pytest.raises(EngineError):
            engine.open(panther).blur(1).write(panther.with_name("out.jpg"))

    def test_save_parameters(self):
        assert get_save_parameters("JPEG", 80) == {"optimize": True, "quality": 80}
        assert get_save_parameters("WEBP", 150) == {"method": 6, "quality": 100}
        assert get_save_parameters("PNG", 80) == {"optimize": True}
        assert get_save_parameters("GIF", 80) == {}


class FakeCompletedProcess:
    def __init__(self, returncode=0, stdout="", stderr=""):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class TestMagickEngine:
    """命令行引擎测试"""

    @pytest.fixture
    def calls(self, monkeypatch):
        """替换 subprocess.run 并记录命令"""
        recorded: list[list[str]] = []
        outputs: dict[str, FakeCompletedProcess] = {}

        def fake_run(cmd, **kwargs):
            recorded.append(cmd)
            for key, result in outputs.items():
                if key in cmd:
                    return result
            return FakeCompletedProcess()

        monkeypatch.setattr(magick_engine.subprocess, "run", fake_run)
        return recorded, outputs

    @staticmethod
    def install(monkeypatch, *commands: str):
        available = {name: f"/usr/bin/{name}" for name in commands}
        monkeypatch.setattr(magick_engine.shutil, "which", available.get)

    def test_missing_imagemagick_suggests_graphicsmagick(self, monkeypatch, panther):
        self.install(monkeypatch)

        with pytest.raises(EngineUnavailableError) as exc_info:
            MagickEngine("im").identify(panther)

        message = exc_info.value.message
        assert "ImageMagick" in message
        assert "'gm'" in message
        assert "GraphicsMagick" in message

    def test_missing_graphicsmagick_suggests_imagemagick(self, monkeypatch, panther):
        self.install(monkeypatch, "magick")

        with pytest.raises(EngineUnavailableError) as exc_info:
            MagickEngine("gm").identify(panther)

        assert "'im'" in exc_info.value.message

    def test_identify_parses_frames(self, monkeypatch, calls, temp_dir):
        self.install(monkeypatch, "magick")
        recorded, outputs = calls
        outputs["-format"] = FakeCompletedProcess(
            stdout="GIF|32|32|10|0\nGIF|32|32|10|1\nGIF|32|32|10|2\n"
        )
        gif = create_placeholder(temp_dir / "tmnt.gif")

        probe = MagickEngine("im").identify(gif)

        assert recorded[0][:2] == ["/usr/bin/magick", "identify"]
        assert probe.format == "GIF"
        assert probe.frame_count == 3
        assert probe.delay == 10.0
        assert probe.is_animated

    def test_identify_still_image(self, monkeypatch, calls, panther):
        self.install(monkeypatch, "gm")
        recorded, outputs = calls
        outputs["-format"] = FakeCompletedProcess(stdout="JPEG|64|48||0\n")

        probe = MagickEngine("gm").identify(panther)

        assert recorded[0][:2] == ["/usr/bin/gm", "identify"]
        assert probe.frame_count == 1
        assert probe.delay is None
        assert not probe.is_animated

    def test_render_command(self, monkeypatch, calls, panther, temp_dir):
        self.install(monkeypatch, "convert", "identify")
        recorded, _ = calls
        destination = temp_dir / "panther-high.jpg"

        MagickEngine("im").open(panther).blur(9, 3).quality(80).write(destination)

        assert recorded == [
            [
                "/usr/bin/convert",
                str(panther),
                "-blur",
                "9x3",
                "-quality",
                "80",
                str(destination),
            ]
        ]

    def test_gm_render_uses_convert_subcommand(self, monkeypatch, calls, panther, temp_dir):
        self.install(monkeypatch, "gm")
        recorded, _ = calls

        MagickEngine("gm").open(panther).blur(1.5).quality(60).write(temp_dir / "p.jpg")

        assert recorded[0][:2] == ["/usr/bin/gm", "convert"]
        assert recorded[0][recorded[0].index("-blur") + 1] == "1.5x0.5"

    def test_nonzero_exit_is_engine_error(self, monkeypatch, calls, panther, temp_dir):
        self.install(monkeypatch, "magick")
        _, outputs = calls
        outputs["-blur"] = FakeCompletedProcess(returncode=1, stderr="corrupt image")

        with pytest.raises(EngineError) as exc_info:
            MagickEngine("im").open(panther).blur(2).quality(90).write(temp_dir / "p.jpg")

        assert "corrupt image" in exc_info.value.message

    def test_timeout_is_engine_error(self, monkeypatch, panther):
        self.install(monkeypatch, "magick")

        def slow_run(cmd, **kwargs):
            raise subprocess.TimeoutExpired(cmd, kwargs.get("timeout"))

        monkeypatch.setattr(magick_engine.subprocess, "run", slow_run)

        with pytest.raises(EngineError):
            MagickEngine("im", timeout=1).identify(panther)
