from __future__ import annotations

import json

import pytest
from PIL import Image

from overlay_effects import entrypoint
from overlay_effects.errors import RenderError, UnknownLayerTypeError
from overlay_effects.frame_sources import FrameSource
from overlay_effects.models import LayerType
from overlay_effects.renderer import OverlayFrameSource, progress_for_time


def test_progress_for_time_is_clamped():
    assert progress_for_time(1.0, 4.0) == 0.25
    assert progress_for_time(-1.0, 4.0) == 0.0
    assert progress_for_time(9.0, 4.0) == 1.0


def test_progress_for_time_zero_duration_is_complete():
    assert progress_for_time(0.0, 0.0) == 1.0


def test_read_frame_returns_transparent_rgba_frame():
    source = OverlayFrameSource("title", 160, 90, {"text": "Frame"}, duration=2.0)
    frame = source.read_frame(1.0)

    assert frame.size == (160, 90)
    assert frame.mode == "RGBA"
    assert frame.getpixel((0, 0))[3] == 0
    assert frame.getchannel("A").getbbox() is not None


def test_read_frame_with_background():
    source = OverlayFrameSource(
        LayerType.NEWS_TITLE, 160, 90, {"text": "Bg"}, duration=1.0, background="#000000"
    )
    frame = source.read_frame(0.0)
    assert frame.getpixel((159, 89)) == (0, 0, 0, 255)


def test_unknown_layer_type_is_rejected():
    with pytest.raises(UnknownLayerTypeError):
        OverlayFrameSource("confetti", 10, 10, {}, duration=1.0)


def test_close_invokes_custom_on_close():
    closed = []

    def func(**kwargs):
        return FrameSource(on_render=lambda progress, canvas: None, on_close=lambda: closed.append(1))

    source = OverlayFrameSource("fabric", 10, 10, {"func": func}, duration=1.0)
    source.close()

    assert closed == [1]


def test_custom_layer_receives_clamped_progress():
    seen = []

    def func(**kwargs):
        return {"on_render": lambda progress, canvas: seen.append(progress)}

    source = OverlayFrameSource("fabric", 10, 10, {"func": func}, duration=2.0)
    for time_s in (0.0, 1.0, 3.0):
        source.read_frame(time_s)

    assert seen == [0.0, 0.5, 1.0]


def test_render_sequence_writes_png_frames(tmp_path):
    source = OverlayFrameSource("slide-in-text", 64, 36, {"text": "Seq"}, duration=0.5)
    asset = source.render_sequence(tmp_path, fps=10, label="slide in/text")

    sequence_dir = tmp_path / "slide_in_text"
    frames = sorted(sequence_dir.glob("frame_*.png"))

    assert asset.is_sequence
    assert asset.frame_count == 5
    assert asset.fps == 10
    assert asset.duration == 0.5
    assert asset.path == str(sequence_dir / "frame_%06d.png")
    assert [f.name for f in frames] == [f"frame_{i:06d}.png" for i in range(1, 6)]
    with Image.open(frames[0]) as first:
        assert first.size == (64, 36)


@pytest.mark.parametrize("fps", [0, -5])
def test_render_sequence_rejects_non_positive_fps(tmp_path, fps):
    source = OverlayFrameSource("title", 16, 9, {"text": "x"}, duration=1.0)
    with pytest.raises(RenderError):
        source.render_sequence(tmp_path, fps=fps, label="bad")


class TestEntrypoint:
    def _write_layer(self, tmp_path, data):
        path = tmp_path / "layer.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    def test_renders_layer_file(self, tmp_path):
        layer = self._write_layer(tmp_path, {"type": "title", "text": "CLI", "zoom_direction": "out"})
        out_dir = tmp_path / "out"

        code = entrypoint.main(
            [
                "--layer", str(layer),
                "--width", "80",
                "--height", "45",
                "--duration", "0.2",
                "--fps", "10",
                "--output-dir", str(out_dir),
            ]
        )

        assert code == 0
        assert len(list((out_dir / "layer").glob("frame_*.png"))) == 2

    def test_missing_layer_file_fails(self, tmp_path):
        assert entrypoint.main(["--layer", str(tmp_path / "missing.json")]) == 1

    def test_fabric_layer_cannot_come_from_json(self, tmp_path):
        layer = self._write_layer(tmp_path, {"type": "fabric"})
        assert entrypoint.main(["--layer", str(layer), "--output-dir", str(tmp_path)]) == 1

    def test_unknown_type_fails(self, tmp_path):
        layer = self._write_layer(tmp_path, {"type": "nope", "text": "x"})
        assert entrypoint.main(["--layer", str(layer), "--output-dir", str(tmp_path)]) == 1

    def test_invalid_params_fail(self, tmp_path):
        layer = self._write_layer(tmp_path, {"type": "title", "text": "x", "zoom_amount": -1})
        assert entrypoint.main(["--layer", str(layer), "--output-dir", str(tmp_path)]) == 1

    def test_zero_fps_fails(self, tmp_path):
        layer = self._write_layer(tmp_path, {"type": "title", "text": "x"})
        assert entrypoint.main(["--layer", str(layer), "--fps", "0", "--output-dir", str(tmp_path)]) == 1

    def test_invalid_json_fails(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        assert entrypoint.main(["--layer", str(path), "--output-dir", str(tmp_path)]) == 1
