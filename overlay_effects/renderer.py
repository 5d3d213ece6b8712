from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from PIL import Image
from pydantic import BaseModel

from overlay_effects.animation_engine import clamp
from overlay_effects.canvas import Canvas
from overlay_effects.errors import RenderError
from overlay_effects.frame_sources import create_frame_source
from overlay_effects.models import LayerType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OverlayAsset:
    path: str
    fps: float
    frame_count: int
    duration: float
    is_sequence: bool
    start_number: int = 1


def _sanitize_label(label: str) -> str:
    return re.sub(r"[^a-zA-Z0-9_.-]", "_", label)


def progress_for_time(time_s: float, duration: float) -> float:
    if duration <= 0:
        return 1.0
    return clamp(time_s / duration)


class OverlayFrameSource:
    """Renders one effect layer frame by frame onto fresh transparent canvases."""

    def __init__(
        self,
        layer_type: LayerType | str,
        width: int,
        height: int,
        params: BaseModel | Mapping[str, Any],
        duration: float,
        background: Any = None,
    ):
        self._source = create_frame_source(layer_type, width, height, params)
        self.layer_type = LayerType(layer_type)
        self.width = width
        self.height = height
        self.duration = duration
        self.background = background

    def render_progress(self, progress: float) -> Image.Image:
        canvas = Canvas(self.width, self.height, background=self.background)
        self._source.on_render(progress, canvas)
        return canvas.render()

    def read_frame(self, time_s: float) -> Image.Image:
        progress = progress_for_time(time_s, self.duration)
        logger.debug("Rendering %s at t=%.3fs (progress %.4f)", self.layer_type.value, time_s, progress)
        return self.render_progress(progress)

    def close(self) -> None:
        if self._source.on_close is not None:
            self._source.on_close()

    def render_sequence(self, output_dir: Path | str, fps: float, label: str) -> OverlayAsset:
        if fps <= 0:
            raise RenderError(f"fps must be positive, got {fps}")
        safe_label = _sanitize_label(label)
        frame_count = max(1, int(math.ceil(self.duration * fps)))

        sequence_dir = Path(output_dir) / safe_label
        sequence_dir.mkdir(parents=True, exist_ok=True)
        pattern = sequence_dir / "frame_%06d.png"

        logger.info("Rendering %d %s frames to %s", frame_count, self.layer_type.value, sequence_dir)
        for idx in range(frame_count):
            time_s = idx / fps
            frame = self.read_frame(time_s)
            frame_path = sequence_dir / f"frame_{idx + 1:06d}.png"
            frame.save(frame_path, "PNG")

        return OverlayAsset(
            path=str(pattern),
            fps=fps,
            frame_count=frame_count,
            duration=self.duration,
            is_sequence=True,
            start_number=1,
        )
