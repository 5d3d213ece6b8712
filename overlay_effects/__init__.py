"""
Per-frame text overlay effects.

Builds frame sources for title, news-title, slide-in-text and custom layers
and renders them onto transparent frames.

Usage:
    from overlay_effects import OverlayFrameSource

    source = OverlayFrameSource(
        "title",
        width=1920,
        height=1080,
        params={"text": "Hello", "zoom_direction": "in"},
        duration=4.0,
    )
    frame = source.read_frame(1.5)
"""

from .animation_engine import (
    Keyframe,
    KeyframeTrack,
    ease_in_out_cubic,
    ease_out_expo,
    interpolate_keyframes,
)
from .canvas import Canvas, Drawable
from .errors import KeyframeError, OverlayEffectsError, RenderError, UnknownLayerTypeError
from .fade import get_faded_object
from .frame_sources import FrameSource, create_frame_source
from .ken_burns import get_translation_params, get_zoom_params
from .layout import position_of
from .models import LayerType, ZoomDirection
from .renderer import OverlayAsset, OverlayFrameSource

__all__ = [
    "Keyframe",
    "KeyframeTrack",
    "ease_in_out_cubic",
    "ease_out_expo",
    "interpolate_keyframes",
    "Canvas",
    "Drawable",
    "KeyframeError",
    "OverlayEffectsError",
    "RenderError",
    "UnknownLayerTypeError",
    "get_faded_object",
    "FrameSource",
    "create_frame_source",
    "get_translation_params",
    "get_zoom_params",
    "position_of",
    "LayerType",
    "ZoomDirection",
    "OverlayAsset",
    "OverlayFrameSource",
]
