"""
Pydantic models for overlay effect layers.

This module defines the static parameters each frame source is built from:
- Layer type enumeration used for dispatch
- Ken-Burns zoom/pan settings
- Per-effect layer parameters (title, news title, slide-in text, custom)
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from overlay_effects.config import DEFAULT_FONT_FAMILY


# =============================================================================
# ENUMS
# =============================================================================


class LayerType(str, Enum):
    """Effect types a frame source can be created for."""

    TITLE = "title"
    NEWS_TITLE = "news-title"
    SLIDE_IN_TEXT = "slide-in-text"
    FABRIC = "fabric"  # Caller-supplied render logic


class ZoomDirection(str, Enum):
    """Ken-Burns movement direction."""

    LEFT = "left"  # Pan right-to-left at a fixed zoom
    RIGHT = "right"  # Pan left-to-right at a fixed zoom
    IN = "in"
    OUT = "out"


PositionName = Literal[
    "center",
    "top",
    "bottom",
    "top-left",
    "top-right",
    "center-left",
    "center-right",
    "bottom-left",
    "bottom-right",
]

OriginX = Literal["left", "center", "right"]
OriginY = Literal["top", "center", "bottom"]


# =============================================================================
# SHARED SETTINGS
# =============================================================================


class PositionObject(BaseModel):
    """Explicit position as fractions of the frame size."""

    x: float | None = Field(default=None, description="Horizontal position (0-1)")
    y: float | None = Field(default=None, description="Vertical position (0-1)")
    origin_x: OriginX | None = Field(default=None, description="Horizontal anchor")
    origin_y: OriginY | None = Field(default=None, description="Vertical anchor")


Position = Union[PositionName, PositionObject]


class KenBurns(BaseModel):
    """Zoom/pan settings for the Ken-Burns effect."""

    zoom_direction: ZoomDirection | None = Field(default=None)
    zoom_amount: float = Field(default=0.1, ge=0)


# =============================================================================
# LAYERS
# =============================================================================


class TitleLayer(KenBurns):
    text: str
    text_color: str = Field(default="#ffffff")
    font_family: str = Field(default=DEFAULT_FONT_FAMILY)
    position: Position = Field(default="center")
    zoom_direction: ZoomDirection | None = Field(default=ZoomDirection.IN)
    zoom_amount: float = Field(default=0.2, ge=0)


class NewsTitleLayer(BaseModel):
    text: str
    text_color: str = Field(default="#ffffff")
    background_color: str = Field(default="#d02a42")
    font_family: str = Field(default=DEFAULT_FONT_FAMILY)
    delay: float = Field(default=0.0, description="Progress before the bar starts moving")
    speed: float = Field(default=1.0, gt=0)


class SlideInTextLayer(BaseModel):
    text: str
    font_size: float = Field(default=0.05, gt=0, description="Font size relative to frame width")
    char_spacing: float = Field(default=0.1, description="Letter spacing relative to frame width")
    text_color: str = Field(default="#ffffff")
    color: str | None = Field(default=None, description="Deprecated alias of text_color")
    font_family: str = Field(default=DEFAULT_FONT_FAMILY)
    position: Position = Field(default="center")


class FabricLayer(BaseModel):
    """Custom layer; ``func`` builds the frame source itself."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    func: Callable[..., Any]


LAYER_MODELS: dict[LayerType, type[BaseModel]] = {
    LayerType.TITLE: TitleLayer,
    LayerType.NEWS_TITLE: NewsTitleLayer,
    LayerType.SLIDE_IN_TEXT: SlideInTextLayer,
    LayerType.FABRIC: FabricLayer,
}
