from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from pydantic import BaseModel

from overlay_effects import canvas as canvas_toolkit
from overlay_effects.animation_engine import KeyframeTrack, ease_in_out_cubic, eased_ramp
from overlay_effects.canvas import Canvas, Drawable, rect_drawable, text_drawable
from overlay_effects.errors import RenderError, UnknownLayerTypeError
from overlay_effects.fade import get_faded_object
from overlay_effects.ken_burns import get_translation_params, get_zoom_params
from overlay_effects.layout import position_of
from overlay_effects.models import (
    LAYER_MODELS,
    FabricLayer,
    LayerType,
    NewsTitleLayer,
    SlideInTextLayer,
    TitleLayer,
)

logger = logging.getLogger(__name__)

RenderCallback = Callable[[float, Canvas], None]


@dataclass(frozen=True)
class FrameSource:
    on_render: RenderCallback
    on_close: Callable[[], None] | None = None


SLIDE_IN_TEXT_TRACK = KeyframeTrack.from_pairs(
    [
        (0.1, {"opacity": 1, "text_slide": 0}),
        (0.3, {"opacity": 1, "text_slide": 1}),
        (0.8, {"opacity": 1, "text_slide": 1}),
        (0.9, {"opacity": 0, "text_slide": 1}),
    ]
)


def oversized_rect(width: float, height: float, **kwargs: Any) -> Drawable:
    # twice the frame size, centered, so it still covers the frame when rotated
    return rect_drawable(
        width * 2,
        height * 2,
        origin_x="center",
        origin_y="center",
        left=width / 2,
        top=height / 2,
        **kwargs,
    )


def title_frame_source(width: int, height: int, params: TitleLayer) -> FrameSource:
    position = params.position
    zoom_direction = params.zoom_direction
    zoom_amount = params.zoom_amount

    def on_render(progress: float, canvas: Canvas) -> None:
        min_size = min(width, height)
        font_size = round(min_size * 0.1)

        scale_factor = get_zoom_params(progress, zoom_direction, zoom_amount)
        translation = get_translation_params(progress, zoom_direction, zoom_amount)

        text_box = text_drawable(
            params.text,
            fill=params.text_color,
            font_family=params.font_family,
            font_size=font_size,
            text_align="center",
            width=width * 0.8,
        )

        # rasterize first so the scale applies to the finished text image
        text_image = text_box.clone_as_image()

        left, top, origin_x, origin_y = position_of(position, width, height)
        text_image.set(
            origin_x=origin_x,
            origin_y=origin_y,
            left=left + translation,
            top=top,
            scale_x=scale_factor,
            scale_y=scale_factor,
        )
        canvas.add(text_image)

    return FrameSource(on_render=on_render)


def news_title_frame_source(width: int, height: int, params: NewsTitleLayer) -> FrameSource:
    delay = params.delay
    speed = params.speed

    def on_render(progress: float, canvas: Canvas) -> None:
        min_size = min(width, height)
        font_size = round(min_size * 0.05)

        eased_bg_progress = eased_ramp(progress, delay, 0.0, speed, 3)
        eased_text_progress = eased_ramp(progress, delay, 0.02, speed, 4)
        eased_text_opacity_progress = eased_ramp(progress, delay, 0.07, speed, 4)

        top = height * 0.08
        padding_v = 0.07 * min_size
        padding_h = 0.03 * min_size

        text_box = text_drawable(
            params.text,
            fill=params.text_color,
            font_family=params.font_family,
            font_size=font_size,
            char_spacing=width * 0.1,
            top=top,
            left=padding_v + (eased_text_progress - 1) * width,
            opacity=eased_text_opacity_progress,
        )

        bg_width = text_box.width + padding_v * 2
        rect = rect_drawable(
            bg_width,
            text_box.height + padding_h * 2,
            fill=params.background_color,
            top=top - padding_h,
            left=(eased_bg_progress - 1) * bg_width,
        )

        canvas.add(rect)
        canvas.add(text_box)

    return FrameSource(on_render=on_render)


def slide_in_text_frame_source(width: int, height: int, params: SlideInTextLayer) -> FrameSource:
    if params.color:
        logger.warning("slide-in-text: color is deprecated, use text_color.")
    fill = params.color or params.text_color

    def on_render(progress: float, canvas: Canvas) -> None:
        font_size = round(width * params.font_size)
        left, top, origin_x, origin_y = position_of(params.position, width, height)

        text_box = text_drawable(
            params.text,
            fill=fill,
            font_family=params.font_family,
            font_size=font_size,
            char_spacing=width * params.char_spacing,
        )

        frame = SLIDE_IN_TEXT_TRACK.at(progress)

        faded_object = get_faded_object(text_box, ease_in_out_cubic(frame["text_slide"]))
        faded_object.set(
            origin_x=origin_x,
            origin_y=origin_y,
            top=top,
            left=left,
            opacity=frame["opacity"],
        )

        canvas.add(faded_object)

    return FrameSource(on_render=on_render)


def custom_fabric_frame_source(width: int, height: int, params: FabricLayer) -> FrameSource:
    result = params.func(width=width, height=height, canvas=canvas_toolkit, params=params)
    if isinstance(result, FrameSource):
        return result
    if isinstance(result, Mapping):
        on_render = result.get("on_render")
        on_close = result.get("on_close")
    else:
        on_render = getattr(result, "on_render", None)
        on_close = getattr(result, "on_close", None)
    if not callable(on_render):
        raise RenderError("Custom layer func must return an object with a callable on_render")
    return FrameSource(on_render=on_render, on_close=on_close)


FRAME_SOURCES: dict[LayerType, Callable[[int, int, Any], FrameSource]] = {
    LayerType.TITLE: title_frame_source,
    LayerType.NEWS_TITLE: news_title_frame_source,
    LayerType.SLIDE_IN_TEXT: slide_in_text_frame_source,
    LayerType.FABRIC: custom_fabric_frame_source,
}


def create_frame_source(
    layer_type: LayerType | str,
    width: int,
    height: int,
    params: BaseModel | Mapping[str, Any],
) -> FrameSource:
    try:
        kind = LayerType(layer_type)
    except ValueError as exc:
        raise UnknownLayerTypeError(f"Unknown layer type: {layer_type}") from exc

    model = LAYER_MODELS[kind]
    if not isinstance(params, model):
        params = model.model_validate(dict(params))

    logger.debug("Creating %s frame source (%dx%d)", kind.value, width, height)
    return FRAME_SOURCES[kind](width, height, params)
