"""
Gradient fade compositing.

A moving soft-edged alpha band is multiplied into a rasterized copy of a
drawable, so a slide/wipe reveal can be rendered without moving the object.
"""
from __future__ import annotations

from overlay_effects.animation_engine import clamp
from overlay_effects.canvas import BlendImage, Drawable, render_linear_gradient

# width of the soft band as a fraction of the object's width
FADE_BAND_WIDTH = 0.2

OPAQUE_WHITE = (255, 255, 255, 255)
TRANSPARENT_WHITE = (255, 255, 255, 0)


def fade_band(progress: float) -> tuple[float, float]:
    """Gradient stop offsets (opaque end, transparent end) for ``progress``."""
    start = max(0.0, progress * (1 + FADE_BAND_WIDTH) - FADE_BAND_WIDTH)
    end = min(1.0, progress * (1 + FADE_BAND_WIDTH))
    # only reachable for progress outside [0, 1]
    return clamp(start), clamp(end)


def gradient_mask(width: int, height: int, progress: float) -> Drawable:
    start, end = fade_band(progress)
    image = render_linear_gradient(
        (max(1, int(width)), max(1, int(height))),
        [(start, OPAQUE_WHITE), (end, TRANSPARENT_WHITE)],
        (0, 0, width, 0),
    )
    return Drawable(image=image)


def get_faded_object(obj: Drawable, progress: float) -> Drawable:
    gradient_mask_img = gradient_mask(obj.width, obj.height, progress).clone_as_image()
    faded_image = obj.clone_as_image()

    faded_image.filters.append(BlendImage(image=gradient_mask_img.image, mode="multiply"))
    faded_image.apply_filters()

    return faded_image
