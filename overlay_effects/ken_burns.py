"""
Ken Burns zoom/pan parameters.

Both functions are pure in ``progress``; callers pass progress already
clamped to [0, 1].
"""
from __future__ import annotations

from overlay_effects.models import ZoomDirection

DEFAULT_ZOOM_AMOUNT = 0.1

# fixed framing for horizontal pans, leaves room to travel
PAN_BASE_SCALE = 1.3

# zoom amount -> travel distance in pixels
TRANSLATION_RANGE_FACTOR = 1000


def get_zoom_params(
    progress: float,
    zoom_direction: ZoomDirection | str | None,
    zoom_amount: float = DEFAULT_ZOOM_AMOUNT,
) -> float:
    if zoom_direction in (ZoomDirection.LEFT, ZoomDirection.RIGHT):
        return PAN_BASE_SCALE + zoom_amount
    if zoom_direction == ZoomDirection.IN:
        return 1 + zoom_amount * progress
    if zoom_direction == ZoomDirection.OUT:
        return 1 + zoom_amount * (1 - progress)
    return 1.0


def get_translation_params(
    progress: float,
    zoom_direction: ZoomDirection | str | None,
    zoom_amount: float = DEFAULT_ZOOM_AMOUNT,
) -> float:
    travel = zoom_amount * TRANSLATION_RANGE_FACTOR

    if zoom_direction == ZoomDirection.RIGHT:
        return progress * travel - travel / 2
    if zoom_direction == ZoomDirection.LEFT:
        return -(progress * travel - travel / 2)
    return 0.0
