from __future__ import annotations

from typing import Any, NamedTuple

from overlay_effects.models import PositionObject

# distance kept from the frame edges, as a fraction of the frame size
EDGE_MARGIN = 0.05


class Position(NamedTuple):
    left: float
    top: float
    origin_x: str
    origin_y: str


def position_of(position: Any, width: float, height: float) -> Position:
    origin_x = "center"
    origin_y = "center"
    left = width / 2
    top = height / 2

    if position == "top":
        origin_y = "top"
        top = height * EDGE_MARGIN
    elif position == "bottom":
        origin_y = "bottom"
        top = height * (1 - EDGE_MARGIN)
    elif position == "top-left":
        origin_x, origin_y = "left", "top"
        left = width * EDGE_MARGIN
        top = height * EDGE_MARGIN
    elif position == "top-right":
        origin_x, origin_y = "right", "top"
        left = width * (1 - EDGE_MARGIN)
        top = height * EDGE_MARGIN
    elif position == "center-left":
        origin_x = "left"
        left = width * EDGE_MARGIN
    elif position == "center-right":
        origin_x = "right"
        left = width * (1 - EDGE_MARGIN)
    elif position == "bottom-left":
        origin_x, origin_y = "left", "bottom"
        left = width * EDGE_MARGIN
        top = height * (1 - EDGE_MARGIN)
    elif position == "bottom-right":
        origin_x, origin_y = "right", "bottom"
        left = width * (1 - EDGE_MARGIN)
        top = height * (1 - EDGE_MARGIN)

    if isinstance(position, dict):
        position = PositionObject.model_validate(position)
    if isinstance(position, PositionObject):
        if position.x is not None:
            origin_x = position.origin_x or "left"
            left = width * position.x
        if position.y is not None:
            origin_y = position.origin_y or "top"
            top = height * position.y

    return Position(left=left, top=top, origin_x=origin_x, origin_y=origin_y)
