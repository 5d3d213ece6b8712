from __future__ import annotations

import pytest
from PIL import Image

from overlay_effects.canvas import Drawable


@pytest.fixture
def red_block() -> Drawable:
    return Drawable(image=Image.new("RGBA", (100, 10), (255, 0, 0, 255)))
