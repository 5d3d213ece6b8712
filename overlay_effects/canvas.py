from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

import cairo
from PIL import Image, ImageChops, ImageColor, ImageDraw, ImageFont

from overlay_effects import config
from overlay_effects.animation_engine import clamp

logger = logging.getLogger(__name__)

# fabric-style default line height, as a multiple of the font size
LINE_HEIGHT = 1.16

_GENERIC_FAMILIES = {"sans-serif", "serif", "monospace", "system-ui"}

_ORIGIN_FACTORS = {"left": 0.0, "top": 0.0, "center": 0.5, "right": 1.0, "bottom": 1.0}


def parse_color(value: Any, default: tuple[int, int, int, int]) -> tuple[int, int, int, int]:
    if value is None:
        return default
    if isinstance(value, (list, tuple)):
        if len(value) == 4:
            return tuple(int(v) for v in value)  # type: ignore[return-value]
        if len(value) == 3:
            return (int(value[0]), int(value[1]), int(value[2]), default[3])
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return default
        if raw.lower() in {"transparent", "none", "clear"}:
            return (0, 0, 0, 0)
        try:
            return ImageColor.getcolor(raw, "RGBA")  # type: ignore[return-value]
        except ValueError:
            logger.warning("Unrecognized color %r, using %s", value, default)
            return default
    return default


def apply_opacity(image: Image.Image, opacity: float) -> Image.Image:
    opacity = clamp(opacity)
    if opacity >= 0.999:
        return image
    alpha = image.getchannel("A")
    alpha = alpha.point(lambda value: int(value * opacity))
    image.putalpha(alpha)
    return image


def load_font(font_family: str | None, size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    candidates: list[str] = []
    if font_family and font_family not in _GENERIC_FAMILIES:
        candidates.append(font_family)
        if config.FONT_DIR:
            base = Path(config.FONT_DIR)
            candidates.extend([str(base / font_family), str(base / f"{font_family}.ttf")])
    candidates.append(config.FALLBACK_FONT)

    for candidate in candidates:
        try:
            return ImageFont.truetype(candidate, size)
        except OSError:
            continue
    logger.debug("No TrueType font found for %r, using Pillow default", font_family)
    return ImageFont.load_default()


# =============================================================================
# FILTERS
# =============================================================================


_BLEND_MODES: dict[str, Callable[[Image.Image, Image.Image], Image.Image]] = {
    "multiply": ImageChops.multiply,
    "screen": ImageChops.screen,
    "add": ImageChops.add,
    "difference": ImageChops.difference,
    "lighter": ImageChops.lighter,
    "darker": ImageChops.darker,
}


@dataclass(frozen=True)
class BlendImage:
    """Blend another image over the drawable, band by band (alpha included)."""

    image: Image.Image
    mode: str = "multiply"

    def __post_init__(self) -> None:
        if self.mode not in _BLEND_MODES:
            raise ValueError(f"Unsupported blend mode: {self.mode}")

    def apply(self, source: Image.Image) -> Image.Image:
        other = self.image.convert("RGBA")
        if other.size != source.size:
            other = other.resize(source.size, resample=Image.BILINEAR)
        return _BLEND_MODES[self.mode](source.convert("RGBA"), other)


# =============================================================================
# DRAWABLES
# =============================================================================


@dataclass
class Drawable:
    image: Image.Image
    left: float = 0.0
    top: float = 0.0
    origin_x: str = "left"
    origin_y: str = "top"
    scale_x: float = 1.0
    scale_y: float = 1.0
    opacity: float = 1.0
    filters: list[BlendImage] = field(default_factory=list)
    _source: Image.Image = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._source = self.image

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    def set(self, **kwargs: Any) -> Drawable:
        for key, value in kwargs.items():
            if not hasattr(self, key) or key.startswith("_"):
                raise AttributeError(f"Drawable has no attribute {key!r}")
            setattr(self, key, value)
            if key == "image":
                self._source = value
        return self

    def apply_filters(self) -> Drawable:
        image = self._source
        for image_filter in self.filters:
            image = image_filter.apply(image)
        self.image = image
        return self

    def rasterize(self) -> Image.Image:
        image = self.image.copy()
        if self.scale_x != 1.0 or self.scale_y != 1.0:
            width = max(1, int(round(image.width * self.scale_x)))
            height = max(1, int(round(image.height * self.scale_y)))
            image = image.resize((width, height), resample=Image.LANCZOS)
        return apply_opacity(image, self.opacity)

    def clone_as_image(self) -> Drawable:
        return Drawable(
            image=self.rasterize(),
            left=self.left,
            top=self.top,
            origin_x=self.origin_x,
            origin_y=self.origin_y,
        )

    def bounding_origin(self) -> tuple[int, int]:
        width = self.image.width * self.scale_x
        height = self.image.height * self.scale_y
        x = self.left - width * _ORIGIN_FACTORS.get(self.origin_x, 0.0)
        y = self.top - height * _ORIGIN_FACTORS.get(self.origin_y, 0.0)
        return int(round(x)), int(round(y))


def rect_drawable(width: float, height: float, fill: Any = None, **placement: Any) -> Drawable:
    size = (max(1, int(round(width))), max(1, int(round(height))))
    color = parse_color(fill, (0, 0, 0, 255))
    return Drawable(image=Image.new("RGBA", size, color), **placement)


def _char_gap(font_size: int, char_spacing: float) -> float:
    # char_spacing is in thousandths of an em
    return font_size * char_spacing / 1000.0


def _line_width(line: str, font: ImageFont.ImageFont, gap: float) -> float:
    if not line:
        return 0.0
    if not gap:
        return font.getlength(line)
    return sum(font.getlength(ch) for ch in line) + gap * (len(line) - 1)


def _wrap_text(text: str, font: ImageFont.ImageFont, max_width: float, gap: float) -> list[str]:
    lines: list[str] = []
    for paragraph in text.splitlines() or [""]:
        words = paragraph.split(" ")
        current = words[0]
        for word in words[1:]:
            test_line = f"{current} {word}"
            if _line_width(test_line, font, gap) <= max_width:
                current = test_line
            else:
                lines.append(current)
                current = word
        lines.append(current)
    return lines


def text_drawable(
    text: str,
    fill: Any = "#ffffff",
    font_family: str | None = None,
    font_size: int = 40,
    char_spacing: float = 0.0,
    width: float | None = None,
    text_align: str = "left",
    **placement: Any,
) -> Drawable:
    """
    Render ``text`` to a tight RGBA drawable.

    When ``width`` is given the text is word-wrapped to it and the drawable
    is that wide (a textbox), or wider if a single word does not fit.
    Otherwise it is as wide as the longest line.
    """
    font_size = max(1, int(font_size))
    font = load_font(font_family or config.DEFAULT_FONT_FAMILY, font_size)
    gap = _char_gap(font_size, char_spacing)
    color = parse_color(fill, (255, 255, 255, 255))

    if width:
        lines = _wrap_text(text, font, width, gap)
    else:
        lines = text.splitlines() or [""]

    line_widths = [_line_width(line, font, gap) for line in lines]
    # a textbox grows to fit a word longer than its width
    box_width = int(math.ceil(max(width or 0, max(line_widths))))
    line_height = int(round(font_size * LINE_HEIGHT))
    box_height = line_height * len(lines)

    layer = Image.new("RGBA", (max(1, box_width), max(1, box_height)), (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)
    for idx, (line, line_width) in enumerate(zip(lines, line_widths)):
        if text_align == "center":
            x = (box_width - line_width) / 2
        elif text_align == "right":
            x = box_width - line_width
        else:
            x = 0.0
        y = idx * line_height
        if not gap:
            draw.text((x, y), line, font=font, fill=color)
            continue
        for ch in line:
            draw.text((x, y), ch, font=font, fill=color)
            x += font.getlength(ch) + gap

    return Drawable(image=layer, **placement)


def render_linear_gradient(
    size: tuple[int, int],
    color_stops: list[tuple[float, tuple[int, int, int, int]]],
    coords: tuple[float, float, float, float],
) -> Image.Image:
    """Rasterize a cairo linear gradient, returning straight (non-premultiplied) RGBA."""
    width, height = size
    surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, width, height)
    ctx = cairo.Context(surface)
    grad = cairo.LinearGradient(*coords)
    for offset, color in color_stops:
        r, g, b, a = (c / 255.0 for c in color)
        grad.add_color_stop_rgba(offset, r, g, b, a)
    ctx.rectangle(0, 0, width, height)
    ctx.set_source(grad)
    ctx.fill()
    surface.flush()
    buf = surface.get_data()
    # cairo ARGB32 is premultiplied, native-endian BGRA on little-endian hosts
    image = Image.frombuffer("RGBA", (width, height), buf, "raw", "BGRa", surface.get_stride(), 1)
    return image.copy()


class Canvas:
    """A single frame's scene: drawables composited in the order added."""

    def __init__(self, width: int, height: int, background: Any = None):
        self.width = int(width)
        self.height = int(height)
        self.background = parse_color(background, (0, 0, 0, 0))
        self.objects: list[Drawable] = []

    def add(self, *objects: Drawable) -> None:
        self.objects.extend(objects)

    def render(self) -> Image.Image:
        frame = Image.new("RGBA", (self.width, self.height), self.background)
        for obj in self.objects:
            image = obj.rasterize()
            layer = Image.new("RGBA", frame.size, (0, 0, 0, 0))
            layer.paste(image, obj.bounding_origin())
            frame = Image.alpha_composite(frame, layer)
        return frame
