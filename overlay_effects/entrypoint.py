#!/usr/bin/env python3
import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from overlay_effects import config
from overlay_effects.errors import OverlayEffectsError, RenderError
from overlay_effects.models import LayerType
from overlay_effects.renderer import OverlayFrameSource

logger = logging.getLogger("overlay-effects")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render a text overlay effect to a PNG sequence")
    parser.add_argument(
        "--layer",
        required=True,
        help="JSON file describing the layer: {\"type\": ..., <params>}",
    )
    parser.add_argument("--width", type=int, default=1920, help="Frame width")
    parser.add_argument("--height", type=int, default=1080, help="Frame height")
    parser.add_argument("--duration", type=float, default=4.0, help="Effect duration in seconds")
    parser.add_argument("--fps", type=float, default=config.DEFAULT_FPS, help="Output framerate")
    parser.add_argument(
        "--output-dir",
        default=config.RENDER_OUTPUT_DIR,
        help="Directory for rendered frames",
    )
    parser.add_argument("--label", default=None, help="Sequence name (defaults to the layer file stem)")
    return parser.parse_args(argv)


def load_layer(layer_path: str) -> tuple[LayerType, dict]:
    path = Path(layer_path)
    if not path.exists():
        raise RenderError(f"Layer file not found: {layer_path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise RenderError(f"Invalid layer JSON in {layer_path}") from exc
    if not isinstance(data, dict):
        raise RenderError(f"Layer file must contain a JSON object: {layer_path}")

    params = dict(data)
    layer_type = params.pop("type", None)
    try:
        kind = LayerType(layer_type)
    except ValueError as exc:
        raise RenderError(f"Unknown layer type: {layer_type}") from exc
    if kind == LayerType.FABRIC:
        raise RenderError("Custom fabric layers need a Python callable and cannot be loaded from JSON")
    return kind, params


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    args = parse_args(argv)

    try:
        layer_type, params = load_layer(args.layer)
        source = OverlayFrameSource(layer_type, args.width, args.height, params, args.duration)
        try:
            asset = source.render_sequence(
                args.output_dir,
                args.fps,
                args.label or Path(args.layer).stem,
            )
        finally:
            source.close()
    except (OverlayEffectsError, ValidationError) as e:
        logger.error(f"Render failed: {e}")
        return 1

    logger.info(f"Render complete: {asset.path} ({asset.frame_count} frames)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
