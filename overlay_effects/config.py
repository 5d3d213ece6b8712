"""Process-wide settings, read once from the environment (and ``.env``)."""
import os

from dotenv import load_dotenv

load_dotenv()

DEFAULT_FONT_FAMILY = "sans-serif"

FONT_DIR = os.getenv("OVERLAY_FONT_DIR", "").strip()
FALLBACK_FONT = os.getenv("OVERLAY_FALLBACK_FONT", "DejaVuSans.ttf").strip()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

RENDER_OUTPUT_DIR = os.getenv("RENDER_OUTPUT_DIR", "/tmp/overlay-effects")
DEFAULT_FPS = float(os.getenv("OVERLAY_FPS", "25"))
