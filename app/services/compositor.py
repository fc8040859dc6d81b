"""Title overlay compositor.

Draws a title, word-wrapped to 90 % of the image width, over a translucent
dark bar anchored to the bottom edge of an image:

* ``fontSize  = max(30, width // 25)``
* ``lineHeight = fontSize * 1.2``
* ``barHeight = lines * lineHeight + fontSize * 0.8`` and ``barY = height - barHeight``
* line *i* is centred horizontally with its baseline at
  ``barY + fontSize * 0.9 + i * lineHeight``

The source bytes are never modified; every call returns a freshly encoded JPEG.
"""

import io
import logging
import re
from pathlib import Path
from typing import Callable, List, NamedTuple, Optional

from PIL import Image, ImageDraw, ImageFont, UnidentifiedImageError

from app.services.errors import CanvasUnavailableError, ImageLoadError

logger = logging.getLogger(__name__)

FONT_SIZE_FLOOR = 30
FONT_SIZE_DIVISOR = 25
MAX_LINE_WIDTH_RATIO = 0.9
LINE_HEIGHT_RATIO = 1.2
BAR_PADDING_RATIO = 0.8
TEXT_OFFSET_RATIO = 0.9

BAR_FILL = (0, 0, 0, 153)  # rgba(0, 0, 0, 0.6)
TEXT_FILL = (255, 255, 255, 255)
JPEG_QUALITY = 92

# Bold sans-serif faces, tried in order before Pillow's bundled default font.
FONT_CANDIDATES = (
    "HelveticaNeue-Bold.ttf",
    "DejaVuSans-Bold.ttf",
    "LiberationSans-Bold.ttf",
    "Arial Bold.ttf",
    "arialbd.ttf",
)

# Faces with Devanagari glyphs, tried first when the title contains Devanagari
# script. Set FONT_PATH when none of them is installed.
DEVANAGARI_FONT_CANDIDATES = (
    "NotoSansDevanagari-Bold.ttf",
    "NotoSansDevanagari-Regular.ttf",
    "Lohit-Devanagari.ttf",
    "Mangal.ttf",
    "mangal.ttf",
)
_DEVANAGARI_RE = re.compile(r"[\u0900-\u097F]")

LOAD_FAILED_MESSAGE = "Failed to load image for editing."
CANVAS_UNAVAILABLE_MESSAGE = "Could not get a drawing context to add text."


class BarLayout(NamedTuple):
    font_size: int
    line_height: float
    bar_height: float
    bar_y: float
    text_start_y: float


class OverlayResult(NamedTuple):
    data: bytes
    lines: List[str]
    layout: BarLayout


def font_size_for(width: int) -> int:
    return max(FONT_SIZE_FLOOR, width // FONT_SIZE_DIVISOR)


def wrap_title(title: str, measure: Callable[[str], float], max_width: float) -> List[str]:
    """Greedily wrap *title* into lines no wider than *max_width*.

    Words are separated on single spaces. Each candidate line is measured
    with its trailing space; the first word always stays on the first line
    even when it alone overflows. The final partial line is always flushed.
    """
    words = title.split(" ")
    lines: List[str] = []
    line = ""

    for index, word in enumerate(words):
        test_line = f"{line}{word} "
        if measure(test_line) > max_width and index > 0:
            lines.append(line)
            line = f"{word} "
        else:
            line = test_line
    lines.append(line)

    return [text.strip() for text in lines]


def bar_layout(line_count: int, font_size: int, image_height: int) -> BarLayout:
    line_height = font_size * LINE_HEIGHT_RATIO
    bar_height = line_count * line_height + font_size * BAR_PADDING_RATIO
    bar_y = image_height - bar_height
    return BarLayout(
        font_size=font_size,
        line_height=line_height,
        bar_height=bar_height,
        bar_y=bar_y,
        text_start_y=bar_y + font_size * TEXT_OFFSET_RATIO,
    )


def load_font(size: int, font_path: Optional[Path] = None, text: str = "") -> ImageFont.FreeTypeFont:
    """Return a bold TrueType font of *size* pixels able to render *text*.

    *font_path* always wins. Devanagari faces are preferred when *text*
    contains Devanagari script.

    Raises:
        CanvasUnavailableError: if no scalable font can be loaded.
    """
    candidates = [str(font_path)] if font_path else []
    if _DEVANAGARI_RE.search(text):
        candidates.extend(DEVANAGARI_FONT_CANDIDATES)
    candidates.extend(FONT_CANDIDATES)

    for candidate in candidates:
        try:
            return ImageFont.truetype(candidate, size)
        except OSError:
            continue

    try:
        font = ImageFont.load_default(size=size)
    except (ImportError, OSError) as exc:
        logger.error("No scalable font available: %s", exc)
        raise CanvasUnavailableError(CANVAS_UNAVAILABLE_MESSAGE) from exc

    if not isinstance(font, ImageFont.FreeTypeFont):
        logger.error("Pillow returned a bitmap font; FreeType support is missing")
        raise CanvasUnavailableError(CANVAS_UNAVAILABLE_MESSAGE)
    return font


def open_image(source: bytes) -> Image.Image:
    """Decode *source* into a fully loaded RGBA image.

    Raises:
        ImageLoadError: if the bytes are not a readable image.
    """
    try:
        with Image.open(io.BytesIO(source)) as img:
            img.load()
            return img.convert("RGBA")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
        logger.warning("Could not decode image for title overlay: %s", exc)
        raise ImageLoadError(LOAD_FAILED_MESSAGE) from exc


def overlay_title(source: bytes, title: str, font_path: Optional[Path] = None) -> OverlayResult:
    """Return a new JPEG with *title* drawn over a bottom bar of *source*."""
    base = open_image(source)
    width, height = base.size

    font_size = font_size_for(width)
    font = load_font(font_size, font_path, title)

    bar = Image.new("RGBA", base.size, (0, 0, 0, 0))
    bar_draw = ImageDraw.Draw(bar)
    lines = wrap_title(
        title,
        lambda text: bar_draw.textlength(text, font=font),
        width * MAX_LINE_WIDTH_RATIO,
    )
    layout = bar_layout(len(lines), font_size, height)
    bar_draw.rectangle([0, layout.bar_y, width, height], fill=BAR_FILL)

    composed = Image.alpha_composite(base, bar)
    text_draw = ImageDraw.Draw(composed)
    for index, line in enumerate(lines):
        text_draw.text(
            (width / 2, layout.text_start_y + index * layout.line_height),
            line,
            font=font,
            fill=TEXT_FILL,
            anchor="ms",
        )

    out = io.BytesIO()
    composed.convert("RGB").save(out, format="JPEG", quality=JPEG_QUALITY)
    logger.info(
        "Title overlay rendered",
        extra={"width": width, "height": height, "lines": len(lines), "font_size": font_size},
    )
    return OverlayResult(out.getvalue(), lines, layout)
