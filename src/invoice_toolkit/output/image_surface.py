"""
Module: output.image_surface

Purpose:
    Drawing surface that rasterises pages with Pillow.
    Used for PNG previews of a layout without a PDF viewer.

Key Classes:
    - ImageSurface: DrawingSurface painting onto one PIL image per page

Dependencies:
    - PIL: Image, ImageDraw, ImageFont
    - table.surface: DrawingSurface
    - table.text: wrap_text

Used By:
    - scripts/render_table.py: --png-dir previews
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from PIL import Image, ImageDraw, ImageFont

from invoice_toolkit.table.config import DEFAULT_FONT_SIZE, LEADING_RATIO
from invoice_toolkit.table.models import PageMetrics, Point
from invoice_toolkit.table.surface import DrawingSurface
from invoice_toolkit.table.text import wrap_text

logger = logging.getLogger(__name__)

DEFAULT_FONT_PATH = "DejaVuSans.ttf"

# PDF standard font names and the TrueType faces drawn in their place
STANDARD_FONT_FILES = {
    "Helvetica": "DejaVuSans.ttf",
    "Helvetica-Bold": "DejaVuSans-Bold.ttf",
    "Helvetica-Oblique": "DejaVuSans-Oblique.ttf",
    "Times-Roman": "DejaVuSerif.ttf",
    "Times-Bold": "DejaVuSerif-Bold.ttf",
    "Courier": "DejaVuSansMono.ttf",
    "Courier-Bold": "DejaVuSansMono-Bold.ttf",
    "Courier-Oblique": "DejaVuSansMono-Oblique.ttf",
}


def _font_file(name: str) -> str:
    """TrueType file for a font name, or the name itself if it is a font file."""
    if name.lower().endswith((".ttf", ".otf")):
        return name
    return STANDARD_FONT_FILES.get(name, DEFAULT_FONT_PATH)


def _load_font(name: str, size_px: int) -> ImageFont.FreeTypeFont:
    path = _font_file(name)
    try:
        return ImageFont.truetype(path, size_px)
    except OSError:
        logger.debug(f"Font {path!r} not available, using Pillow default font at {size_px}px")
        return ImageFont.load_default(size=size_px)


class ImageSurface(DrawingSurface):
    """
    DrawingSurface painting onto PIL images.

    Layout units are converted to pixels with `scale`; each allocated
    page appends a new white RGB image to `pages`.

    Example:
        >>> surface = ImageSurface(PageMetrics(width=612, height=792))
        >>> surface.draw_text("Hello", 72, 72)
        >>> surface.pages[0].size
        (612, 792)
    """

    def __init__(
        self,
        metrics: PageMetrics,
        *,
        scale: float = 1.0,
        font_path: str = DEFAULT_FONT_PATH,
        font_size: float = DEFAULT_FONT_SIZE,
        background: str = "white",
    ) -> None:
        super().__init__()
        if scale <= 0:
            raise ValueError(f"scale must be positive: {scale}")
        self._metrics = metrics
        self._scale = scale
        self._background = background
        self._font_size = font_size
        self._font = _load_font(font_path, self._px(font_size))
        self._cursor = Point(metrics.margin_left, metrics.margin_top)
        self.pages: List[Image.Image] = [self._new_page()]

    def _px(self, value: float) -> int:
        return max(1, round(value * self._scale))

    def _new_page(self) -> Image.Image:
        size = (self._px(self._metrics.width), self._px(self._metrics.height))
        return Image.new("RGB", size, self._background)

    def _text_width(self, text: str) -> float:
        return self._font.getlength(text) / self._scale

    # ------------------------------------------------------------------
    # DrawingSurface
    # ------------------------------------------------------------------

    def measure_wrapped_height(self, text: str, width: float) -> float:
        return len(wrap_text(text, width, self._text_width)) * self.line_height()

    def line_height(self) -> float:
        return self._font_size * LEADING_RATIO

    def set_font(self, name: str, size: float) -> None:
        self._font_size = size
        self._font = _load_font(name, self._px(size))

    def draw_text(self, text, x, y, width=None, align="left") -> None:
        if width is None:
            width = self._metrics.width - self._metrics.margin_right - x

        draw = ImageDraw.Draw(self.pages[-1])
        lines = wrap_text(text, width, self._text_width)
        for i, line in enumerate(lines):
            if align == "center":
                left = x + (width - self._text_width(line)) / 2
            elif align == "right":
                left = x + width - self._text_width(line)
            else:
                left = x
            top = y + i * self.line_height()
            draw.text((self._px(left), self._px(top)), line, font=self._font, fill="black")

        self._cursor = Point(x, y + len(lines) * self.line_height())

    def draw_line(self, x1, y1, x2, y2, line_width=1.0, opacity=1.0) -> None:
        # RGBA draw blends the stroke onto the RGB page
        draw = ImageDraw.Draw(self.pages[-1], "RGBA")
        draw.line(
            [self._px(x1), self._px(y1), self._px(x2), self._px(y2)],
            fill=(0, 0, 0, round(255 * opacity)),
            width=self._px(line_width),
        )

    def current_cursor(self) -> Point:
        return self._cursor

    def set_cursor(self, x: float, y: float) -> None:
        self._cursor = Point(x, y)

    def page_metrics(self) -> PageMetrics:
        return self._metrics

    def _start_page(self) -> None:
        self.pages.append(self._new_page())

    def save_pngs(self, directory: Path, prefix: str = "page") -> List[Path]:
        """
        Write every page as a PNG.

        Args:
            directory: Output directory (created if missing)
            prefix: File name prefix

        Returns:
            Paths written, in page order (page_001.png, page_002.png, ...)
        """
        directory.mkdir(parents=True, exist_ok=True)
        paths = []
        for index, page in enumerate(self.pages, start=1):
            path = directory / f"{prefix}_{index:03d}.png"
            page.save(path)
            paths.append(path)
        logger.info(f"Wrote {len(paths)} page image(s) to {directory}")
        return paths
