"""
Module: output.pdf_surface

Purpose:
    Drawing surface backed by a ReportLab canvas.
    Works in top-down point coordinates and converts to ReportLab's
    bottom-up page space when painting.

Key Classes:
    - PdfCanvasSurface: DrawingSurface that writes a PDF

Dependencies:
    - reportlab: PDF generation, font metrics, line splitting
    - table.surface: DrawingSurface

Used By:
    - invoice.builder: render_invoice()
    - scripts/render_table.py
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, Optional, Tuple, Union

from reportlab.lib.pagesizes import letter
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from invoice_toolkit.table.config import DEFAULT_FONT_SIZE, LEADING_RATIO
from invoice_toolkit.table.models import PageMetrics, Point
from invoice_toolkit.table.surface import DrawingSurface

logger = logging.getLogger(__name__)

DEFAULT_MARGIN_PT = 72
DEFAULT_FONT = "Helvetica"


class PdfCanvasSurface(DrawingSurface):
    """
    DrawingSurface writing to a ReportLab canvas.

    Attributes:
        canvas: Underlying ReportLab canvas

    Example:
        >>> buffer = io.BytesIO()
        >>> surface = PdfCanvasSurface(buffer)
        >>> surface.draw_text("Hello", 72, 72)
        >>> surface.save()
    """

    def __init__(
        self,
        target: Union[str, Path, BinaryIO],
        *,
        pagesize: Tuple[float, float] = letter,
        margins: Optional[Tuple[float, float, float, float]] = None,
        font_name: str = DEFAULT_FONT,
        font_size: float = DEFAULT_FONT_SIZE,
    ) -> None:
        """
        Args:
            target: Output path or writable binary file object
            pagesize: (width, height) in points
            margins: (top, bottom, left, right) in points, 72 each by default
            font_name: Initial font
            font_size: Initial font size
        """
        super().__init__()
        if isinstance(target, Path):
            target.parent.mkdir(parents=True, exist_ok=True)
            target = str(target)

        width, height = pagesize
        top, bottom, left, right = margins or (DEFAULT_MARGIN_PT,) * 4
        self._metrics = PageMetrics(
            width=width,
            height=height,
            margin_top=top,
            margin_bottom=bottom,
            margin_left=left,
            margin_right=right,
        )
        self.canvas = canvas.Canvas(target, pagesize=pagesize)
        self._cursor = Point(left, top)
        self._font_name = font_name
        self._font_size = font_size
        self.canvas.setFont(font_name, font_size)

    # ------------------------------------------------------------------
    # Measurement
    # ------------------------------------------------------------------

    def _split(self, text: str, width: float) -> list[str]:
        if not text:
            return []
        return simpleSplit(text, self._font_name, self._font_size, width)

    def measure_wrapped_height(self, text: str, width: float) -> float:
        return len(self._split(text, width)) * self.line_height()

    def line_height(self) -> float:
        return self._font_size * LEADING_RATIO

    def set_font(self, name: str, size: float) -> None:
        self._font_name = name
        self._font_size = size
        self.canvas.setFont(name, size)

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------

    def draw_text(self, text, x, y, width=None, align="left") -> None:
        if width is None:
            width = self._metrics.width - self._metrics.margin_right - x

        ascent = pdfmetrics.getAscent(self._font_name, self._font_size)
        lines = self._split(text, width)
        for i, line in enumerate(lines):
            baseline = self._to_pdf_y(y + i * self.line_height() + ascent)
            if align == "center":
                self.canvas.drawCentredString(x + width / 2, baseline, line)
            elif align == "right":
                self.canvas.drawRightString(x + width, baseline, line)
            else:
                self.canvas.drawString(x, baseline, line)

        self._cursor = Point(x, y + len(lines) * self.line_height())

    def draw_line(self, x1, y1, x2, y2, line_width=1.0, opacity=1.0) -> None:
        c = self.canvas
        c.saveState()
        c.setLineWidth(line_width)
        c.setStrokeAlpha(opacity)
        c.line(x1, self._to_pdf_y(y1), x2, self._to_pdf_y(y2))
        c.restoreState()

    def _to_pdf_y(self, y_top: float) -> float:
        """Convert a top-down y to ReportLab's bottom-up y."""
        return self._metrics.height - y_top

    # ------------------------------------------------------------------
    # Cursor and pages
    # ------------------------------------------------------------------

    def current_cursor(self) -> Point:
        return self._cursor

    def set_cursor(self, x: float, y: float) -> None:
        self._cursor = Point(x, y)

    def page_metrics(self) -> PageMetrics:
        return self._metrics

    def _start_page(self) -> None:
        self.canvas.showPage()
        # showPage() resets the graphics state
        self.canvas.setFont(self._font_name, self._font_size)

    def save(self) -> None:
        """Finish the document and write it to the target."""
        self.canvas.save()
        logger.info(f"Saved PDF with {self.page_count} page(s)")
