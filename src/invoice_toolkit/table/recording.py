"""
Module: table.recording

Purpose:
    In-memory drawing surface that records paint commands.
    Uses fixed-pitch metrics so layouts are deterministic: handy for
    dry runs (how many pages will this table take?) and for tests.

Key Classes:
    - RecordingSurface: DrawingSurface that records instead of painting
    - PaintCommand: One recorded operation

Dependencies:
    - table.surface: DrawingSurface
    - table.text: wrap_text
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .models import PageMetrics, Point
from .surface import DrawingSurface
from .text import wrap_text

# US Letter in points, 1 inch margins
LETTER_METRICS = PageMetrics(width=612, height=792)

CHAR_WIDTH_RATIO = 0.6
LINE_HEIGHT_RATIO = 1.2


@dataclass(frozen=True)
class PaintCommand:
    """
    A recorded surface operation.

    Attributes:
        op: "text", "line", "font" or "page"
        args: Operation arguments
        page: Page index the command was issued on
        opacity: Surface opacity when the command was issued
    """

    op: str
    args: tuple
    page: int
    opacity: float = 1.0


class RecordingSurface(DrawingSurface):
    """
    Deterministic surface recording every paint command.

    Every glyph is `0.6 * font_size` wide and a line is
    `1.2 * font_size` tall, so with the default 10-unit font a
    character is 6 units and a line 12 units.

    Example:
        >>> surface = RecordingSurface()
        >>> surface.measure_wrapped_height("hello", 100)
        12.0
    """

    def __init__(
        self,
        metrics: Optional[PageMetrics] = None,
        *,
        font_name: str = "Helvetica",
        font_size: float = 10,
    ) -> None:
        super().__init__()
        self._metrics = metrics or LETTER_METRICS
        self._font = (font_name, font_size)
        self._cursor = Point(self._metrics.margin_left, self._metrics.margin_top)
        self._opacity = 1.0
        self.commands: List[PaintCommand] = []

    def _record(self, op: str, *args: object) -> None:
        self.commands.append(PaintCommand(op, tuple(args), self.page_index, self._opacity))

    def _text_width(self, text: str) -> float:
        return len(text) * self._font[1] * CHAR_WIDTH_RATIO

    def measure_wrapped_height(self, text: str, width: float) -> float:
        return len(wrap_text(text, width, self._text_width)) * self.line_height()

    def draw_text(self, text, x, y, width=None, align="left") -> None:
        if width is None:
            width = self._metrics.width - self._metrics.margin_right - x
        self._record("text", text, x, y, width, align)
        self._cursor = Point(x, y + self.measure_wrapped_height(text, width))

    def draw_line(self, x1, y1, x2, y2, line_width=1.0, opacity=1.0) -> None:
        previous = self._opacity
        self._opacity = opacity
        self._record("line", x1, y1, x2, y2, line_width)
        self._opacity = previous

    def current_cursor(self) -> Point:
        return self._cursor

    def set_cursor(self, x: float, y: float) -> None:
        self._cursor = Point(x, y)

    def page_metrics(self) -> PageMetrics:
        return self._metrics

    def line_height(self) -> float:
        return self._font[1] * LINE_HEIGHT_RATIO

    def set_font(self, name: str, size: float) -> None:
        self._font = (name, size)
        self._record("font", name, size)

    def _start_page(self) -> None:
        # Recorded with the index of the page being left
        self._record("page")

    @property
    def opacity(self) -> float:
        return self._opacity

    def commands_of(self, op: str) -> List[PaintCommand]:
        """Recorded commands of one kind, in order."""
        return [c for c in self.commands if c.op == op]
