"""
Module: table.surface

Purpose:
    Abstract drawing surface consumed by the layout engine.
    Any backend that can measure wrapped text, paint text and rules,
    and allocate pages can host a table.

Key Classes:
    - DrawingSurface: Abstract base class for paginated canvases
    - SurfaceUnavailable: Exception when no usable surface is given

Page Allocation Contract:
    allocate_new_page() starts the backend page, moves the cursor to the
    top-left margin and calls every registered listener with a PageAdded
    event, all before it returns. Layout state reset by a listener is
    therefore in place before the caller's next drawing call.

Dependencies:
    - abc (std)
    - table.models: PageMetrics, PageAdded, Point

Used By:
    - table.engine: layout_table()
    - table.recording: RecordingSurface
    - output: PdfCanvasSurface, ImageSurface
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from .models import PageAdded, PageMetrics, Point, TableLayoutError

logger = logging.getLogger(__name__)

PageListener = Callable[[PageAdded], None]


class SurfaceUnavailable(TableLayoutError):
    """No drawing surface was provided, or it does not implement DrawingSurface."""
    pass


class DrawingSurface(ABC):
    """
    Abstract paginated canvas with top-down coordinates.

    Subclasses implement measurement, painting, cursor access and
    `_start_page()`; page allocation and listener delivery live here so
    every backend honours the same ordering.
    """

    def __init__(self) -> None:
        self._page_listeners: List[PageListener] = []
        self._page_index = 0

    # ------------------------------------------------------------------
    # Backend capabilities
    # ------------------------------------------------------------------

    @abstractmethod
    def measure_wrapped_height(self, text: str, width: float) -> float:
        """
        Height `text` occupies when wrapped to `width` in the current font.

        Args:
            text: Text to measure
            width: Wrap width in layout units

        Returns:
            Height in layout units (0 for empty text)
        """

    @abstractmethod
    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        width: Optional[float] = None,
        align: str = "left",
    ) -> None:
        """
        Paint wrapped text with its top edge at y.

        Args:
            text: Text to paint
            x: Left edge of the text box
            y: Top edge of the text box
            width: Wrap width (None = up to the right margin)
            align: "left", "center" or "right" within the box

        Leaves the cursor at (x, y + text height).
        """

    @abstractmethod
    def draw_line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        line_width: float = 1.0,
        opacity: float = 1.0,
    ) -> None:
        """Stroke a straight rule. `opacity` applies to this stroke only."""

    @abstractmethod
    def current_cursor(self) -> Point:
        """Current drawing position."""

    @abstractmethod
    def set_cursor(self, x: float, y: float) -> None:
        """Move the drawing position."""

    @abstractmethod
    def page_metrics(self) -> PageMetrics:
        """Metrics of the active page."""

    @abstractmethod
    def line_height(self) -> float:
        """Height of one line in the current font."""

    @abstractmethod
    def set_font(self, name: str, size: float) -> None:
        """Select the font used for subsequent measurement and text."""

    @abstractmethod
    def _start_page(self) -> None:
        """Finish the active backend page and begin a new one."""

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    def allocate_new_page(self) -> None:
        """
        Start a new page and notify listeners synchronously.

        Listeners are called in registration order with a PageAdded event
        after the cursor has been moved to the new page's top-left margin.
        """
        self._start_page()
        self._page_index += 1

        metrics = self.page_metrics()
        self.set_cursor(metrics.margin_left, metrics.margin_top)
        logger.debug(f"Allocated page {self._page_index}")

        event = PageAdded(page_index=self._page_index, metrics=metrics)
        for listener in list(self._page_listeners):
            listener(event)

    def add_page_listener(self, listener: PageListener) -> None:
        """Register a callback for page allocations."""
        self._page_listeners.append(listener)

    def remove_page_listener(self, listener: PageListener) -> None:
        """Unregister a callback (no-op if it is not registered)."""
        if listener in self._page_listeners:
            self._page_listeners.remove(listener)

    @property
    def page_listeners(self) -> tuple[PageListener, ...]:
        return tuple(self._page_listeners)

    @property
    def page_index(self) -> int:
        """Index of the active page (0-indexed)."""
        return self._page_index

    @property
    def page_count(self) -> int:
        return self._page_index + 1

    # ------------------------------------------------------------------
    # Cursor helpers
    # ------------------------------------------------------------------

    @property
    def opacity(self) -> float:
        """Base opacity for drawing; rules never change it."""
        return 1.0

    def move_down(self, lines: float = 1) -> None:
        """Advance the cursor by `lines` line heights."""
        cursor = self.current_cursor()
        self.set_cursor(cursor.x, cursor.y + lines * self.line_height())
