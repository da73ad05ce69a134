"""
Module: table.models

Purpose:
    Data models for table layout.
    The table itself, page metrics, the page-added event, derived
    column geometry and the mutable cursor owned by one layout pass.

Key Classes:
    - Table: Headers plus rows of cells
    - PageMetrics: Page size and margins
    - Point: Cursor position
    - PageAdded: Event emitted when a surface allocates a page
    - ColumnGeometry: Evenly divided column widths and offsets
    - LayoutCursor: Mutable per-call layout state

Key Exceptions:
    - TableLayoutError: Base class for layout failures
    - InvalidTableShape: Headers missing or row length mismatch

Dependencies:
    - dataclasses (std)
    - table.config: ROW_SAFETY_FACTOR

Used By:
    - table.engine: layout_table()
    - table.surface: DrawingSurface
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence

from .config import ROW_SAFETY_FACTOR


class TableLayoutError(Exception):
    """Error while laying out a table."""
    pass


class InvalidTableShape(TableLayoutError, ValueError):
    """Table has no headers or a row does not match the header count."""
    pass


def _normalize_rows(rows: Iterable[Sequence[object]]) -> tuple[tuple[object, ...], ...]:
    normalized = []
    for index, row in enumerate(rows):
        # str is a Sequence but never a row
        if isinstance(row, (str, bytes)):
            raise InvalidTableShape(f"Row {index} is a string, expected a sequence of cells")
        normalized.append(tuple(row))
    return tuple(normalized)


@dataclass(frozen=True)
class Table:
    """
    Table to lay out (immutable).

    Headers define the column count for the whole table. Cells may be any
    stringifiable value; None renders as an empty cell.

    Attributes:
        headers: Column header labels
        rows: Data rows, each with one cell per header

    Raises:
        InvalidTableShape: If there are no headers or a row has the wrong length

    Example:
        >>> table = Table(headers=("Name", "Qty"), rows=(("Tea", 2),))
        >>> table.column_count
        2
    """

    headers: tuple[str, ...]
    rows: tuple[tuple[object, ...], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", tuple(str(h) for h in self.headers))
        object.__setattr__(self, "rows", _normalize_rows(self.rows))

        if not self.headers:
            raise InvalidTableShape("Table must have at least one header")
        for index, row in enumerate(self.rows):
            if len(row) != len(self.headers):
                raise InvalidTableShape(
                    f"Row {index} has {len(row)} cells, expected {len(self.headers)}"
                )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Table":
        """
        Build a table from a {"headers": [...], "rows": [[...], ...]} mapping.

        Raises:
            InvalidTableShape: If "headers" is missing or the shape is invalid
        """
        if "headers" not in data:
            raise InvalidTableShape("Table mapping has no 'headers' key")
        return cls(headers=tuple(data["headers"]), rows=_normalize_rows(data.get("rows") or ()))

    @property
    def column_count(self) -> int:
        """Number of columns (header count)."""
        return len(self.headers)

    @property
    def row_count(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class PageMetrics:
    """
    Page size and margins in layout units (immutable).

    Coordinates are top-down: y = 0 is the top edge of the page.

    Example:
        >>> metrics = PageMetrics(width=612, height=792)
        >>> metrics.page_bottom
        720
    """

    width: float
    height: float
    margin_top: float = 72
    margin_bottom: float = 72
    margin_left: float = 72
    margin_right: float = 72

    def __post_init__(self) -> None:
        """Validate metrics on construction."""
        if self.width <= 0:
            raise ValueError(f"width must be positive: {self.width}")
        if self.height <= 0:
            raise ValueError(f"height must be positive: {self.height}")
        if self.available_width <= 0:
            raise ValueError("Margins exceed page width")
        if self.available_height <= 0:
            raise ValueError("Margins exceed page height")

    @property
    def available_width(self) -> float:
        """Width available for content (excluding margins)."""
        return self.width - self.margin_left - self.margin_right

    @property
    def available_height(self) -> float:
        """Height available for content (excluding margins)."""
        return self.height - self.margin_top - self.margin_bottom

    @property
    def page_bottom(self) -> float:
        """Lowest y content may reach (top of the bottom margin)."""
        return self.height - self.margin_bottom


@dataclass(frozen=True)
class Point:
    """Cursor position on the active page."""

    x: float
    y: float


@dataclass(frozen=True)
class PageAdded:
    """
    Event delivered synchronously when a surface allocates a new page.

    Listeners run before allocate_new_page() returns, so any state they
    reset is in place before the next drawing call.

    Attributes:
        page_index: Index of the new page (0-indexed)
        metrics: Metrics of the new page
    """

    page_index: int
    metrics: PageMetrics


@dataclass(frozen=True)
class ColumnGeometry:
    """
    Evenly divided column geometry (derived, immutable).

    Every column gets the same container; text wraps inside the
    container minus the column spacing.

    Example:
        >>> geometry = ColumnGeometry(column_count=2, usable_width=200, column_spacing=15)
        >>> geometry.container_width, geometry.column_width
        (100.0, 85.0)
    """

    column_count: int
    usable_width: float
    column_spacing: float

    @property
    def container_width(self) -> float:
        return self.usable_width / self.column_count

    @property
    def column_width(self) -> float:
        """Width text is wrapped to."""
        return self.container_width - self.column_spacing

    def column_x(self, start_x: float, index: int) -> float:
        """Left edge of column `index` for a table starting at start_x."""
        return start_x + index * self.container_width


@dataclass
class LayoutCursor:
    """
    Mutable layout state for one layout_table() call.

    Attributes:
        x: Left edge of the table
        y: Top of the row being drawn
        page_bottom: Lowest y content may reach on the current page
        margin_top: Top margin of the current page
        row_bottom_y: Lowest point reached by the last drawn row or header
        pages_allocated: Pages allocated while this cursor was registered
    """

    x: float
    y: float
    page_bottom: float
    margin_top: float
    row_bottom_y: float = 0.0
    pages_allocated: int = 0

    def on_page_added(self, event: PageAdded) -> None:
        """Reset to the top of the new page."""
        self.y = event.metrics.margin_top
        self.margin_top = event.metrics.margin_top
        self.page_bottom = event.metrics.page_bottom
        self.row_bottom_y = 0.0
        self.pages_allocated += 1

    def fits(self, height: float, safety_factor: int = ROW_SAFETY_FACTOR) -> bool:
        """True if `safety_factor` rows of `height` fit below y."""
        return self.y + safety_factor * height < self.page_bottom

    def advance(self, height: float) -> None:
        """Record a row of `height` drawn at y."""
        self.row_bottom_y = max(self.y + height, self.row_bottom_y)

    @property
    def capacity(self) -> float:
        """Vertical space of an empty page."""
        return self.page_bottom - self.margin_top
