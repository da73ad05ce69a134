"""
Module: table.engine

Purpose:
    Lay out a table on a drawing surface, flowing rows onto new pages
    when vertical space runs out.

Key Functions:
    - layout_table(): Main layout entry point

Algorithm:
    1. Resolve column geometry (even split of the usable width)
    2. Before the header: if three header heights do not fit, start a page
    3. Draw the header and a 2-unit rule under it
    4. For each row: if three row heights fit below the current row top,
       move down below the last row; otherwise start a new page
    5. Draw the row and a translucent 1-unit rule under it
    6. Leave the surface cursor one line below the table

Dependencies:
    - table.config: LayoutOptions
    - table.models: Table, ColumnGeometry, LayoutCursor
    - table.surface: DrawingSurface

Used By:
    - invoice.builder: invoice line items
    - scripts/render_table.py
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence, Union

from .config import ROW_SAFETY_FACTOR, LayoutOptions, OverflowPolicy
from .models import ColumnGeometry, LayoutCursor, Table, TableLayoutError
from .surface import DrawingSurface, SurfaceUnavailable
from .text import cell_text

logger = logging.getLogger(__name__)


class RowOverflowError(TableLayoutError):
    """A row is taller than an empty page and OverflowPolicy.RAISE is set."""

    def __init__(self, row_index: Optional[int], height: float, capacity: float):
        self.row_index = row_index
        self.height = height
        self.capacity = capacity
        what = "Header" if row_index is None else f"Row {row_index}"
        super().__init__(f"{what} needs {height:.1f} units, page holds {capacity:.1f}")


def layout_table(
    surface: DrawingSurface,
    table: Union[Table, Mapping[str, Any]],
    options: Optional[LayoutOptions] = None,
) -> DrawingSurface:
    """
    Draw a table on `surface`, allocating pages as needed.

    The header is only started when three header heights fit on the
    current page. A row moves to a new page when three of its heights no
    longer fit below the top of the previous row. Headers are not
    repeated on continuation pages unless `options.repeat_header` is set.

    Args:
        surface: Drawing surface to paint on
        table: Table, or a {"headers": [...], "rows": [...]} mapping
        options: Layout options (defaults when None)

    Returns:
        The same surface, for chaining

    Raises:
        SurfaceUnavailable: If no DrawingSurface is given
        InvalidTableShape: If the table has no headers or ragged rows
        TableLayoutError: If column spacing leaves no room for text
        RowOverflowError: If a row exceeds a page under OverflowPolicy.RAISE

    Example:
        >>> surface = RecordingSurface()
        >>> _ = layout_table(surface, Table(("A", "B"), (("x", "y"),)))
        >>> surface.page_count
        1
    """
    if surface is None:
        raise SurfaceUnavailable("layout_table requires a drawing surface")
    if not isinstance(surface, DrawingSurface):
        raise SurfaceUnavailable(f"{type(surface).__name__} is not a DrawingSurface")

    if not isinstance(table, Table):
        table = Table.from_mapping(table)
    options = options or LayoutOptions()

    metrics = surface.page_metrics()
    usable_width = options.usable_width if options.usable_width is not None else metrics.available_width
    geometry = ColumnGeometry(
        column_count=table.column_count,
        usable_width=usable_width,
        column_spacing=options.column_spacing,
    )
    if geometry.column_width <= 0:
        raise TableLayoutError(
            f"Column spacing {options.column_spacing} leaves no room in "
            f"{geometry.container_width:.1f}-unit columns"
        )

    origin = surface.current_cursor()
    start_x = options.start_x if options.start_x is not None else origin.x
    cursor = LayoutCursor(
        x=start_x,
        y=options.start_y if options.start_y is not None else origin.y,
        page_bottom=metrics.page_bottom,
        margin_top=metrics.margin_top,
    )

    surface.add_page_listener(cursor.on_page_added)
    try:
        _layout(surface, table, options, geometry, cursor)
    finally:
        surface.remove_page_listener(cursor.on_page_added)

    surface.set_cursor(start_x, max(surface.current_cursor().y, cursor.row_bottom_y))
    surface.move_down()

    logger.info(
        f"Laid out {table.row_count} rows x {table.column_count} columns, "
        f"{cursor.pages_allocated} page(s) allocated"
    )
    return surface


def _layout(
    surface: DrawingSurface,
    table: Table,
    options: LayoutOptions,
    geometry: ColumnGeometry,
    cursor: LayoutCursor,
) -> None:
    if options.prepare_header:
        options.prepare_header()

    # Room for header, a first row and slack before committing to the header
    header_height = _row_height(surface, table.headers, geometry, options)
    _check_overflow(None, header_height, cursor, options)
    if cursor.y + ROW_SAFETY_FACTOR * header_height > cursor.page_bottom:
        surface.allocate_new_page()

    _draw_header(surface, table.headers, header_height, geometry, cursor, options)

    for index, row in enumerate(table.rows):
        row_height = _row_height(surface, row, geometry, options)
        _check_overflow(index, row_height, cursor, options)

        if cursor.fits(row_height, ROW_SAFETY_FACTOR):
            cursor.y = cursor.row_bottom_y + options.row_spacing
        else:
            surface.allocate_new_page()
            if options.repeat_header:
                if options.prepare_header:
                    options.prepare_header()
                header_height = _row_height(surface, table.headers, geometry, options)
                _draw_header(surface, table.headers, header_height, geometry, cursor, options)
                cursor.y = cursor.row_bottom_y + options.row_spacing

        if options.prepare_row:
            options.prepare_row(row, index)

        _draw_cells(surface, row, geometry, cursor)
        cursor.advance(row_height)
        _draw_rule(
            surface, geometry, cursor, options,
            line_width=options.row_rule_width,
            opacity=options.row_rule_opacity,
        )


def _row_height(
    surface: DrawingSurface,
    row: Sequence[object],
    geometry: ColumnGeometry,
    options: LayoutOptions,
) -> float:
    """Tallest wrapped cell plus row spacing."""
    tallest = max(
        (surface.measure_wrapped_height(cell_text(cell), geometry.column_width) for cell in row),
        default=0.0,
    )
    return tallest + options.row_spacing


def _check_overflow(
    row_index: Optional[int],
    height: float,
    cursor: LayoutCursor,
    options: LayoutOptions,
) -> None:
    if height <= cursor.capacity:
        return
    if options.overflow is OverflowPolicy.RAISE:
        raise RowOverflowError(row_index, height, cursor.capacity)
    what = "Header" if row_index is None else f"Row {row_index}"
    logger.warning(
        f"{what} overflows page: {height:.1f} units needed, "
        f"{cursor.capacity:.1f} available"
    )


def _draw_header(
    surface: DrawingSurface,
    headers: Sequence[str],
    header_height: float,
    geometry: ColumnGeometry,
    cursor: LayoutCursor,
    options: LayoutOptions,
) -> None:
    _draw_cells(surface, headers, geometry, cursor)
    cursor.advance(header_height)
    _draw_rule(surface, geometry, cursor, options, line_width=options.header_rule_width)


def _draw_cells(
    surface: DrawingSurface,
    row: Sequence[object],
    geometry: ColumnGeometry,
    cursor: LayoutCursor,
) -> None:
    for i, cell in enumerate(row):
        surface.draw_text(
            cell_text(cell),
            geometry.column_x(cursor.x, i),
            cursor.y,
            width=geometry.column_width,
            align="left",
        )


def _draw_rule(
    surface: DrawingSurface,
    geometry: ColumnGeometry,
    cursor: LayoutCursor,
    options: LayoutOptions,
    *,
    line_width: float,
    opacity: float = 1.0,
) -> None:
    """Rule half a row spacing above the current row bottom."""
    y = cursor.row_bottom_y - options.row_spacing * 0.5
    surface.draw_line(cursor.x, y, cursor.x + geometry.usable_width, y, line_width, opacity)
