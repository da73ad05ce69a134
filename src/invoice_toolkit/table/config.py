"""
Module: table.config

Purpose:
    Options for a single table layout pass.
    Spacing, width, start position, style hooks and overflow handling.

Key Classes:
    - LayoutOptions: Immutable per-call layout options
    - OverflowPolicy: What to do with rows taller than a page

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - table.engine: layout_table()
    - invoice.builder: invoice table placement
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence


DEFAULT_COLUMN_SPACING = 15
DEFAULT_ROW_SPACING = 5

# Rows (or header) of room required below the cursor before drawing one
ROW_SAFETY_FACTOR = 3

# Text defaults shared by the PDF and raster surfaces
DEFAULT_FONT_SIZE = 12
LEADING_RATIO = 1.2

# Rules drawn under the header and under each data row
DEFAULT_HEADER_RULE_WIDTH = 2.0
DEFAULT_ROW_RULE_WIDTH = 1.0
DEFAULT_ROW_RULE_OPACITY = 0.7


class OverflowPolicy(Enum):
    """
    Handling of a row whose height exceeds a whole page.

    DRAW: log a warning and draw it anyway (spills past the bottom margin)
    RAISE: raise RowOverflowError before drawing the row
    """
    DRAW = "draw"
    RAISE = "raise"


HeaderHook = Callable[[], None]
RowHook = Callable[[Sequence[object], int], None]


@dataclass(frozen=True)
class LayoutOptions:
    """
    Options for laying out one table (immutable).

    Attributes:
        column_spacing: Horizontal gap reserved at the right of each column
        row_spacing: Vertical gap between rows
        usable_width: Total table width (None = page width minus margins)
        start_x: Left edge of the table (None = surface cursor x)
        start_y: Top of the table (None = surface cursor y)
        prepare_header: Style hook called before the header is measured and drawn
        prepare_row: Style hook called with (row, index) before each row is drawn
        repeat_header: Redraw the header at the top of continuation pages
        overflow: Policy for rows taller than a page
        header_rule_width: Line width of the rule under the header
        row_rule_width: Line width of the rule under each row
        row_rule_opacity: Opacity of the rule under each row

    Example:
        >>> options = LayoutOptions(usable_width=590, start_x=10, start_y=150)
        >>> options.column_spacing
        15
    """

    column_spacing: float = DEFAULT_COLUMN_SPACING
    row_spacing: float = DEFAULT_ROW_SPACING
    usable_width: Optional[float] = None
    start_x: Optional[float] = None
    start_y: Optional[float] = None

    # Style hooks
    prepare_header: Optional[HeaderHook] = None
    prepare_row: Optional[RowHook] = None

    # Pagination behavior
    repeat_header: bool = False
    overflow: OverflowPolicy = OverflowPolicy.DRAW

    # Rules
    header_rule_width: float = DEFAULT_HEADER_RULE_WIDTH
    row_rule_width: float = DEFAULT_ROW_RULE_WIDTH
    row_rule_opacity: float = DEFAULT_ROW_RULE_OPACITY

    def __post_init__(self) -> None:
        """Validate options on construction."""
        if self.column_spacing < 0:
            raise ValueError(f"column_spacing must be non-negative: {self.column_spacing}")
        if self.row_spacing < 0:
            raise ValueError(f"row_spacing must be non-negative: {self.row_spacing}")
        if self.usable_width is not None and self.usable_width <= 0:
            raise ValueError(f"usable_width must be positive: {self.usable_width}")
        if not 0.0 <= self.row_rule_opacity <= 1.0:
            raise ValueError(f"row_rule_opacity must be within [0, 1]: {self.row_rule_opacity}")
        if self.header_rule_width < 0 or self.row_rule_width < 0:
            raise ValueError("Rule widths must be non-negative")
