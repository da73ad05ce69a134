"""
Module: table

Purpose:
    Table layout and pagination engine.
    Computes column geometry, measures wrapped cells, decides page
    breaks and keeps the cursor continuous across pages.

Key Functions:
    - layout_table(): Draw a table on a DrawingSurface

Key Classes:
    - Table: Headers plus rows
    - LayoutOptions: Spacing, width, start position, style hooks
    - DrawingSurface: Abstract paginated canvas
    - RecordingSurface: Deterministic in-memory surface

Used By:
    - invoice_toolkit.invoice: Invoice line items
    - invoice_toolkit.output: Concrete surfaces
"""

from .config import (
    DEFAULT_COLUMN_SPACING,
    DEFAULT_ROW_SPACING,
    DEFAULT_FONT_SIZE,
    ROW_SAFETY_FACTOR,
    LayoutOptions,
    OverflowPolicy,
)
from .models import (
    ColumnGeometry,
    InvalidTableShape,
    LayoutCursor,
    PageAdded,
    PageMetrics,
    Point,
    Table,
    TableLayoutError,
)
from .surface import DrawingSurface, SurfaceUnavailable
from .recording import PaintCommand, RecordingSurface
from .engine import layout_table, RowOverflowError

__all__ = [
    # Config
    "LayoutOptions",
    "OverflowPolicy",
    "DEFAULT_COLUMN_SPACING",
    "DEFAULT_ROW_SPACING",
    "DEFAULT_FONT_SIZE",
    "ROW_SAFETY_FACTOR",
    # Models
    "Table",
    "PageMetrics",
    "Point",
    "PageAdded",
    "ColumnGeometry",
    "LayoutCursor",
    # Surfaces
    "DrawingSurface",
    "RecordingSurface",
    "PaintCommand",
    # Engine
    "layout_table",
    # Errors
    "TableLayoutError",
    "InvalidTableShape",
    "SurfaceUnavailable",
    "RowOverflowError",
]
