#!/usr/bin/env python3
"""
Render a JSON table to PDF (and optionally PNG previews).

Input format:
    {"headers": ["Name", "Qty"], "rows": [["Tea", 2], ["Milk", 1]]}

Usage:
    python scripts/render_table.py table.json -o table.pdf
    python scripts/render_table.py table.json -o table.pdf --png-dir previews/ --repeat-header
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from invoice_toolkit.output import ImageSurface, PdfCanvasSurface
from invoice_toolkit.table import (
    DEFAULT_COLUMN_SPACING,
    DEFAULT_FONT_SIZE,
    DEFAULT_ROW_SPACING,
    LayoutOptions,
    Table,
    TableLayoutError,
    layout_table,
)

logger = logging.getLogger("render_table")


def main() -> int:
    parser = argparse.ArgumentParser(description="Render a JSON table to a paginated PDF")
    parser.add_argument("input", type=Path, help="JSON file with 'headers' and 'rows'")
    parser.add_argument("-o", "--output", type=Path, default=Path("table.pdf"), help="PDF output path")
    parser.add_argument("--png-dir", type=Path, default=None, help="Also write PNG page previews here")
    parser.add_argument("--column-spacing", type=float, default=DEFAULT_COLUMN_SPACING)
    parser.add_argument("--row-spacing", type=float, default=DEFAULT_ROW_SPACING)
    parser.add_argument("--font-size", type=float, default=DEFAULT_FONT_SIZE, help="Body font size for PDF and previews")
    parser.add_argument("--repeat-header", action="store_true", help="Repeat the header on continuation pages")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        table = Table.from_mapping(json.loads(args.input.read_text(encoding="utf-8")))
    except (OSError, json.JSONDecodeError, TableLayoutError) as e:
        logger.error(f"Could not read table from {args.input}: {e}")
        return 1

    options = LayoutOptions(
        column_spacing=args.column_spacing,
        row_spacing=args.row_spacing,
        repeat_header=args.repeat_header,
    )

    pdf = PdfCanvasSurface(args.output, font_size=args.font_size)
    layout_table(pdf, table, options)
    pdf.save()
    logger.info(f"Wrote {args.output} ({pdf.page_count} page(s))")

    if args.png_dir:
        preview = ImageSurface(pdf.page_metrics(), font_size=args.font_size)
        layout_table(preview, table, options)
        if preview.page_count != pdf.page_count:
            logger.warning(
                f"Previews have {preview.page_count} page(s), PDF has {pdf.page_count}; "
                "raster glyph widths differ from the PDF font"
            )
        preview.save_pngs(args.png_dir)

    return 0


if __name__ == "__main__":
    sys.exit(main())
