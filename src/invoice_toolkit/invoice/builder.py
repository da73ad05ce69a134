"""
Module: invoice.builder

Purpose:
    Build a customer invoice PDF for one sale.
    Header block with store and customer details, a paginated table of
    priced lines, then the grand total below the table.

Key Functions:
    - build_invoice_lines(): Price the sold items
    - invoice_table(): Convert priced lines to a Table
    - render_invoice(): Draw the full invoice and return PDF bytes
    - invoice_filename(): Conventional file name for a sale

Dependencies:
    - reportlab (via output.PdfCanvasSurface)
    - table.engine: layout_table()

Used By:
    - Applications that store or send the PDF (out of scope here)
"""

from __future__ import annotations

import io
import logging
from decimal import Decimal
from typing import BinaryIO, Callable, List, Optional, Sequence

from invoice_toolkit.output.pdf_surface import PdfCanvasSurface
from invoice_toolkit.table import LayoutOptions, Table, layout_table

from .models import InventoryItem, InvoiceLine, SaleInfo, StoreDetails
from .pricing import grand_total, line_amount, round_money

logger = logging.getLogger(__name__)

InventoryLookup = Callable[[str], Optional[InventoryItem]]

INVOICE_HEADERS = (
    "Sno.", "M-ID", "Name", "Unit", "Cost(Rs.)", "Discount(%)", "GST(%)", "Amount(Rs.)",
)

# Page placement in points, top-down
TITLE_FONT_SIZE = 20
BODY_FONT_SIZE = 10
TOTAL_FONT_SIZE = 14
TABLE_X = 10
TABLE_Y = 150
TABLE_WIDTH = 590
DETAILS_LINE_STEP = 10


def _fmt(value: Decimal) -> str:
    """Plain decimal text without exponent or trailing zeros."""
    return format(value.normalize(), "f")


def build_invoice_lines(sale: SaleInfo, lookup: InventoryLookup) -> List[InvoiceLine]:
    """
    Price every item of a sale.

    Ids the lookup does not know are skipped; serial numbers stay
    consecutive over the lines that remain.

    Args:
        sale: Sale with parallel medicine_ids / stocks
        lookup: Returns the InventoryItem for an id, or None

    Returns:
        Priced lines in sale order
    """
    lines: List[InvoiceLine] = []
    for medicine_id, units in zip(sale.medicine_ids, sale.stocks):
        item = lookup(medicine_id)
        if item is None:
            logger.warning(f"Skipping unknown medicine {medicine_id!r} for user {sale.userid}")
            continue
        amount = line_amount(item.price, units, item.discount, item.gst)
        lines.append(InvoiceLine(serial=len(lines) + 1, item=item, units=units, amount=amount))
    return lines


def invoice_table(lines: Sequence[InvoiceLine]) -> Table:
    """Table of invoice lines under the standard invoice headers."""
    rows = [
        (
            line.serial,
            line.item.medicine_id,
            line.item.name,
            str(line.units),
            _fmt(line.item.price),
            _fmt(line.item.discount),
            _fmt(line.item.gst),
            str(round_money(line.amount)),
        )
        for line in lines
    ]
    return Table(headers=INVOICE_HEADERS, rows=rows)


def invoice_filename(sale: SaleInfo) -> str:
    return f"sell_info_{sale.userid}.pdf"


def render_invoice(
    sale: SaleInfo,
    store: StoreDetails,
    lookup: InventoryLookup,
    target: Optional[BinaryIO] = None,
) -> bytes:
    """
    Render the invoice for a sale.

    Args:
        sale: Sale to invoice
        store: Store details for the header
        lookup: Inventory lookup for medicine ids
        target: Optional binary stream that also receives the PDF

    Returns:
        PDF document bytes

    Example:
        >>> pdf = render_invoice(sale, store, catalogue.get)
        >>> Path(invoice_filename(sale)).write_bytes(pdf)
    """
    lines = build_invoice_lines(sale, lookup)
    table = invoice_table(lines)

    buffer = io.BytesIO()
    surface = PdfCanvasSurface(buffer)

    _draw_heading(surface, sale, store)

    options = LayoutOptions(
        usable_width=TABLE_WIDTH,
        start_x=TABLE_X,
        start_y=TABLE_Y,
        prepare_header=lambda: surface.set_font("Courier-Bold", BODY_FONT_SIZE),
        prepare_row=lambda row, index: surface.set_font("Courier", BODY_FONT_SIZE),
    )
    layout_table(surface, table, options)

    total = grand_total(line.amount for line in lines)
    _draw_total(surface, total)

    surface.save()
    pdf = buffer.getvalue()
    if target is not None:
        target.write(pdf)

    logger.info(
        f"Rendered invoice for user {sale.userid}: {len(lines)} lines, "
        f"total Rs. {total}, {surface.page_count} page(s)"
    )
    return pdf


def _draw_heading(surface: PdfCanvasSurface, sale: SaleInfo, store: StoreDetails) -> None:
    surface.set_font("Helvetica", TITLE_FONT_SIZE)
    surface.draw_text(store.name, 100, 15, align="center")
    surface.draw_text("Customer Invoice", 100, 35, align="center")

    surface.set_font("Helvetica", BODY_FONT_SIZE)
    customer = [
        f"Name: {sale.name}",
        f"Mobile: {sale.mobile}",
        f"Email: {sale.email}",
        f"Address: {sale.address}",
        f"Prescribed By: {sale.doctor}",
        f"Sell By: {sale.staff}",
        f"Payment Mode: {sale.payment}",
    ]
    for i, text in enumerate(customer):
        surface.draw_text(text, 50, 65 + i * DETAILS_LINE_STEP)

    details = [store.address, store.mobile, store.email, store.website, f"Gst: {store.gst_number}"]
    for i, text in enumerate(details):
        surface.draw_text(text, 200, 65 + i * DETAILS_LINE_STEP, align="right")


def _draw_total(surface: PdfCanvasSurface, total: Decimal) -> None:
    """Rule and grand total below wherever the table ended."""
    y = surface.current_cursor().y
    right = TABLE_X + TABLE_WIDTH
    surface.draw_line(TABLE_X, y, right, y)

    surface.set_font("Helvetica", TOTAL_FONT_SIZE)
    y += surface.line_height()
    if y + surface.line_height() > surface.page_metrics().page_bottom:
        surface.allocate_new_page()
        y = surface.current_cursor().y
    surface.draw_text(f"Grand Total: Rs. {total}", 50, y, width=right - 50, align="right")
