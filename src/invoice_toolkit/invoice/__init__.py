"""
Module: invoice

Purpose:
    Customer sale invoices rendered with the table engine.

Key Functions:
    - render_invoice(): Full invoice PDF for one sale
    - build_invoice_lines(): Price the sold items
    - invoice_table(): Lines as a Table

Key Classes:
    - SaleInfo, StoreDetails, InventoryItem, InvoiceLine
"""

from .models import InventoryItem, InvoiceLine, SaleInfo, StoreDetails
from .pricing import grand_total, line_amount, rate, round_money
from .builder import (
    INVOICE_HEADERS,
    build_invoice_lines,
    invoice_filename,
    invoice_table,
    render_invoice,
)

__all__ = [
    # Models
    "InventoryItem",
    "InvoiceLine",
    "SaleInfo",
    "StoreDetails",
    # Pricing
    "grand_total",
    "line_amount",
    "rate",
    "round_money",
    # Builder
    "INVOICE_HEADERS",
    "build_invoice_lines",
    "invoice_filename",
    "invoice_table",
    "render_invoice",
]
