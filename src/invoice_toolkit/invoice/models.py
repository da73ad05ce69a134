"""
Module: invoice.models

Purpose:
    Data models for a sale invoice.

Key Classes:
    - InventoryItem: Catalogue entry for a medicine
    - SaleInfo: Customer, staff and purchased items of one sale
    - StoreDetails: Store block printed on the invoice
    - InvoiceLine: One priced line of the invoice table
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List


@dataclass(frozen=True)
class InventoryItem:
    """
    Catalogue entry looked up by medicine id.

    Attributes:
        medicine_id: Inventory identifier
        name: Display name
        price: Cost per unit
        discount: Discount in percent
        gst: GST in percent
    """

    medicine_id: str
    name: str
    price: Decimal
    discount: Decimal = Decimal(0)
    gst: Decimal = Decimal(0)

    def __post_init__(self) -> None:
        for attr in ("price", "discount", "gst"):
            value = getattr(self, attr)
            if not isinstance(value, Decimal):
                object.__setattr__(self, attr, Decimal(str(value)))
        if self.price < 0:
            raise ValueError(f"price must be non-negative: {self.price}")


@dataclass(frozen=True)
class SaleInfo:
    """
    One sale: who bought what.

    `medicine_ids` and `stocks` are parallel lists (id and units sold).
    """

    userid: str
    name: str
    mobile: str = ""
    email: str = ""
    address: str = ""
    doctor: str = ""
    staff: str = ""
    payment: str = ""
    medicine_ids: List[str] = field(default_factory=list)
    stocks: List[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.medicine_ids) != len(self.stocks):
            raise ValueError(
                f"medicine_ids ({len(self.medicine_ids)}) and stocks "
                f"({len(self.stocks)}) must have the same length"
            )


@dataclass(frozen=True)
class StoreDetails:
    """Store identity printed in the invoice header."""

    name: str
    address: str = ""
    mobile: str = ""
    email: str = ""
    website: str = ""
    gst_number: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Store name must not be empty")


@dataclass(frozen=True)
class InvoiceLine:
    """
    Priced invoice line.

    Attributes:
        serial: 1-based line number
        item: Inventory entry
        units: Units sold
        amount: Unrounded line amount after discount and GST
    """

    serial: int
    item: InventoryItem
    units: int
    amount: Decimal
