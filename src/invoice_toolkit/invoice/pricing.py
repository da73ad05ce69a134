"""
Module: invoice.pricing

Purpose:
    Line amount and total arithmetic for invoices.

Key Functions:
    - rate(): Percent to fraction, rounded to two places
    - line_amount(): Amount after discount and GST
    - round_money(): Two-place half-up rounding for display
    - grand_total(): Sum of unrounded line amounts, rounded once
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

CENTS = Decimal("0.01")


def round_money(value: Decimal) -> Decimal:
    """Round to two decimal places, half-up."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def rate(percent: Decimal) -> Decimal:
    """
    Convert a percentage to a fraction rounded to two places.

    Example:
        >>> rate(Decimal("12.5"))
        Decimal('0.13')
    """
    return round_money(Decimal(percent) / 100)


def line_amount(price: Decimal, units: int, discount: Decimal, gst: Decimal) -> Decimal:
    """
    Amount for `units` at `price`, discounted then taxed.

    Both discount and GST apply to the gross amount (price * units),
    not to each other.

    Args:
        price: Cost per unit
        units: Units sold
        discount: Discount in percent
        gst: GST in percent

    Returns:
        Unrounded amount

    Example:
        >>> line_amount(Decimal(10), 3, Decimal(10), Decimal(5))
        Decimal('28.50')
    """
    gross = Decimal(price) * units
    amount = gross
    discount_rate = rate(discount)
    gst_rate = rate(gst)
    if discount_rate > 0:
        amount -= gross * discount_rate
    if gst_rate > 0:
        amount += gross * gst_rate
    return amount


def grand_total(amounts: Iterable[Decimal]) -> Decimal:
    """Sum unrounded amounts and round the result once."""
    return round_money(sum(amounts, Decimal(0)))
