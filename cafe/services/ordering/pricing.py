"""Line-item and order pricing.

Pure functions over ``Decimal`` values. Nothing here touches the database;
the caller supplies the menu item and any size modifier it looked up.
"""
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from cafe.core.config import settings
from cafe.services.ordering.models import OrderTotals

CENT = Decimal("0.01")
ZERO = Decimal("0")


def to_money(value) -> Decimal:
    """Round a currency value to two decimal places, half up."""
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def calculate_unit_price(
    base_price,
    size_modifier=None,
    extra_shots: int = 0,
    extra_shot_price: Optional[Decimal] = None,
) -> Decimal:
    """
    Price a single unit of a menu item.

    Args:
        base_price: Menu item base price
        size_modifier: Signed delta for the chosen size, or None if no size
            pricing applies
        extra_shots: Number of extra espresso shots
        extra_shot_price: Price per shot, defaults to the configured value

    Returns:
        Unit price, never below zero
    """
    if extra_shot_price is None:
        extra_shot_price = settings.extra_shot_price

    unit_price = Decimal(str(base_price))
    if size_modifier is not None:
        unit_price += Decimal(str(size_modifier))
    unit_price += extra_shots * Decimal(str(extra_shot_price))

    return to_money(max(unit_price, ZERO))


def calculate_line_total(unit_price: Decimal, quantity: int) -> Decimal:
    return to_money(unit_price * quantity)


def calculate_order_totals(
    line_totals: Iterable[Decimal], tax_rate: Optional[Decimal] = None
) -> OrderTotals:
    """Aggregate line totals into subtotal, tax and total."""
    if tax_rate is None:
        tax_rate = settings.tax_rate

    subtotal = to_money(sum(line_totals, ZERO))
    tax_amount = to_money(subtotal * Decimal(str(tax_rate)))
    # Total is built from the rounded tax so subtotal + tax == total exactly
    total_amount = subtotal + tax_amount

    return OrderTotals(
        subtotal=subtotal,
        tax_amount=tax_amount,
        total_amount=total_amount,
    )
