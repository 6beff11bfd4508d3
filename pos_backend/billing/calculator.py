from __future__ import annotations

from typing import Iterable

from .models import Bill, BillTotals, OrderItem

# GST, fixed; applied to the gross subtotal only
TAX_RATE = 0.12


def compute_subtotal(items: Iterable[OrderItem]) -> float:
    return sum((item.line_total for item in items), 0.0)


def compute_totals(subtotal: float, discount: float, tip_percent: float) -> BillTotals:
    """
    Derive tax, tip and total for a bill.

    Tax and tip are both taken from the gross subtotal and the discount is
    applied last. A negative tip percentage counts as zero. Discounts larger
    than the bill are not clamped here; see ``check_discount``.

    Amounts are kept unrounded; receipts and payment messages format them
    to 2 dp.
    """
    tip_percent = max(0.0, tip_percent)
    tax = subtotal * TAX_RATE
    tip = subtotal * (tip_percent / 100)
    total = subtotal - discount + tax + tip
    return BillTotals(tax=tax, tip=tip, total=total)


def check_discount(subtotal: float, tax: float, discount: float) -> str | None:
    """Return a warning when the discount exceeds subtotal + tax, else None."""
    if discount > subtotal + tax:
        return (
            f"Discount {discount:.2f} exceeds the bill amount "
            f"{subtotal + tax:.2f} (subtotal + tax)"
        )
    return None


def recompute_bill(
    bill: Bill,
    tip_percent: float | None = None,
    discount: float | None = None,
) -> Bill:
    """Return a copy of ``bill`` with subtotal, tax, tip and total refreshed."""
    tip_percent = max(0.0, bill.tip_percent if tip_percent is None else tip_percent)
    discount = bill.discount if discount is None else discount

    subtotal = compute_subtotal(bill.items)
    totals = compute_totals(subtotal, discount, tip_percent)
    return bill.model_copy(update={
        "subtotal": subtotal,
        "discount": discount,
        "tip_percent": tip_percent,
        "tax": totals.tax,
        "tip": totals.tip,
        "total": totals.total,
    })
