from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from ..errors import PaymentError
from ..menu import store
from ..menu.models import MenuItem
from .calculator import recompute_bill
from .models import Bill, OrderItem, OrderStatus

logger = logging.getLogger(__name__)

SESSION_KEY = "bill"

_DEMO_ORDER = [("Butter Chicken", 2), ("Naan", 3), ("Lassi", 2)]


def _line(item: MenuItem, quantity: int) -> OrderItem:
    return OrderItem(
        id=item.id,
        name=item.name,
        price=item.price,
        quantity=quantity,
        category=item.category,
    )


def demo_bill() -> Bill:
    """
    The bill a fresh session starts with.

    Lines are built from the catalog records of the same name, so adding one
    of those dishes later merges into the existing line. Dishes missing from
    the catalog are left out.
    """
    catalog = {item.name: item for item in store.list_items()}
    items = [_line(catalog[name], qty) for name, qty in _DEMO_ORDER if name in catalog]
    return recompute_bill(Bill(order_id="ORD-001", table="Table 5", items=items))


def ensure_unpaid(bill: Bill) -> Bill:
    """Raises ``PaymentError`` once the bill is paid; reset to start over."""
    if bill.status == OrderStatus.paid:
        raise PaymentError(f"Order {bill.order_id} is already paid; reset the bill to change it")
    return bill


def load_bill(session: dict[str, Any]) -> Bill:
    raw = session.get(SESSION_KEY)
    if not raw:
        return demo_bill()
    try:
        return Bill(**raw)
    except ValidationError:
        logger.warning("Discarding unreadable bill in session", exc_info=True)
        return demo_bill()


def save_bill(session: dict[str, Any], bill: Bill) -> Bill:
    session[SESSION_KEY] = bill.model_dump(mode="json")
    return bill


def add_menu_item(bill: Bill, item: MenuItem, quantity: int = 1) -> Bill:
    """Add a catalog item to the cart; an existing line has its quantity raised."""
    items = list(bill.items)
    for i, line in enumerate(items):
        if line.id == item.id:
            items[i] = OrderItem(
                id=line.id,
                name=line.name,
                price=line.price,
                quantity=line.quantity + quantity,
                category=line.category,
            )
            break
    else:
        items.append(_line(item, quantity))
    return recompute_bill(bill.model_copy(update={"items": items}))


def set_quantity(bill: Bill, item_id: str, quantity: int) -> Bill:
    """Raises ``KeyError`` when the cart has no line for ``item_id``."""
    items = list(bill.items)
    for i, line in enumerate(items):
        if line.id == item_id:
            items[i] = line.model_copy(update={"quantity": quantity})
            return recompute_bill(bill.model_copy(update={"items": items}))
    raise KeyError(item_id)


def remove_item(bill: Bill, item_id: str) -> Bill:
    items = [line for line in bill.items if line.id != item_id]
    if len(items) == len(bill.items):
        raise KeyError(item_id)
    return recompute_bill(bill.model_copy(update={"items": items}))
