from __future__ import annotations

import logging
import threading
import uuid

from .models import MenuItem, MenuItemCreate, MenuItemUpdate

logger = logging.getLogger(__name__)

_items: dict[str, MenuItem] = {}
_lock = threading.Lock()

_DEMO_MENU: list[dict] = [
    {"name": "Paneer Tikka", "description": "Char-grilled cottage cheese with peppers",
     "price": 260, "category": "Starters", "preparation_time": 15, "is_popular": True},
    {"name": "Butter Chicken", "description": "Chicken in a creamy tomato gravy",
     "price": 320, "category": "Main Course", "preparation_time": 25, "is_popular": True},
    {"name": "Dal Makhani", "description": "Slow-cooked black lentils",
     "price": 240, "category": "Main Course", "preparation_time": 20},
    {"name": "Naan", "description": "Tandoor-baked flatbread",
     "price": 80, "category": "Main Course", "preparation_time": 8},
    {"name": "Gulab Jamun", "description": "Milk dumplings in rose syrup",
     "price": 110, "category": "Desserts", "preparation_time": 5},
    {"name": "Lassi", "description": "Sweet yoghurt drink",
     "price": 120, "category": "Beverages", "preparation_time": 5},
]


def list_items() -> list[MenuItem]:
    """Return the catalog ordered by name."""
    with _lock:
        return sorted(_items.values(), key=lambda item: item.name)


def get_item(item_id: str) -> MenuItem:
    """Return one item. Raises ``KeyError`` for an unknown id."""
    with _lock:
        return _items[item_id]


def add_item(data: MenuItemCreate) -> MenuItem:
    item = MenuItem(id=str(uuid.uuid4()), **data.model_dump())
    with _lock:
        _items[item.id] = item
    logger.info("Menu item added: %s (%s)", item.name, item.id)
    return item


def update_item(item_id: str, updates: MenuItemUpdate) -> MenuItem:
    changes = updates.model_dump(exclude_unset=True, exclude_none=True)
    with _lock:
        current = _items[item_id]
        # Re-validate the merged record so a bad combination never lands
        updated = MenuItem.model_validate({**current.model_dump(), **changes})
        _items[item_id] = updated
    logger.info("Menu item updated: %s (%s)", updated.name, item_id)
    return updated


def delete_item(item_id: str) -> None:
    with _lock:
        del _items[item_id]
    logger.info("Menu item deleted: %s", item_id)


def toggle_availability(item_id: str) -> MenuItem:
    with _lock:
        current = _items[item_id]
    return update_item(item_id, MenuItemUpdate(is_available=not current.is_available))


def filter_items(
    items: list[MenuItem],
    search: str | None = None,
    category: str | None = None,
) -> list[MenuItem]:
    """Case-insensitive name search plus exact category; ``"all"`` means any."""
    needle = (search or "").strip().lower()
    result = []
    for item in items:
        if needle and needle not in item.name.lower():
            continue
        if category and category != "all" and item.category != category:
            continue
        result.append(item)
    return result


def clear_menu() -> None:
    with _lock:
        _items.clear()


def seed_demo_menu() -> None:
    """Pre-seed a demo catalog when the store is empty."""
    if _items:
        return
    for raw in _DEMO_MENU:
        add_item(MenuItemCreate(**raw))


seed_demo_menu()
