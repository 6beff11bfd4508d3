from __future__ import annotations

import pytest
from pydantic import ValidationError

from pos_backend.errors import InvalidPhoneError
from pos_backend.menu.models import MenuItemUpdate, validate_menu_item
from pos_backend.validation import digits_only, is_valid_phone, validate_phone

VALID_ITEM = {
    "name": "Masala Dosa",
    "description": "Crisp rice crepe with potato filling",
    "price": 180,
    "category": "Main Course",
    "preparation_time": 15,
}


def _error_fields(exc: ValidationError) -> set[str]:
    return {err["loc"][0] for err in exc.errors()}


# ── Phone ────────────────────────────────────────────────────────────────


class TestPhone:
    @pytest.mark.parametrize("phone", ["+14155552671", "14155552671", "+919876543210", "+12"])
    def test_accepts_e164_like(self, phone):
        assert is_valid_phone(phone)

    @pytest.mark.parametrize(
        "phone",
        ["0012345", "abc123", "", "+0123456", "+1234567890123456", "+1", "+1 415 555 2671"],
    )
    def test_rejects_malformed(self, phone):
        assert not is_valid_phone(phone)

    def test_validate_phone_trims(self):
        assert validate_phone("  +14155552671 ") == "+14155552671"

    def test_validate_phone_raises(self):
        with pytest.raises(InvalidPhoneError):
            validate_phone("0012345")

    def test_digits_only(self):
        assert digits_only("+14155552671") == "14155552671"


# ── Menu item ────────────────────────────────────────────────────────────


class TestMenuItemValidation:
    def test_valid_item_defaults(self):
        item = validate_menu_item(VALID_ITEM)
        assert item.is_available is True
        assert item.is_popular is False
        assert item.image_url == ""

    def test_strips_whitespace(self):
        item = validate_menu_item({**VALID_ITEM, "name": "  Masala Dosa  ", "category": " Main Course "})
        assert item.name == "Masala Dosa"
        assert item.category == "Main Course"

    @pytest.mark.parametrize("price", [0, -10])
    def test_rejects_non_positive_price(self, price):
        with pytest.raises(ValidationError) as exc_info:
            validate_menu_item({**VALID_ITEM, "price": price})
        assert _error_fields(exc_info.value) == {"price"}

    def test_rejects_price_too_high(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_menu_item({**VALID_ITEM, "price": 100001})
        assert _error_fields(exc_info.value) == {"price"}

    @pytest.mark.parametrize("minutes", [0, 181])
    def test_rejects_preparation_time_out_of_range(self, minutes):
        with pytest.raises(ValidationError) as exc_info:
            validate_menu_item({**VALID_ITEM, "preparation_time": minutes})
        assert _error_fields(exc_info.value) == {"preparation_time"}

    def test_rejects_fractional_preparation_time(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_menu_item({**VALID_ITEM, "preparation_time": 12.5})
        assert _error_fields(exc_info.value) == {"preparation_time"}

    def test_rejects_long_name(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_menu_item({**VALID_ITEM, "name": "x" * 101})
        assert _error_fields(exc_info.value) == {"name"}

    def test_rejects_blank_name(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_menu_item({**VALID_ITEM, "name": "   "})
        assert _error_fields(exc_info.value) == {"name"}

    def test_rejects_long_description(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_menu_item({**VALID_ITEM, "description": "d" * 501})
        assert _error_fields(exc_info.value) == {"description"}

    def test_rejects_long_category(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_menu_item({**VALID_ITEM, "category": "c" * 51})
        assert _error_fields(exc_info.value) == {"category"}

    def test_each_violation_reported_separately(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_menu_item({**VALID_ITEM, "price": 0, "preparation_time": 500, "name": "n" * 150})
        assert _error_fields(exc_info.value) == {"price", "preparation_time", "name"}

    def test_accepts_image_url(self):
        item = validate_menu_item({**VALID_ITEM, "image_url": "https://cdn.example.com/dosa.jpg"})
        assert item.image_url == "https://cdn.example.com/dosa.jpg"

    def test_rejects_bad_image_url(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_menu_item({**VALID_ITEM, "image_url": "not a url"})
        assert _error_fields(exc_info.value) == {"image_url"}
        assert "Invalid image URL" in str(exc_info.value)

    def test_empty_image_url_allowed(self):
        assert validate_menu_item({**VALID_ITEM, "image_url": ""}).image_url == ""

    def test_update_rejects_bad_price(self):
        with pytest.raises(ValidationError):
            MenuItemUpdate(price=0)

    def test_update_allows_partial(self):
        update = MenuItemUpdate(price=99)
        assert update.model_dump(exclude_unset=True) == {"price": 99}
