from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, HttpUrl, TypeAdapter, field_validator

KNOWN_CATEGORIES = ("Starters", "Main Course", "Desserts", "Beverages")

_URL_ADAPTER = TypeAdapter(HttpUrl)


def _check_image_url(value: str | None) -> str:
    if not value:
        return ""
    try:
        _URL_ADAPTER.validate_python(value)
    except ValueError:
        raise ValueError("Invalid image URL") from None
    return value


class MenuItemCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(default="", max_length=500)
    price: float = Field(..., gt=0, le=100000)
    category: str = Field(..., min_length=1, max_length=50)
    preparation_time: int = Field(..., ge=1, le=180, description="Minutes")
    is_popular: bool = False
    is_available: bool = True
    image_url: str = ""

    @field_validator("name", "description", "category", mode="before")
    @classmethod
    def _strip(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("image_url", mode="before")
    @classmethod
    def _image_url(cls, v: Any) -> Any:
        if v is None or isinstance(v, str):
            return _check_image_url(v.strip() if v else v)
        return v


class MenuItemUpdate(BaseModel):
    """Partial update; only the fields that are set get applied."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    price: float | None = Field(default=None, gt=0, le=100000)
    category: str | None = Field(default=None, min_length=1, max_length=50)
    preparation_time: int | None = Field(default=None, ge=1, le=180)
    is_popular: bool | None = None
    is_available: bool | None = None
    image_url: str | None = None

    @field_validator("name", "description", "category", mode="before")
    @classmethod
    def _strip(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("image_url", mode="before")
    @classmethod
    def _image_url(cls, v: Any) -> Any:
        if isinstance(v, str):
            return _check_image_url(v.strip())
        return v


class MenuItem(MenuItemCreate):
    id: str = Field(..., min_length=1)


def validate_menu_item(data: dict[str, Any]) -> MenuItemCreate:
    """Validate a raw submission. Raises ``pydantic.ValidationError``."""
    return MenuItemCreate.model_validate(data)
