from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ..menu.models import MenuItem


class CartEntry(BaseModel):
    name: str
    category: str | None = None


class CatalogEntry(BaseModel):
    id: str
    name: str
    price: float
    category: str


class SuggestionRequest(BaseModel):
    """Context payload sent to the suggestion provider."""

    model_config = ConfigDict(populate_by_name=True)

    current_order_items: list[CartEntry] = Field(default_factory=list, alias="currentOrderItems")
    menu_items: list[CatalogEntry] = Field(default_factory=list, alias="menuItems")


class UpsellSuggestion(BaseModel):
    item: MenuItem
    reason: str
    confidence: float = Field(..., ge=0, le=100)


class SuggestionSource(str, Enum):
    ai = "ai"
    fallback = "fallback"
    none = "none"


class SuggestionResponse(BaseModel):
    suggestions: list[UpsellSuggestion] = Field(default_factory=list)
    source: SuggestionSource = SuggestionSource.none
    failure: str | None = None
    message: str | None = None


class CycleState(str, Enum):
    idle = "idle"
    requesting = "requesting"
    succeeded = "succeeded"
    failed = "failed"


class SuggestionCycleStatus(BaseModel):
    state: CycleState
    generation: int
    response: SuggestionResponse
