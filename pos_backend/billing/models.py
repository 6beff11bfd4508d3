from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class PaymentMethod(str, Enum):
    cash = "cash"
    card = "card"
    upi = "upi"


class OrderStatus(str, Enum):
    pending = "pending"
    preparing = "preparing"
    served = "served"
    paid = "paid"


class OrderItem(BaseModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    quantity: int = Field(..., ge=1, le=100)
    category: str | None = None

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


class BillTotals(BaseModel):
    tax: float
    tip: float
    total: float


class Bill(BaseModel):
    order_id: str
    table: str
    items: list[OrderItem] = Field(default_factory=list)
    subtotal: float = 0.0
    tax: float = 0.0
    discount: float = Field(default=0.0, ge=0)
    tip_percent: float = Field(default=0.0, ge=0)
    tip: float = 0.0
    total: float = 0.0
    payment_method: PaymentMethod | None = None
    customer_phone: str | None = None
    status: OrderStatus = OrderStatus.pending


# ── Request bodies ───────────────────────────────────────────────────────


class AddItemRequest(BaseModel):
    menu_item_id: str = Field(..., min_length=1)
    quantity: int = Field(default=1, ge=1, le=100)


class QuantityRequest(BaseModel):
    quantity: int = Field(..., ge=1, le=100)


class TipRequest(BaseModel):
    # Free-text input may be negative; it is clamped, not rejected
    tip_percent: float


class DiscountRequest(BaseModel):
    discount: float = Field(..., ge=0)


class PaymentMethodRequest(BaseModel):
    payment_method: PaymentMethod


class CustomerRequest(BaseModel):
    customer_phone: str


class PaymentResult(BaseModel):
    status: str
    amount: float
    payment_method: PaymentMethod
    message: str
    receipt_link: str | None = None


class ReceiptMessage(BaseModel):
    phone: str
    message: str
    link: str
