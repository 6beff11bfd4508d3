from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request, Response
from pydantic import ValidationError
from starlette.middleware.sessions import SessionMiddleware

from .billing.calculator import check_discount, recompute_bill
from .billing.models import (
    AddItemRequest,
    Bill,
    CustomerRequest,
    DiscountRequest,
    PaymentMethodRequest,
    PaymentResult,
    QuantityRequest,
    ReceiptMessage,
    TipRequest,
)
from .billing.payments import process_payment
from .billing.receipts import build_receipt_message, render_receipt
from .billing.session import (
    add_menu_item,
    demo_bill,
    ensure_unpaid,
    load_bill,
    remove_item,
    save_bill,
    set_quantity,
)
from .config import DEFAULT_APP_CONFIG
from .errors import InvalidPhoneError, PaymentError
from .logging_setup import setup_logging
from .menu import store
from .menu.models import MenuItem, MenuItemCreate, MenuItemUpdate
from .upsell.cycle import SuggestionCycle
from .upsell.engine import suggest
from .upsell.models import SuggestionCycleStatus
from .validation import validate_phone

setup_logging(DEFAULT_APP_CONFIG.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Restaurant POS API", version="1.0.0")
app.add_middleware(SessionMiddleware, secret_key=DEFAULT_APP_CONFIG.session_secret)
app.state.suggestions = SuggestionCycle()


def _not_found(kind: str, key: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"{kind} {key} not found")


def _open_bill(request: Request) -> Bill:
    try:
        return ensure_unpaid(load_bill(request.session))
    except PaymentError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from None


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# ── Menu endpoints ───────────────────────────────────────────────────────


@app.get("/menu", response_model=list[MenuItem])
def list_menu(search: str | None = None, category: str | None = None) -> list[MenuItem]:
    return store.filter_items(store.list_items(), search=search, category=category)


@app.post("/menu", response_model=MenuItem, status_code=201)
def create_menu_item(body: MenuItemCreate) -> MenuItem:
    return store.add_item(body)


@app.get("/menu/{item_id}", response_model=MenuItem)
def get_menu_item(item_id: str) -> MenuItem:
    try:
        return store.get_item(item_id)
    except KeyError:
        raise _not_found("Menu item", item_id) from None


@app.patch("/menu/{item_id}", response_model=MenuItem)
def update_menu_item(item_id: str, body: MenuItemUpdate) -> MenuItem:
    try:
        return store.update_item(item_id, body)
    except KeyError:
        raise _not_found("Menu item", item_id) from None


@app.delete("/menu/{item_id}", status_code=204)
def delete_menu_item(item_id: str) -> Response:
    try:
        store.delete_item(item_id)
    except KeyError:
        raise _not_found("Menu item", item_id) from None
    return Response(status_code=204)


@app.post("/menu/{item_id}/toggle-availability", response_model=MenuItem)
def toggle_menu_item(item_id: str) -> MenuItem:
    try:
        return store.toggle_availability(item_id)
    except KeyError:
        raise _not_found("Menu item", item_id) from None


# ── Bill endpoints ───────────────────────────────────────────────────────


@app.get("/bill", response_model=Bill)
def get_bill(request: Request) -> Bill:
    return save_bill(request.session, load_bill(request.session))


@app.post("/bill/reset", response_model=Bill)
def reset_bill(request: Request) -> Bill:
    return save_bill(request.session, demo_bill())


@app.get("/bill/tip-presets")
def tip_presets() -> list[int]:
    return list(DEFAULT_APP_CONFIG.tip_presets)


@app.post("/bill/items", response_model=Bill)
def add_bill_item(body: AddItemRequest, request: Request) -> Bill:
    try:
        item = store.get_item(body.menu_item_id)
    except KeyError:
        raise _not_found("Menu item", body.menu_item_id) from None
    if not item.is_available:
        raise HTTPException(status_code=409, detail=f"{item.name} is not available")

    bill = _open_bill(request)
    try:
        bill = add_menu_item(bill, item, body.quantity)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False)) from None
    return save_bill(request.session, bill)


@app.put("/bill/items/{item_id}", response_model=Bill)
def set_bill_item_quantity(item_id: str, body: QuantityRequest, request: Request) -> Bill:
    bill = _open_bill(request)
    try:
        bill = set_quantity(bill, item_id, body.quantity)
    except KeyError:
        raise _not_found("Bill line", item_id) from None
    return save_bill(request.session, bill)


@app.delete("/bill/items/{item_id}", response_model=Bill)
def remove_bill_item(item_id: str, request: Request) -> Bill:
    bill = _open_bill(request)
    try:
        bill = remove_item(bill, item_id)
    except KeyError:
        raise _not_found("Bill line", item_id) from None
    return save_bill(request.session, bill)


@app.put("/bill/tip", response_model=Bill)
def set_tip(body: TipRequest, request: Request) -> Bill:
    bill = recompute_bill(_open_bill(request), tip_percent=body.tip_percent)
    return save_bill(request.session, bill)


@app.put("/bill/discount", response_model=Bill)
def set_discount(body: DiscountRequest, request: Request) -> Bill:
    bill = recompute_bill(_open_bill(request))
    warning = check_discount(bill.subtotal, bill.tax, body.discount)
    if warning:
        raise HTTPException(status_code=422, detail=warning)
    bill = recompute_bill(bill, discount=body.discount)
    return save_bill(request.session, bill)


@app.put("/bill/payment-method", response_model=Bill)
def set_payment_method(body: PaymentMethodRequest, request: Request) -> Bill:
    bill = _open_bill(request).model_copy(update={"payment_method": body.payment_method})
    return save_bill(request.session, bill)


@app.put("/bill/customer", response_model=Bill)
def set_customer(body: CustomerRequest, request: Request) -> Bill:
    try:
        phone = validate_phone(body.customer_phone)
    except InvalidPhoneError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from None
    bill = load_bill(request.session).model_copy(update={"customer_phone": phone})
    return save_bill(request.session, bill)


@app.post("/bill/pay", response_model=PaymentResult)
async def pay_bill(request: Request) -> PaymentResult:
    bill = load_bill(request.session)
    try:
        bill, result = await process_payment(bill, DEFAULT_APP_CONFIG)
    except PaymentError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from None

    if bill.customer_phone:
        receipt = build_receipt_message(bill, bill.customer_phone, DEFAULT_APP_CONFIG.currency_symbol)
        result.receipt_link = receipt.link

    save_bill(request.session, bill)
    return result


@app.get("/bill/receipt")
def print_receipt(request: Request) -> dict[str, str]:
    bill = load_bill(request.session)
    return {"order_id": bill.order_id, "receipt": render_receipt(bill, DEFAULT_APP_CONFIG.currency_symbol)}


@app.post("/bill/send-receipt", response_model=ReceiptMessage)
def send_receipt(request: Request) -> ReceiptMessage:
    bill = load_bill(request.session)
    if not bill.customer_phone:
        raise HTTPException(status_code=400, detail="Customer phone number is required")
    try:
        return build_receipt_message(bill, bill.customer_phone, DEFAULT_APP_CONFIG.currency_symbol)
    except InvalidPhoneError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from None


# ── Suggestion endpoints ─────────────────────────────────────────────────


def _run_suggestion_cycle(request: Request) -> None:
    cycle: SuggestionCycle = request.app.state.suggestions
    catalog = store.list_items()
    cart = load_bill(request.session).items
    token = cycle.begin(len(catalog))
    response = suggest(catalog, cart)
    if cycle.complete(token, response):
        logger.info("Suggestion cycle %d finished: %s", token, response.source.value)


@app.get("/suggestions", response_model=SuggestionCycleStatus)
def get_suggestions(request: Request) -> SuggestionCycleStatus:
    cycle: SuggestionCycle = request.app.state.suggestions
    if cycle.should_refresh(len(store.list_items())):
        _run_suggestion_cycle(request)
    return cycle.status()


@app.post("/suggestions/refresh", response_model=SuggestionCycleStatus)
def refresh_suggestions(request: Request) -> SuggestionCycleStatus:
    _run_suggestion_cycle(request)
    return request.app.state.suggestions.status()
