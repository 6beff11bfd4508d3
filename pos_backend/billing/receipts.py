from __future__ import annotations

from urllib.parse import quote

from ..validation import digits_only, validate_phone
from .calculator import TAX_RATE
from .models import Bill, ReceiptMessage

_MESSAGE_BASE_URL = "https://wa.me"
_WIDTH = 40


def _row(label: str, amount: str) -> str:
    return f"{label:<{_WIDTH - len(amount)}}{amount}"


def render_receipt(bill: Bill, currency: str = "₹") -> str:
    """Plain-text receipt for the kitchen/thermal printer."""
    lines = [
        f"Order #{bill.order_id}".center(_WIDTH),
        bill.table.center(_WIDTH),
        "-" * _WIDTH,
    ]
    for item in bill.items:
        lines.append(_row(f"{item.name} x{item.quantity}", f"{currency}{item.line_total:.2f}"))
    lines.append("-" * _WIDTH)
    lines.append(_row("Subtotal", f"{currency}{bill.subtotal:.2f}"))
    lines.append(_row(f"GST ({TAX_RATE * 100:g}%)", f"{currency}{bill.tax:.2f}"))
    if bill.discount > 0:
        lines.append(_row("Discount", f"-{currency}{bill.discount:.2f}"))
    if bill.tip > 0:
        lines.append(_row(f"Tip ({bill.tip_percent:g}%)", f"{currency}{bill.tip:.2f}"))
    lines.append("=" * _WIDTH)
    lines.append(_row("Total", f"{currency}{bill.total:.2f}"))
    if bill.payment_method:
        lines.append(_row("Paid via", bill.payment_method.value.upper()))
    return "\n".join(lines)


def receipt_message(bill: Bill, currency: str = "₹") -> str:
    return (
        "Thank you for dining with us! 🍽️\n\n"
        "Your bill details:\n"
        f"Order #{bill.order_id}\n"
        f"Total: {currency}{bill.total:.2f}\n\n"
        "We hope you enjoyed your meal! Visit us again soon. ❤️"
    )


def build_receipt_message(bill: Bill, phone: str, currency: str = "₹") -> ReceiptMessage:
    """
    Build the thank-you message and a click-to-chat link for ``phone``.

    Raises ``InvalidPhoneError`` for a malformed phone. Nothing is sent; the
    link is handed back to the caller.
    """
    phone = validate_phone(phone)
    message = receipt_message(bill, currency)
    link = f"{_MESSAGE_BASE_URL}/{digits_only(phone)}?text={quote(message)}"
    return ReceiptMessage(phone=phone, message=message, link=link)
