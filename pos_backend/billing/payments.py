from __future__ import annotations

import asyncio
import logging

from ..config import DEFAULT_APP_CONFIG, AppConfig
from ..errors import PaymentError
from .models import Bill, OrderStatus, PaymentResult

logger = logging.getLogger(__name__)


async def process_payment(bill: Bill, config: AppConfig = DEFAULT_APP_CONFIG) -> tuple[Bill, PaymentResult]:
    """
    Simulate charging ``bill`` with its selected payment method.

    Waits a fixed delay and always succeeds; there is no gateway and no
    cancellation. Returns the bill marked ``paid`` and the payment result.
    """
    if bill.payment_method is None:
        raise PaymentError("Select a payment method first")
    if not bill.items:
        raise PaymentError("Cannot charge an empty bill")
    if bill.status == OrderStatus.paid:
        raise PaymentError(f"Order {bill.order_id} is already paid")

    await asyncio.sleep(config.payment_delay)

    method = bill.payment_method
    logger.info("Payment of %.2f via %s for %s", bill.total, method.value, bill.order_id)
    result = PaymentResult(
        status="succeeded",
        amount=bill.total,
        payment_method=method,
        message=f"{config.currency_symbol}{bill.total:.2f} charged via {method.value.upper()}",
    )
    return bill.model_copy(update={"status": OrderStatus.paid}), result
