from __future__ import annotations

import logging
import time
from typing import Any, Callable, Sequence

from ..billing.models import OrderItem
from ..errors import MatchError, SuggestionError, TransportError
from ..llm.config import DEFAULT_LLM_CONFIG, LLMConfig
from ..llm.groq_client import complete
from ..menu.models import MenuItem
from .models import (
    CartEntry,
    CatalogEntry,
    SuggestionRequest,
    SuggestionResponse,
    SuggestionSource,
    UpsellSuggestion,
)
from .parsing import extract_json_array

logger = logging.getLogger(__name__)

FALLBACK_REASON = "Popular choice among customers"
FALLBACK_CONFIDENCE = 80.0
FALLBACK_COUNT = 2

SYSTEM_PROMPT = (
    "You are a helpful restaurant upselling assistant. "
    "Always respond with valid JSON arrays."
)

USER_PROMPT = """\
You are a restaurant upselling AI assistant. {order_context}. {menu_context}.

Suggest 2-3 menu items that would pair well with the current order or boost order value.
For each suggestion, provide:
- item_name: exact name from the menu
- reason: brief compelling reason (max 15 words)
- confidence: number between 70-95

Respond ONLY with valid JSON array format:
[{{"item_name": "...", "reason": "...", "confidence": 85}}]"""


# ---------------------------------------------------------------------------
# Request construction
# ---------------------------------------------------------------------------


def build_request(
    catalog: Sequence[MenuItem],
    cart: Sequence[OrderItem] = (),
) -> SuggestionRequest:
    return SuggestionRequest(
        current_order_items=[CartEntry(name=i.name, category=i.category) for i in cart],
        menu_items=[
            CatalogEntry(id=m.id, name=m.name, price=m.price, category=m.category)
            for m in catalog
        ],
    )


def build_messages(request: SuggestionRequest, currency: str = "₹") -> list[dict[str, str]]:
    if request.current_order_items:
        names = ", ".join(i.name for i in request.current_order_items)
        order_context = f"Current order contains: {names}"
    else:
        order_context = "No items in current order"

    menu = ", ".join(
        f"{m.name} ({currency}{m.price:g}, {m.category})" for m in request.menu_items
    )
    prompt = USER_PROMPT.format(
        order_context=order_context,
        menu_context=f"Available menu items: {menu}",
    )
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": prompt},
    ]


# ---------------------------------------------------------------------------
# Provider call
# ---------------------------------------------------------------------------


def call_provider(
    messages: list[dict[str, str]],
    config: LLMConfig = DEFAULT_LLM_CONFIG,
    sleep: Callable[[float], None] = time.sleep,
) -> str:
    """
    Call the provider, retrying transport failures with exponential backoff.

    Rate-limit and exhausted-credit failures are raised straight away. The
    last ``TransportError`` is raised once retries run out.
    """
    retries = max(0, config.max_retries)
    attempt = 0
    while True:
        try:
            return complete(messages, config)
        except TransportError:
            # No retry for a disabled provider
            if attempt >= retries or not config.enabled or not config.api_key:
                raise
            delay = config.retry_backoff * (2 ** attempt)
            attempt += 1
            logger.info("Suggestion provider unreachable, retry %d in %.2fs", attempt, delay)
            sleep(delay)


# ---------------------------------------------------------------------------
# Matching & fallback
# ---------------------------------------------------------------------------


def _coerce_confidence(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        confidence = float(value)
    except (TypeError, ValueError):
        return None
    if confidence != confidence:  # NaN
        return None
    return min(100.0, max(0.0, confidence))


def match_suggestions(
    raw: Sequence[Any],
    catalog: Sequence[MenuItem],
) -> list[UpsellSuggestion]:
    """
    Resolve each raw ``{item_name, reason, confidence}`` to a catalog item.

    Names match case-insensitively and exactly; the first catalog item with
    that name wins. Entries that do not resolve are dropped.
    """
    by_name: dict[str, MenuItem] = {}
    for item in catalog:
        by_name.setdefault(item.name.strip().lower(), item)

    matched: list[UpsellSuggestion] = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        name = entry.get("item_name")
        if not isinstance(name, str) or not name.strip():
            continue
        item = by_name.get(name.strip().lower())
        if item is None:
            logger.debug("Dropping suggestion with no catalog match: %r", name)
            continue
        confidence = _coerce_confidence(entry.get("confidence"))
        if confidence is None:
            logger.debug("Dropping suggestion %r with bad confidence", name)
            continue
        matched.append(UpsellSuggestion(
            item=item,
            reason=str(entry.get("reason") or "").strip(),
            confidence=confidence,
        ))
    return matched


def fallback_suggestions(catalog: Sequence[MenuItem]) -> list[UpsellSuggestion]:
    return [
        UpsellSuggestion(item=item, reason=FALLBACK_REASON, confidence=FALLBACK_CONFIDENCE)
        for item in list(catalog)[:FALLBACK_COUNT]
    ]


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------


def suggest(
    catalog: Sequence[MenuItem],
    cart: Sequence[OrderItem] = (),
    config: LLMConfig = DEFAULT_LLM_CONFIG,
    sleep: Callable[[float], None] = time.sleep,
) -> SuggestionResponse:
    """
    Run one suggestion cycle: request, parse, match, then fall back if needed.

    Never raises for provider trouble; the failure kind and its user-facing
    message ride along on the response instead.
    """
    if not catalog:
        return SuggestionResponse()

    request = build_request(catalog, cart)
    messages = build_messages(request)
    logger.debug("Requesting upsell suggestions: %s", messages[-1]["content"])

    try:
        content = call_provider(messages, config, sleep=sleep)
        raw = extract_json_array(content)
        suggestions = match_suggestions(raw, catalog)
        if not suggestions:
            raise MatchError("no suggestion matched the catalog")
    except SuggestionError as exc:
        logger.warning("Upsell suggestions falling back (%s): %s", exc.kind, exc)
        return SuggestionResponse(
            suggestions=fallback_suggestions(catalog),
            source=SuggestionSource.fallback,
            failure=exc.kind,
            message=exc.message,
        )

    return SuggestionResponse(suggestions=suggestions, source=SuggestionSource.ai)
