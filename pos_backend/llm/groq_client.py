from __future__ import annotations

import logging

import groq
from groq import Groq

from ..errors import QuotaExhaustedError, RateLimitError, TransportError
from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)


def complete(
    messages: list[dict[str, str]],
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> str:
    """
    Send one chat completion to Groq and return the message text.

    Raises ``RateLimitError`` on HTTP 429, ``QuotaExhaustedError`` on HTTP 402
    and ``TransportError`` for timeouts, connection problems, any other
    non-2xx status, or when the provider is disabled or has no API key.
    The returned text may be empty.
    """
    if not config.enabled or not config.api_key:
        raise TransportError("Groq provider is disabled or has no API key")

    try:
        client = Groq(api_key=config.api_key, timeout=config.timeout, max_retries=0)
        response = client.chat.completions.create(
            model=config.model,
            messages=messages,
            max_tokens=config.max_tokens,
            temperature=config.temperature,
        )
    except groq.RateLimitError as exc:
        raise RateLimitError(str(exc)) from exc
    except groq.APIStatusError as exc:
        if exc.status_code == 402:
            raise QuotaExhaustedError(str(exc)) from exc
        logger.error("Groq API error %s: %s", exc.status_code, exc)
        raise TransportError(f"Groq returned HTTP {exc.status_code}") from exc
    except groq.APIError as exc:
        # Timeouts and connection failures
        raise TransportError(str(exc)) from exc

    if not response.choices:
        return ""
    return response.choices[0].message.content or ""
