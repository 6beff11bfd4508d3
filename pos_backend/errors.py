from __future__ import annotations


class InvalidPhoneError(ValueError):
    """Raised when a customer contact handle is not an E.164-like number."""


class PaymentError(ValueError):
    """Raised when a bill cannot be charged in its current state."""


class SuggestionError(Exception):
    """Base class for suggestion-provider failures.

    Every subclass is recovered locally by the fallback suggestion path and
    carries a user-facing ``message`` alongside the internal detail.
    """

    kind = "error"
    message = "AI suggestions are unavailable right now."

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail or self.message)
        self.detail = detail


class TransportError(SuggestionError):
    kind = "transport"
    message = "AI suggestions are unavailable right now."


class RateLimitError(SuggestionError):
    kind = "rate_limit"
    message = "AI suggestions temporarily unavailable. Please try again in a moment."


class QuotaExhaustedError(SuggestionError):
    kind = "quota_exhausted"
    message = "AI credits exhausted. Please add credits to continue using AI suggestions."


class ParseError(SuggestionError):
    kind = "parse"
    message = "AI returned an unreadable response."


class MatchError(SuggestionError):
    """No suggested name resolved to a catalog item."""

    kind = "no_match"
    message = "AI suggestions did not match any menu item."
