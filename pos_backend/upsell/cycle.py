from __future__ import annotations

import logging
import threading

from .models import (
    CycleState,
    SuggestionCycleStatus,
    SuggestionResponse,
    SuggestionSource,
)

logger = logging.getLogger(__name__)


class SuggestionCycle:
    """
    Tracks suggestion-fetch cycles: idle -> requesting -> succeeded | failed.

    Each ``begin()`` hands out a new generation. Only the newest generation
    may store its result; an older request that finishes late is discarded,
    so the kept suggestion list is always from the latest trigger.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._generation = 0
        self._state = CycleState.idle
        self._response = SuggestionResponse()
        self._catalog_size: int | None = None

    def should_refresh(self, catalog_size: int) -> bool:
        """True when the catalog became non-empty or changed size."""
        with self._lock:
            if self._catalog_size is None:
                return catalog_size > 0
            return catalog_size != self._catalog_size

    def begin(self, catalog_size: int | None = None) -> int:
        with self._lock:
            self._generation += 1
            self._state = CycleState.requesting
            if catalog_size is not None:
                self._catalog_size = catalog_size
            return self._generation

    def complete(self, token: int, response: SuggestionResponse) -> bool:
        """Store ``response`` if ``token`` is the newest cycle. Returns whether kept."""
        with self._lock:
            if token != self._generation:
                logger.info("Discarding stale suggestion result (cycle %d, latest %d)",
                            token, self._generation)
                return False
            self._response = response
            self._state = (
                CycleState.failed
                if response.source == SuggestionSource.fallback
                else CycleState.succeeded
            )
            return True

    def status(self) -> SuggestionCycleStatus:
        with self._lock:
            return SuggestionCycleStatus(
                state=self._state,
                generation=self._generation,
                response=self._response,
            )

    def reset(self) -> None:
        with self._lock:
            self._generation = 0
            self._state = CycleState.idle
            self._response = SuggestionResponse()
            self._catalog_size = None
