from __future__ import annotations

from pos_backend.menu.models import MenuItem
from pos_backend.upsell.cycle import SuggestionCycle
from pos_backend.upsell.models import (
    CycleState,
    SuggestionResponse,
    SuggestionSource,
    UpsellSuggestion,
)

NAAN = MenuItem(id="naan", name="Naan", price=80, category="Main Course", preparation_time=8)


def _response(source: SuggestionSource, reason: str = "x") -> SuggestionResponse:
    return SuggestionResponse(
        suggestions=[UpsellSuggestion(item=NAAN, reason=reason, confidence=85)],
        source=source,
    )


def test_starts_idle():
    status = SuggestionCycle().status()
    assert status.state == CycleState.idle
    assert status.generation == 0
    assert status.response.suggestions == []


def test_begin_moves_to_requesting():
    cycle = SuggestionCycle()
    token = cycle.begin(3)
    assert token == 1
    assert cycle.status().state == CycleState.requesting


def test_ai_result_succeeds():
    cycle = SuggestionCycle()
    token = cycle.begin(3)
    assert cycle.complete(token, _response(SuggestionSource.ai))
    assert cycle.status().state == CycleState.succeeded


def test_fallback_result_is_failed_state():
    cycle = SuggestionCycle()
    token = cycle.begin(3)
    cycle.complete(token, _response(SuggestionSource.fallback))
    status = cycle.status()
    assert status.state == CycleState.failed
    assert len(status.response.suggestions) == 1


def test_stale_result_is_discarded():
    cycle = SuggestionCycle()
    old = cycle.begin(3)
    new = cycle.begin(4)

    assert cycle.complete(new, _response(SuggestionSource.ai, reason="newest"))
    assert not cycle.complete(old, _response(SuggestionSource.ai, reason="stale"))

    assert cycle.status().response.suggestions[0].reason == "newest"


def test_stale_result_does_not_overwrite_in_flight_state():
    cycle = SuggestionCycle()
    old = cycle.begin(3)
    cycle.begin(3)
    cycle.complete(old, _response(SuggestionSource.ai))
    assert cycle.status().state == CycleState.requesting


class TestShouldRefresh:
    def test_empty_catalog_never_triggers_first(self):
        assert not SuggestionCycle().should_refresh(0)

    def test_non_empty_catalog_triggers(self):
        assert SuggestionCycle().should_refresh(2)

    def test_same_size_does_not_retrigger(self):
        cycle = SuggestionCycle()
        cycle.begin(2)
        assert not cycle.should_refresh(2)

    def test_size_change_triggers(self):
        cycle = SuggestionCycle()
        cycle.begin(2)
        assert cycle.should_refresh(3)
        assert cycle.should_refresh(0)

    def test_reset_forgets_catalog_size(self):
        cycle = SuggestionCycle()
        cycle.begin(2)
        cycle.reset()
        assert cycle.should_refresh(2)
        assert cycle.status().state == CycleState.idle
