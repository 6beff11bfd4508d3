from __future__ import annotations

import json
from unittest.mock import patch

from fastapi.testclient import TestClient

from pos_backend.app import app
from pos_backend.errors import QuotaExhaustedError, TransportError

client = TestClient(app)


def _reply(*names: str) -> str:
    return "Here you go:\n" + json.dumps([
        {"item_name": name, "reason": f"{name} goes well with this order", "confidence": 85}
        for name in names
    ])


@patch("pos_backend.upsell.engine.complete")
def test_first_fetch_triggers_cycle(mock_complete):
    mock_complete.return_value = _reply("gulab jamun", "PANEER TIKKA")

    resp = client.get("/suggestions")

    assert resp.status_code == 200
    body = resp.json()
    assert body["state"] == "succeeded"
    assert body["generation"] == 1
    assert body["response"]["source"] == "ai"
    assert [s["item"]["name"] for s in body["response"]["suggestions"]] == ["Gulab Jamun", "Paneer Tikka"]
    mock_complete.assert_called_once()


@patch("pos_backend.upsell.engine.complete")
def test_unchanged_catalog_reuses_result(mock_complete):
    mock_complete.return_value = _reply("Naan")

    client.get("/suggestions")
    body = client.get("/suggestions").json()

    assert body["generation"] == 1
    assert mock_complete.call_count == 1


@patch("pos_backend.upsell.engine.complete")
def test_catalog_change_retriggers(mock_complete):
    mock_complete.return_value = _reply("Naan")
    client.get("/suggestions")

    client.post("/menu", json={
        "name": "Masala Chai", "price": 60, "category": "Beverages", "preparation_time": 5,
    })
    body = client.get("/suggestions").json()

    assert body["generation"] == 2
    assert mock_complete.call_count == 2


@patch("pos_backend.upsell.engine.complete")
def test_manual_refresh(mock_complete):
    mock_complete.return_value = _reply("Naan")
    client.get("/suggestions")

    body = client.post("/suggestions/refresh").json()

    assert body["generation"] == 2
    assert mock_complete.call_count == 2


@patch("pos_backend.upsell.engine.complete")
def test_cart_sent_to_provider(mock_complete):
    mock_complete.return_value = _reply("Naan")

    client.post("/suggestions/refresh")

    messages = mock_complete.call_args.args[0]
    assert "Current order contains: Butter Chicken, Naan, Lassi" in messages[-1]["content"]


@patch("pos_backend.upsell.engine.complete")
def test_provider_failure_falls_back(mock_complete):
    mock_complete.side_effect = QuotaExhaustedError("402")

    body = client.post("/suggestions/refresh").json()

    assert body["state"] == "failed"
    response = body["response"]
    assert response["source"] == "fallback"
    assert response["failure"] == "quota_exhausted"
    # Catalog order is by name
    assert [s["item"]["name"] for s in response["suggestions"]] == ["Butter Chicken", "Dal Makhani"]
    assert all(s["reason"] == "Popular choice among customers" for s in response["suggestions"])
    assert all(s["confidence"] == 80 for s in response["suggestions"])


@patch("pos_backend.upsell.engine.complete")
def test_unmatched_names_fall_back(mock_complete):
    mock_complete.return_value = _reply("Sushi", "Ramen")

    body = client.post("/suggestions/refresh").json()

    assert body["response"]["failure"] == "no_match"
    assert len(body["response"]["suggestions"]) == 2


@patch("pos_backend.upsell.engine.complete")
def test_empty_catalog_has_no_suggestions(mock_complete):
    mock_complete.side_effect = TransportError("down")
    for item in client.get("/menu").json():
        client.delete(f"/menu/{item['id']}")

    body = client.post("/suggestions/refresh").json()

    assert body["response"]["suggestions"] == []
    mock_complete.assert_not_called()
