from __future__ import annotations

import pytest

from pos_backend.app import app
from pos_backend.menu.store import clear_menu, seed_demo_menu


@pytest.fixture(autouse=True)
def fresh_state():
    clear_menu()
    seed_demo_menu()
    app.state.suggestions.reset()
    yield
    clear_menu()
    seed_demo_menu()
    app.state.suggestions.reset()
