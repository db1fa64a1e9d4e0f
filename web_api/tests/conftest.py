# web_api/tests/conftest.py
"""Pytest fixtures for web API tests.

Loads a fresh content store from the bundled seed so that editorial edits
made by one test don't leak into the next.
"""

import pytest

from core.content import clear_store, load_store, set_store
from core.content.loader import SEED_PATH
from core.tv.sessions import clear_sessions


@pytest.fixture(autouse=True)
def api_test_store():
    """Set up the seed store and an empty session registry.

    This fixture runs automatically for all tests in web_api/tests/.
    """
    store = load_store(SEED_PATH)
    set_store(store)
    clear_sessions()

    yield store

    clear_sessions()
    clear_store()
