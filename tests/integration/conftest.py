import pytest

from lambda_inputs.handlers.utils import sessions
from lambda_inputs.input_sources.session_store import InMemorySessionStore


@pytest.fixture(scope='function')
def session_store(monkeypatch):
    store = InMemorySessionStore()
    monkeypatch.setattr(sessions, 'session_store', store)
    return store
