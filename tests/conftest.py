import pytest

from blaster.scores import MemoryHighScoreStore
from blaster.session import GameSession
from blaster.utils import make_rng


@pytest.fixture
def rng():
    return make_rng(1234)


@pytest.fixture
def store():
    return MemoryHighScoreStore()


@pytest.fixture
def make_session(rng, store):
    """Factory for a quiet 800x600 session; pass overrides as kwargs"""
    def _make(**kwargs):
        kwargs.setdefault("rng", rng)
        kwargs.setdefault("store", store)
        kwargs.setdefault("verbose", 0)
        return GameSession(800, 600, **kwargs)
    return _make


@pytest.fixture
def session(make_session):
    s = make_session()
    s.start()
    return s
