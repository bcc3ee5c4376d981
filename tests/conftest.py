"""
Test configuration and fixtures for the shortener.
Every test gets its own store, engine and app, so tests never share state.
"""

import threading
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from quotalink_app.app_factory import create_app
from quotalink_app.notifications.strategies import InMemoryNotificationSink
from quotalink_app.services.short_code_strategies import HashShortCodeStrategy
from quotalink_app.services.shortener_engine import ShortenerEngine
from quotalink_app.storage.strategies import InMemoryRecordStore


class FakeClock:
    """Controllable, thread-safe stand-in for utcnow()"""

    def __init__(self, start: datetime = None):
        self._now = start or datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)
        self._lock = threading.Lock()

    def __call__(self) -> datetime:
        with self._lock:
            return self._now

    def advance(self, **kwargs) -> datetime:
        with self._lock:
            self._now += timedelta(**kwargs)
            return self._now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return InMemoryRecordStore(clock=clock)


@pytest.fixture
def notifier():
    return InMemoryNotificationSink()


@pytest.fixture
def engine(store, notifier, clock):
    """
    Engine with a fake clock and a frozen time salt.
    The sweeper thread is never started here; tests call sweep().
    """
    return ShortenerEngine(
        store=store,
        code_strategy=HashShortCodeStrategy(millis=lambda: 1_700_000_000_000),
        notifier=notifier,
        clock=clock,
        default_max_clicks=100,
        default_expiration_hours=24,
    )


@pytest.fixture
def owner_id(engine):
    return engine.create_owner()


@pytest.fixture
def client(engine):
    """
    Test client bound to the test engine (background sweeper disabled).
    """
    app = create_app(engine=engine, start_sweeper=False)

    with TestClient(app) as test_client:
        yield test_client
