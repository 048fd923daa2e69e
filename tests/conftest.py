"""
Test configuration and fixtures for the link tracker.
This centralizes all test setup, making individual tests clean.
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from main import app
from linktracker_app.dependencies import get_link_service
from linktracker_app.persistence.strategies import InMemoryPersistence
from linktracker_app.services.click_ledger import ClickLedger
from linktracker_app.services.link_service import LinkService
from linktracker_app.services.record_store import RecordStore

BASE_URL = "http://localhost:3000"
FIXED_NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Callable clock that only moves when told to"""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def persistence():
    """Fresh in-memory persistence for each test"""
    return InMemoryPersistence()


@pytest.fixture
def store(persistence, clock):
    return RecordStore(persistence=persistence, base_url=BASE_URL, clock=clock)


@pytest.fixture
def ledger(persistence):
    return ClickLedger(persistence)


@pytest.fixture
def link_service(store, ledger):
    return LinkService(store=store, ledger=ledger)


@pytest.fixture(scope="function")
def client(link_service):
    """
    Create a test client with the link service dependency overridden.
    This is the main fixture that API tests will use.
    """
    app.dependency_overrides[get_link_service] = lambda: link_service

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
