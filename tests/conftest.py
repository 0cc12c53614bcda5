"""Shared fixtures: in-memory storage, a fixed clock and an API client."""

import itertools
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from app.models import CheckInEvent, DoseEvent
from app.services.preferences import PreferencesStore
from app.services.record_store import RecordStore
from app.storage import InMemoryKeyValueStore

FIXED_NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Callable clock that tests can move forward."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.current = now

    def __call__(self) -> datetime:
        return self.current


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def id_factory():
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def kv():
    return InMemoryKeyValueStore()


@pytest.fixture
def store(kv, clock, id_factory):
    return RecordStore(kv, clock=clock, id_factory=id_factory)


@pytest.fixture
def make_dose(clock):
    def _make(**overrides):
        fields = {
            "timestamp": clock(),
            "amount": 100.0,
            "notes": "",
            "initial_feeling_score": 4,
            "water_prepared": 2,
        }
        fields.update(overrides)
        return DoseEvent(**fields)
    return _make


@pytest.fixture
def make_check_in(clock):
    def _make(dose_id: str, **overrides):
        fields = {
            "dose_id": dose_id,
            "timestamp": clock(),
            "symptoms": [],
            "feeling_score": 3,
            "notes": "",
            "water_consumed_since_last": 1,
        }
        fields.update(overrides)
        return CheckInEvent(**fields)
    return _make


@pytest.fixture
def client(store, kv):
    from app.main import app
    from app.api.deps import get_preferences, get_store

    preferences = PreferencesStore(kv)
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_preferences] = lambda: preferences
    yield TestClient(app)
    app.dependency_overrides.clear()
