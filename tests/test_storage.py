"""Tests for the key-value backends in app/storage/"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.database import Base
from app.models import StoredBlob
from app.services.record_store import DOSAGES_KEY, RecordStore
from app.storage import InMemoryKeyValueStore, SqlKeyValueStore, StorageError


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


class TestSqlKeyValueStore:

    def test_missing_key_is_none(self, session_factory):
        assert SqlKeyValueStore(session_factory).get("dosages") is None

    def test_set_then_overwrite(self, session_factory):
        kv = SqlKeyValueStore(session_factory)
        kv.set("dosages", b"[]")
        kv.set("dosages", b'[{"a": 1}]')
        assert kv.get("dosages") == b'[{"a": 1}]'

        db = session_factory()
        try:
            assert db.query(StoredBlob).count() == 1
        finally:
            db.close()

    def test_record_store_round_trip(self, session_factory, clock, make_dose):
        kv = SqlKeyValueStore(session_factory)
        store = RecordStore(kv, clock=clock)
        dose = store.add_dose(make_dose(notes="sql"))

        reloaded = RecordStore(SqlKeyValueStore(session_factory), clock=clock)
        assert reloaded.dosages == [dose]

    def test_broken_database_raises_storage_error(self):
        engine = create_engine("sqlite://", poolclass=StaticPool)
        kv = SqlKeyValueStore(sessionmaker(bind=engine))  # no tables created
        with pytest.raises(StorageError):
            kv.set("dosages", b"[]")
        with pytest.raises(StorageError):
            kv.get("dosages")

    def test_unreadable_backend_loads_empty(self, clock):
        engine = create_engine("sqlite://", poolclass=StaticPool)
        store = RecordStore(SqlKeyValueStore(sessionmaker(bind=engine)), clock=clock)
        assert store.dosages == []
        assert store.last_load.degraded


class TestInMemoryKeyValueStore:

    def test_simulated_failures_run_out(self):
        kv = InMemoryKeyValueStore(fail_writes=1)
        with pytest.raises(StorageError):
            kv.set(DOSAGES_KEY, b"[]")
        kv.set(DOSAGES_KEY, b"[]")
        assert kv.get(DOSAGES_KEY) == b"[]"
