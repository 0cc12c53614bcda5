"""API tests: the FastAPI routers wired to an in-memory record store."""

from datetime import timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db import Base, get_db
from app.storage import SqlKeyValueStore


def _log_dose(client, **overrides):
    body = {"amount": 100, "initial_feeling_score": 4, "water_prepared": 2}
    body.update(overrides)
    return client.post("/doses", json=body)


class TestDoses:

    def test_log_dose_defaults_timestamp_to_now(self, client, clock):
        response = _log_dose(client)
        assert response.status_code == 200

        data = response.json()
        assert data["saved"] is True
        assert data["dose"]["id"] == "id-1"
        assert data["dose"]["timestamp"].startswith("2026-03-15T12:00:00")
        assert data["hydration_warning"] is None

    def test_hydration_warning_on_many_glasses(self, client):
        assert _log_dose(client, water_prepared=5).json()["hydration_warning"]

    def test_out_of_range_score_rejected(self, client, store):
        response = _log_dose(client, initial_feeling_score=9)
        assert response.status_code == 422
        assert response.json()["detail"]["field"] == "initialFeelingScore"
        assert store.dosages == []

    def test_history_is_newest_first(self, client):
        _log_dose(client, timestamp="2026-01-01T20:00:00Z")
        _log_dose(client, timestamp="2026-02-01T20:00:00Z")
        history = client.get("/doses").json()
        assert [d["timestamp"][:10] for d in history] == ["2026-02-01", "2026-01-01"]
        assert history[0]["hasCheckIns"] is False

    def test_history_mixes_naive_and_aware_timestamps(self, client):
        _log_dose(client)
        _log_dose(client, timestamp="2026-03-15T11:00:00")
        _log_dose(client, timestamp="2026-03-15T13:00:00Z")

        response = client.get("/doses")
        assert response.status_code == 200
        hours = [d["timestamp"][11:13] for d in response.json()]
        assert hours == ["13", "12", "11"]

    def test_unknown_dose_is_404(self, client):
        assert client.get("/doses/nope").status_code == 404
        assert client.get("/doses/nope/phase").status_code == 404
        assert client.get("/doses/nope/checkins").json() == []


class TestCheckInsAndPhases:

    def test_check_in_stores_phase_snapshot(self, client, clock):
        dose_id = _log_dose(client).json()["dose"]["id"]
        later = (clock() + timedelta(minutes=90)).isoformat()

        response = client.post("/checkins", json={
            "dose_id": dose_id,
            "timestamp": later,
            "symptoms": ["Euphoria", "Jaw clenching"],
            "feeling_score": 5,
        })

        assert response.status_code == 200
        assert response.json()["check_in"]["phase"] == "Peak"
        assert client.get(f"/doses/{dose_id}").json()["hasCheckIns"] is True

    def test_live_check_in_uses_current_time(self, client, clock):
        dose_id = _log_dose(client).json()["dose"]["id"]
        clock.current = clock() + timedelta(minutes=45)
        check_in = client.post("/checkins", json={"dose_id": dose_id}).json()["check_in"]
        assert check_in["phase"] == "Come-up"

    def test_check_in_for_unknown_dose_has_no_phase(self, client):
        response = client.post("/checkins", json={"dose_id": "ghost"})
        assert response.status_code == 200
        assert response.json()["check_in"]["phase"] is None

    def test_invalid_check_in_score(self, client):
        response = client.post("/checkins", json={"dose_id": "x", "feeling_score": 0})
        assert response.status_code == 422
        assert response.json()["detail"]["field"] == "feelingScore"

    def test_check_ins_listed_oldest_first(self, client, clock):
        dose_id = _log_dose(client).json()["dose"]["id"]
        for minutes in (200, 20, 100):
            client.post("/checkins", json={
                "dose_id": dose_id,
                "timestamp": (clock() + timedelta(minutes=minutes)).isoformat(),
            })
        phases = [c["phase"] for c in client.get(f"/doses/{dose_id}/checkins").json()]
        assert phases == ["Onset", "Peak", "Plateau"]

    def test_live_and_naive_check_ins_list_together(self, client):
        dose_id = _log_dose(client).json()["dose"]["id"]
        client.post("/checkins", json={"dose_id": dose_id, "timestamp": "2026-03-15T13:00:00"})
        client.post("/checkins", json={"dose_id": dose_id})

        response = client.get(f"/doses/{dose_id}/checkins")
        assert response.status_code == 200
        stamps = [c["timestamp"] for c in response.json()]
        assert stamps[0].startswith("2026-03-15T12:00:00")
        assert stamps[1].startswith("2026-03-15T13:00:00")

    def test_phase_endpoint_follows_clock(self, client, clock):
        dose_id = _log_dose(client).json()["dose"]["id"]

        clock.current = clock() + timedelta(hours=2)
        data = client.get(f"/doses/{dose_id}/phase").json()
        assert data["phase"]["name"] == "Peak"
        assert data["recovery"] is None

        clock.current = clock() + timedelta(days=3)
        data = client.get(f"/doses/{dose_id}/phase").json()
        assert data["phase"] is None
        assert data["recovery"]["stage"] == "Acute"

    def test_symptom_catalog_and_advice(self, client):
        assert len(client.get("/checkins/symptoms").json()) == 21
        assert client.get("/checkins/symptoms/Nausea").json()["known"] is True
        assert client.get("/checkins/symptoms/Giggles").json()["known"] is False


class TestDashboard:

    def test_summary_without_doses(self, client):
        data = client.get("/dashboard/summary").json()
        assert data["total_doses"] == 0
        assert data["active_phase"] is None
        assert client.get("/dashboard/recovery").json() == {"has_doses": False, "recovery": None}

    def test_summary_with_active_dose(self, client, clock):
        _log_dose(client)
        clock.current = clock() + timedelta(minutes=70)
        data = client.get("/dashboard/summary").json()
        assert data["total_doses"] == 1
        assert data["active_phase"]["name"] == "Peak"
        assert data["storage"]["degraded"] is False

    def test_summary_with_naive_and_aware_doses(self, client):
        _log_dose(client)
        _log_dose(client, timestamp="2026-03-15T11:00:00")

        response = client.get("/dashboard/summary")
        assert response.status_code == 200
        data = response.json()
        assert data["total_doses"] == 2
        assert data["last_dose"]["timestamp"].startswith("2026-03-15T12:00:00")
        assert data["days_since_last_dose"] == 0

    def test_recovery_countdown(self, client, clock):
        _log_dose(client, timestamp=(clock() - timedelta(days=45)).isoformat())
        recovery = client.get("/dashboard/recovery").json()["recovery"]
        assert recovery["stage"] == "Late"
        assert recovery["days_remaining"] == 45

    def test_monthly_usage(self, client):
        _log_dose(client)
        buckets = client.get("/dashboard/monthly-usage").json()
        assert len(buckets) == 6
        assert buckets[-1]["label"] == "Mar"
        assert buckets[-1]["count"] == 1

    def test_phase_table(self, client):
        phases = client.get("/dashboard/phases").json()
        assert [p["name"] for p in phases][0] == "Onset"
        assert len(phases) == 6


class TestSafety:

    def test_dosage_range(self, client):
        data = client.get("/safety/dosage-range", params={"weight_kg": 70, "experience": "first"}).json()
        assert data["low"] == 56
        assert data["high"] == 70

    def test_unknown_experience_defaults_to_beginner(self, client):
        data = client.get("/safety/dosage-range", params={"weight_kg": 70, "experience": "pro"}).json()
        assert data["experience"] == "beginner"
        assert data["high"] == 91

    def test_non_positive_weight_rejected(self, client):
        response = client.get("/safety/dosage-range", params={"weight_kg": 0})
        assert response.status_code == 422


class TestPreferencesAndReset:

    def test_preferences_round_trip(self, client):
        assert client.get("/preferences").json()["theme"] == "system"
        updated = client.patch("/preferences", json={
            "theme": "dark",
            "emergency_contact_number": "+1 555 0100",
        }).json()
        assert updated["theme"] == "dark"
        assert updated["emergencyContactNumber"] == "+1 555 0100"
        assert client.get("/preferences").json()["notificationsEnabled"] is True

    def test_reset_clears_records(self, client, store):
        dose_id = _log_dose(client).json()["dose"]["id"]
        client.post("/checkins", json={"dose_id": dose_id})

        response = client.delete("/data")

        assert response.json() == {"reset": True, "saved": True}
        assert store.dosages == []
        assert client.get("/doses").json() == []

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}


@pytest.fixture
def blob_sessions(client):
    from app.main import app

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield factory
    engine.dispose()


class TestStoredBlobs:

    def test_empty_storage_lists_nothing(self, client, blob_sessions):
        assert client.get("/data/blobs").json() == []

    def test_lists_written_keys(self, client, blob_sessions):
        kv = SqlKeyValueStore(blob_sessions)
        kv.set("dosages", b"[]")
        kv.set("checkIns", b'[{"doseId": "a"}]')

        blobs = client.get("/data/blobs").json()

        assert [b["key"] for b in blobs] == ["checkIns", "dosages"]
        assert blobs[1]["size"] == 2
        assert blobs[0]["updated_at"] is not None
