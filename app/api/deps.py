from fastapi import Request

from app.services.preferences import PreferencesStore
from app.services.record_store import RecordStore


def get_store(request: Request) -> RecordStore:
    """The record store built at startup. Overridden in tests."""
    return request.app.state.record_store


def get_preferences(request: Request) -> PreferencesStore:
    return request.app.state.preferences
