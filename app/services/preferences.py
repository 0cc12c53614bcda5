"""
Preferences Service - theme, notification toggle and emergency contact.
"""
from typing import Optional
import logging

from pydantic import ValidationError

from app.models import UserPreferences
from app.storage import KeyValueStore, StorageError

logger = logging.getLogger(__name__)

PREFERENCES_KEY = "preferences"


class PreferencesStore:
    """Single JSON object under its own key, independent of the record blobs."""

    def __init__(self, kv: KeyValueStore):
        self.kv = kv
        self._preferences: Optional[UserPreferences] = None

    @property
    def preferences(self) -> UserPreferences:
        if self._preferences is None:
            self._preferences = self.load()
        return self._preferences

    def load(self) -> UserPreferences:
        """Missing or unreadable data falls back to defaults."""
        try:
            raw = self.kv.get(PREFERENCES_KEY)
        except StorageError as e:
            logger.error(f"Could not read preferences: {e}")
            raw = None

        if raw is None:
            self._preferences = UserPreferences()
            return self._preferences

        try:
            self._preferences = UserPreferences.model_validate_json(raw)
        except ValidationError:
            logger.warning("Preferences blob is corrupt, using defaults")
            self._preferences = UserPreferences()
        return self._preferences

    def update(self, **changes) -> UserPreferences:
        """Apply field changes (snake_case names), persist, and return the result."""
        merged = {**self.preferences.model_dump(), **changes}
        self._preferences = UserPreferences.model_validate(merged)
        self.save()
        return self._preferences

    def save(self) -> bool:
        try:
            self.kv.set(PREFERENCES_KEY, self.preferences.model_dump_json(by_alias=True).encode("utf-8"))
            return True
        except StorageError as e:
            logger.error(f"Failed to save preferences: {e}")
            return False
