from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.api.deps import get_preferences, get_store
from app.db import get_db
from app.models import StoredBlob, Theme
from app.services.preferences import PreferencesStore
from app.services.record_store import RecordStore

router = APIRouter()
data_router = APIRouter()


class PreferencesUpdate(BaseModel):
    theme: Optional[Theme] = None
    notifications_enabled: Optional[bool] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_number: Optional[str] = None


@router.get("")
def get_user_preferences(prefs: PreferencesStore = Depends(get_preferences)):
    return prefs.preferences.to_dict()


@router.patch("")
def update_user_preferences(
    update: PreferencesUpdate,
    prefs: PreferencesStore = Depends(get_preferences)
):
    changes = update.model_dump(exclude_none=True)
    return prefs.update(**changes).to_dict()


@data_router.get("/blobs")
def list_stored_blobs(db: Session = Depends(get_db)):
    """Keys held in local storage with their size and last write time."""
    blobs = db.query(StoredBlob).order_by(StoredBlob.key).all()
    return [b.to_dict() for b in blobs]


@data_router.delete("")
def reset_all_data(store: RecordStore = Depends(get_store)):
    """Permanently delete every dose and check-in. Preferences are kept."""
    report = store.reset_all()
    return {"reset": True, "saved": report.ok}
