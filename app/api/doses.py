from typing import List, Optional
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from app.api.deps import get_store
from app.engine.phases import days_since, minutes_since, classify_phase
from app.engine.recovery import recovery_status
from app.engine.symptoms import hydration_warning
from app.engine.validation import ValidationError, validate_dose
from app.models import DoseEvent
from app.services.record_store import DOSAGES_KEY, RecordStore

router = APIRouter()


class DoseCreate(BaseModel):
    amount: float  # mg
    timestamp: Optional[datetime] = None  # defaults to now
    notes: str = ""
    initial_feeling_score: int = 3  # 1-5
    water_prepared: int = 0  # glasses
    location: Optional[str] = None
    with_trusted_companions: Optional[bool] = None
    supplements_taken: List[str] = []
    purity_source: Optional[str] = None
    owner_id: Optional[str] = None


class DoseResponse(BaseModel):
    dose: dict
    saved: bool
    hydration_warning: Optional[str] = None


def _get_dose_or_404(store: RecordStore, dose_id: str) -> DoseEvent:
    dose = store.get_dose(dose_id)
    if not dose:
        raise HTTPException(status_code=404, detail="Dose not found")
    return dose


@router.post("", response_model=DoseResponse)
def log_dose(dose_data: DoseCreate, store: RecordStore = Depends(get_store)):
    """
    Log a dose.

    Scores are on a 1-5 scale (initial_feeling_score: 1=dreading,
    5=looking forward). `saved` is false when the record was kept in
    memory but could not be written to local storage.
    """
    fields = dose_data.model_dump()
    if fields["timestamp"] is None:
        fields["timestamp"] = store.now()
    dose = DoseEvent(**fields)

    try:
        validate_dose(dose)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.to_dict())

    dose = store.add_dose(dose)

    return DoseResponse(
        dose=dose.to_dict(),
        saved=store.last_save.results.get(DOSAGES_KEY, False),
        hydration_warning=hydration_warning(dose.water_prepared)
    )


@router.get("")
def list_doses(store: RecordStore = Depends(get_store)):
    """Dose history, newest first."""
    return [
        {**dose.to_dict(), "hasCheckIns": store.has_check_ins(dose.id)}
        for dose in store.doses_newest_first()
    ]


@router.get("/{dose_id}")
def get_dose(dose_id: str, store: RecordStore = Depends(get_store)):
    dose = _get_dose_or_404(store, dose_id)
    return {**dose.to_dict(), "hasCheckIns": store.has_check_ins(dose.id)}


@router.get("/{dose_id}/checkins")
def get_dose_check_ins(dose_id: str, store: RecordStore = Depends(get_store)):
    """Check-ins for a dose, oldest first. Unknown ids give an empty list."""
    return [c.to_dict() for c in store.check_ins_for_dose(dose_id)]


@router.get("/{dose_id}/phase")
def get_dose_phase(dose_id: str, store: RecordStore = Depends(get_store)):
    """
    Current effect phase for a dose, evaluated against the current time.

    Past the 24 hour phase window the dose is in recovery and the
    recovery countdown is returned instead.
    """
    dose = _get_dose_or_404(store, dose_id)
    now = store.now()

    minutes = minutes_since(dose.timestamp, now)
    phase = classify_phase(minutes)

    return {
        "dose_id": dose.id,
        "minutes_since": minutes,
        "phase": phase.to_dict() if phase else None,
        "recovery": None if phase else recovery_status(days_since(dose.timestamp, now)).to_dict()
    }
