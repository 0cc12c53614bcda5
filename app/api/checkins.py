from typing import List, Optional
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from app.api.deps import get_store
from app.engine.phases import classify_phase, minutes_since
from app.engine.symptoms import catalog, hydration_warning, symptom_advice
from app.engine.validation import ValidationError, validate_check_in
from app.models import CheckInEvent
from app.services.record_store import CHECK_INS_KEY, RecordStore

router = APIRouter()


class CheckInCreate(BaseModel):
    dose_id: str
    timestamp: Optional[datetime] = None  # defaults to now; past values for retrospective check-ins
    symptoms: List[str] = []
    feeling_score: int = 3  # 1-5
    notes: str = ""
    water_consumed_since_last: int = 0  # glasses


class CheckInResponse(BaseModel):
    check_in: dict
    saved: bool
    hydration_warning: Optional[str] = None


@router.post("", response_model=CheckInResponse)
def create_check_in(checkin_data: CheckInCreate, store: RecordStore = Depends(get_store)):
    """
    Record a check-in against a dose.

    The phase is classified from the time between the dose and the
    check-in and stored with the record; it is not recomputed later.
    Check-ins for unknown doses are accepted without a phase.
    """
    fields = checkin_data.model_dump()
    if fields["timestamp"] is None:
        fields["timestamp"] = store.now()

    dose = store.get_dose(checkin_data.dose_id)
    phase = None
    if dose:
        phase = classify_phase(minutes_since(dose.timestamp, fields["timestamp"]))

    check_in = CheckInEvent(**fields, phase=phase.name.value if phase else None)

    try:
        validate_check_in(check_in)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.to_dict())

    check_in = store.add_check_in(check_in)

    return CheckInResponse(
        check_in=check_in.to_dict(),
        saved=store.last_save.results.get(CHECK_INS_KEY, False),
        hydration_warning=hydration_warning(check_in.water_consumed_since_last)
    )


@router.get("/symptoms")
def list_symptoms():
    """Symptom labels offered on the check-in form."""
    return catalog()


@router.get("/symptoms/{label}")
def get_symptom_advice(label: str):
    return symptom_advice(label).to_dict()
