from fastapi import APIRouter, Depends

from app.api.deps import get_store
from app.config import get_settings
from app.engine.aggregation import monthly_usage_counts, usage_summary
from app.engine.phases import PHASES, phase_for_dose
from app.services.record_store import RecordStore

router = APIRouter()


@router.get("/summary")
def get_summary(store: RecordStore = Depends(get_store)):
    """Last use, active phase, recovery countdown and averages."""
    now = store.now()
    summary = usage_summary(store.dosages, store.check_ins, now)

    active_phase = None
    if summary.last_dose:
        phase = phase_for_dose(summary.last_dose, now)
        active_phase = phase.to_dict() if phase else None

    return {
        **summary.to_dict(),
        "active_phase": active_phase,
        "storage": {
            "load": store.last_load.to_dict(),
            "degraded": store.last_load.degraded,
            "last_save": store.last_save.to_dict(),
        },
    }


@router.get("/recovery")
def get_recovery(store: RecordStore = Depends(get_store)):
    summary = usage_summary(store.dosages, store.check_ins, store.now())
    if summary.recovery is None:
        return {"has_doses": False, "recovery": None}
    return {"has_doses": True, "recovery": summary.recovery.to_dict()}


@router.get("/monthly-usage")
def get_monthly_usage(store: RecordStore = Depends(get_store)):
    """Dose counts for the trailing six calendar months, oldest first."""
    settings = get_settings()
    buckets = monthly_usage_counts(store.dosages, store.now(), tz=settings.timezone)
    return [b.to_dict() for b in buckets]


@router.get("/phases")
def list_phases():
    return [phase.to_dict() for phase in PHASES]
