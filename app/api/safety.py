from fastapi import APIRouter, HTTPException, Query

from app.engine.dosage import estimate_range
from app.engine.validation import ValidationError, validate_weight

router = APIRouter()


@router.get("/dosage-range")
def get_dosage_range(
    weight_kg: float = Query(...),
    experience: str = Query("beginner")
):
    """
    Suggested mg range for a body weight.

    experience is one of first, beginner, experienced; anything else is
    treated as beginner. Always start at the low end of the range.
    """
    try:
        validate_weight(weight_kg)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.to_dict())

    return estimate_range(weight_kg, experience).to_dict()
