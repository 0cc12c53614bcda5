"""
Input checks for the form layer.

The record store accepts anything that type-checks; callers that want
strict input run these first.
"""

from app.models import CheckInEvent, DoseEvent

MIN_SCORE = 1
MAX_SCORE = 5


class ValidationError(ValueError):
    """Raised when one field is out of range. Names the offending field."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


def _check_score(field: str, value: int):
    if value < MIN_SCORE or value > MAX_SCORE:
        raise ValidationError(field, f"must be between {MIN_SCORE} and {MAX_SCORE}")


def _check_non_negative(field: str, value: float):
    if value < 0:
        raise ValidationError(field, "must not be negative")


def validate_dose(dose: DoseEvent) -> DoseEvent:
    _check_non_negative("amount", dose.amount)
    _check_score("initialFeelingScore", dose.initial_feeling_score)
    _check_non_negative("waterPrepared", dose.water_prepared)
    return dose


def validate_check_in(check_in: CheckInEvent) -> CheckInEvent:
    _check_score("feelingScore", check_in.feeling_score)
    _check_non_negative("waterConsumedSinceLast", check_in.water_consumed_since_last)
    if not check_in.dose_id:
        raise ValidationError("doseId", "is required")
    return check_in


def validate_weight(weight_kg: float) -> float:
    if weight_kg <= 0:
        raise ValidationError("weightKg", "must be positive")
    return weight_kg
