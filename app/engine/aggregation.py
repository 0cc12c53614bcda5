from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import List, Optional, Sequence, Union

import pytz

from app.models import CheckInEvent, DoseEvent
from app.engine.phases import days_since
from app.engine.recovery import RecoveryStatus, recovery_status

MONTHS_IN_WINDOW = 6


@dataclass
class MonthlyUsage:
    year: int
    month: int
    label: str  # e.g. "Mar"
    count: int = 0

    def to_dict(self) -> dict:
        return {"year": self.year, "month": self.month, "label": self.label, "count": self.count}


@dataclass
class UsageSummary:
    total_doses: int
    total_check_ins: int
    last_dose: Optional[DoseEvent] = None
    days_since_last_dose: Optional[int] = None
    recovery: Optional[RecoveryStatus] = None
    average_initial_feeling: Optional[float] = None
    average_check_in_feeling: Optional[float] = None
    top_symptoms: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "total_doses": self.total_doses,
            "total_check_ins": self.total_check_ins,
            "last_dose": self.last_dose.to_dict() if self.last_dose else None,
            "days_since_last_dose": self.days_since_last_dose,
            "recovery": self.recovery.to_dict() if self.recovery else None,
            "average_initial_feeling": self.average_initial_feeling,
            "average_check_in_feeling": self.average_check_in_feeling,
            "top_symptoms": list(self.top_symptoms),
        }


def _resolve_tz(tz):
    if tz is None or isinstance(tz, pytz.BaseTzInfo):
        return tz
    return pytz.timezone(tz)


def _to_local(moment: datetime, tz) -> datetime:
    """Naive datetimes are UTC, matching how events store them."""
    if tz is None:
        return moment
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(tz)


def monthly_usage_counts(
    doses: Sequence[DoseEvent],
    reference_date: Union[date, datetime],
    tz=None
) -> List[MonthlyUsage]:
    """
    Dose counts for the six calendar months ending at reference_date's month.

    Oldest month first; months without doses are present with count 0.

    Args:
        doses: Dose events in any order
        reference_date: Anchor day (or moment) for the newest bucket
        tz: pytz timezone or IANA name for local calendar months
    """
    tz = _resolve_tz(tz)
    if isinstance(reference_date, datetime):
        reference_date = _to_local(reference_date, tz).date()

    anchor = reference_date.year * 12 + (reference_date.month - 1)
    buckets = []
    for offset in range(MONTHS_IN_WINDOW - 1, -1, -1):
        year, month_index = divmod(anchor - offset, 12)
        month = month_index + 1
        buckets.append(MonthlyUsage(
            year=year,
            month=month,
            label=date(year, month, 1).strftime("%b"),
        ))

    by_month = {(b.year, b.month): b for b in buckets}
    for dose in doses:
        local = _to_local(dose.timestamp, tz)
        bucket = by_month.get((local.year, local.month))
        if bucket is not None:
            bucket.count += 1

    return buckets


def _average(values: List[int]) -> Optional[float]:
    if not values:
        return None
    return round(sum(values) / len(values), 2)


def usage_summary(
    doses: Sequence[DoseEvent],
    check_ins: Sequence[CheckInEvent],
    now: datetime,
    top_n: int = 3
) -> UsageSummary:
    """Dashboard card data: last use, recovery countdown and averages."""
    summary = UsageSummary(total_doses=len(doses), total_check_ins=len(check_ins))
    if not doses:
        return summary

    last = max(doses, key=lambda d: d.timestamp)
    days = days_since(last.timestamp, now)

    symptom_counts = Counter(
        symptom for check_in in check_ins for symptom in check_in.symptoms
    )

    summary.last_dose = last
    summary.days_since_last_dose = days
    summary.recovery = recovery_status(days)
    summary.average_initial_feeling = _average([d.initial_feeling_score for d in doses])
    summary.average_check_in_feeling = _average([c.feeling_score for c in check_ins])
    summary.top_symptoms = [name for name, _ in symptom_counts.most_common(top_n)]
    return summary
