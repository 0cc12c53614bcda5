from dataclasses import dataclass
from enum import Enum
from typing import Dict

# Recommended gap between uses
FULL_RECOVERY_DAYS = 90


class RecoveryStage(str, Enum):
    ACUTE = "Acute"
    MID = "Mid"
    LATE = "Late"
    FULL = "Full"


STAGE_DESCRIPTIONS: Dict[RecoveryStage, str] = {
    RecoveryStage.ACUTE: "First week after use. Low mood and fatigue are common; prioritise sleep, food and hydration.",
    RecoveryStage.MID: "Mood and energy are returning to baseline. Keep up rest and avoid other stimulants.",
    RecoveryStage.LATE: "Most people feel back to normal. Recovery is still in progress.",
    RecoveryStage.FULL: "Recovery complete. At least 3 months have passed since the last use.",
}


@dataclass
class RecoveryStatus:
    stage: RecoveryStage
    days_since_dose: int
    description: str
    progress: float  # 0.0-1.0
    days_remaining: int

    @property
    def is_complete(self) -> bool:
        return self.stage == RecoveryStage.FULL

    def to_dict(self) -> dict:
        return {
            "stage": self.stage.value,
            "days_since_dose": self.days_since_dose,
            "description": self.description,
            "progress": round(self.progress, 3),
            "days_remaining": self.days_remaining,
            "is_complete": self.is_complete,
        }


def classify_recovery_stage(days_since_dose: int) -> RecoveryStage:
    if days_since_dose < 7:
        return RecoveryStage.ACUTE
    elif days_since_dose < 30:
        return RecoveryStage.MID
    elif days_since_dose < FULL_RECOVERY_DAYS:
        return RecoveryStage.LATE
    return RecoveryStage.FULL


def recovery_progress(days_since_dose: int) -> float:
    """Fraction of the recommended gap that has elapsed, capped at 1.0."""
    days = max(0, days_since_dose)
    return min(days / FULL_RECOVERY_DAYS, 1.0)


def recovery_status(days_since_dose: int) -> RecoveryStatus:
    """Stage, description and countdown for the dashboard. Negative days count as day 0."""
    days = max(0, days_since_dose)
    stage = classify_recovery_stage(days)
    return RecoveryStatus(
        stage=stage,
        days_since_dose=days,
        description=STAGE_DESCRIPTIONS[stage],
        progress=recovery_progress(days),
        days_remaining=max(0, FULL_RECOVERY_DAYS - days),
    )
