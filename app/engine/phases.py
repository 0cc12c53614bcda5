"""
Effect phase table

Maps elapsed minutes since a dose onto one of six named phases. The
intervals are illustrative heuristics for labelling check-ins, not
pharmacology.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

# Last minute covered by the phase table (24 hours)
PHASE_WINDOW_END = 1440


class PhaseName(str, Enum):
    ONSET = "Onset"
    COME_UP = "Come-up"
    PEAK = "Peak"
    PLATEAU = "Plateau"
    COME_DOWN = "Come-down"
    AFTER_EFFECTS = "After-effects"


@dataclass(frozen=True)
class Phase:
    """One closed interval of the phase table with its display metadata."""
    name: PhaseName
    start_minute: int
    end_minute: int
    description: str
    feelings: List[str] = field(default_factory=list)
    detail: str = ""
    typical_duration: str = ""
    typical_minute: int = 0  # representative point inside the range
    color: str = "gray"
    icon: str = ""

    def contains(self, minutes: int) -> bool:
        return self.start_minute <= minutes <= self.end_minute

    def to_dict(self) -> dict:
        return {
            "name": self.name.value,
            "start_minute": self.start_minute,
            "end_minute": self.end_minute,
            "description": self.description,
            "feelings": list(self.feelings),
            "detail": self.detail,
            "typical_duration": self.typical_duration,
            "typical_minute": self.typical_minute,
            "color": self.color,
            "icon": self.icon,
        }


# Declaration order decides ties on shared boundary minutes
PHASES: List[Phase] = [
    Phase(
        name=PhaseName.ONSET,
        start_minute=0,
        end_minute=30,
        description="Initial absorption",
        feelings=["Anticipation", "Subtle changes", "Alertness"],
        detail="Initial effects begin. Slight alertness, anticipation and subtle body changes.",
        typical_duration="0-30 minutes after consumption",
        typical_minute=15,
        color="blue",
        icon="timer",
    ),
    Phase(
        name=PhaseName.COME_UP,
        start_minute=30,
        end_minute=60,
        description="Effects begin",
        feelings=["Energy", "Enhanced mood", "Excitement", "Possible anxiety"],
        detail="Effects intensify. Energy rises and mood lifts, sometimes with brief anxiety.",
        typical_duration="30-60 minutes after consumption",
        typical_minute=45,
        color="purple",
        icon="arrow.up.circle.fill",
    ),
    Phase(
        name=PhaseName.PEAK,
        start_minute=60,
        end_minute=150,
        description="Maximum effects",
        feelings=["Euphoria", "Empathy", "Enhanced senses", "Sociability"],
        detail="Strongest effects. Euphoria, empathy and heightened senses.",
        typical_duration="1-2.5 hours after consumption",
        typical_minute=90,
        color="pink",
        icon="sparkles",
    ),
    Phase(
        name=PhaseName.PLATEAU,
        start_minute=150,
        end_minute=240,
        description="Sustained effects",
        feelings=["Continued euphoria", "Reduced intensity", "Energy"],
        detail="Effects hold steady, a little less intense than the peak.",
        typical_duration="2.5-4 hours after consumption",
        typical_minute=180,
        color="orange",
        icon="waveform.path.ecg",
    ),
    Phase(
        name=PhaseName.COME_DOWN,
        start_minute=240,
        end_minute=360,
        description="Reducing effects",
        feelings=["Gentle decline", "Less energy", "Relaxation"],
        detail="Effects taper off. Energy drops and mood turns introspective.",
        typical_duration="4-6 hours after consumption",
        typical_minute=300,
        color="yellow",
        icon="arrow.down.circle.fill",
    ),
    Phase(
        name=PhaseName.AFTER_EFFECTS,
        start_minute=360,
        end_minute=PHASE_WINDOW_END,
        description="Recovery beginning",
        feelings=["Fatigue", "Reflective", "Rest needed"],
        detail="Primary effects are gone. Fatigue and mood swings are common; rest.",
        typical_duration="6-24 hours after consumption",
        typical_minute=600,
        color="gray",
        icon="bed.double.fill",
    ),
]

_PHASES_BY_NAME = {phase.name.value: phase for phase in PHASES}


def classify_phase(minutes_since_dose: int) -> Optional[Phase]:
    """
    Return the first phase whose closed range contains the minute count.

    Negative values and anything past PHASE_WINDOW_END return None; the
    caller treats that as open-ended recovery.
    """
    for phase in PHASES:
        if phase.contains(minutes_since_dose):
            return phase
    return None


def get_phase(name: Optional[str]) -> Optional[Phase]:
    """Resolve a stored phase label. Stale or unknown labels give None."""
    if not name:
        return None
    return _PHASES_BY_NAME.get(name)


def _elapsed_seconds(timestamp: datetime, now: datetime) -> float:
    # Mixed naive/aware pairs are compared as UTC
    if (timestamp.tzinfo is None) != (now.tzinfo is None):
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        else:
            now = now.replace(tzinfo=timezone.utc)
    return (now - timestamp).total_seconds()


def minutes_since(timestamp: datetime, now: datetime) -> int:
    """Whole minutes elapsed; negative when the timestamp is in the future."""
    return int(_elapsed_seconds(timestamp, now) // 60)


def days_since(timestamp: datetime, now: datetime) -> int:
    """Whole days elapsed, floored at 0 for future timestamps."""
    return max(0, int(_elapsed_seconds(timestamp, now) // 86400))


def phase_for_dose(dose, now: datetime) -> Optional[Phase]:
    """Classify a dose against the given moment. Nothing is cached."""
    return classify_phase(minutes_since(dose.timestamp, now))
