"""
Weight-based dosage range

Harm reduction guideline only: a linear mg-per-kg band per experience
level with a hard upper cap.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple, Union

# Upper bound of any suggested range, in mg
SAFETY_CAP_MG = 150.0


class Experience(str, Enum):
    FIRST = "first"
    BEGINNER = "beginner"
    EXPERIENCED = "experienced"

    @classmethod
    def parse(cls, value: Union[str, "Experience", None]) -> "Experience":
        """Unrecognised input falls back to BEGINNER."""
        if isinstance(value, Experience):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.BEGINNER


# (low multiplier, high multiplier) in mg per kg
MULTIPLIERS: Dict[Experience, Tuple[float, float]] = {
    Experience.FIRST: (0.8, 1.0),
    Experience.BEGINNER: (1.0, 1.3),
    Experience.EXPERIENCED: (1.2, 1.5),
}


@dataclass
class DosageRange:
    low: float
    high: float
    experience: Experience
    capped: bool = False

    def as_tuple(self) -> Tuple[float, float]:
        return (self.low, self.high)

    def to_dict(self) -> dict:
        return {
            "low": round(self.low, 1),
            "high": round(self.high, 1),
            "experience": self.experience.value,
            "capped": self.capped,
            "cap_mg": SAFETY_CAP_MG,
        }


def estimate_range(weight_kg: float, experience: Union[str, Experience, None] = None) -> DosageRange:
    """
    Suggested [low, high] mg for a body weight and experience level.

    high is clamped to SAFETY_CAP_MG; low is then held at or below high so
    heavy users never get an inverted range.
    """
    level = Experience.parse(experience)
    low_multiplier, high_multiplier = MULTIPLIERS[level]

    low = weight_kg * low_multiplier
    high = weight_kg * high_multiplier

    capped = False
    if high > SAFETY_CAP_MG:
        high = SAFETY_CAP_MG
        capped = True
    if low > high:
        low = high

    return DosageRange(low=low, high=high, experience=level, capped=capped)
