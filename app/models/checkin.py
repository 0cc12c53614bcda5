from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CheckInEvent(BaseModel):
    """Follow-up observation recorded against a dose."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: Optional[str] = None
    dose_id: str  # not enforced to exist
    timestamp: datetime
    symptoms: List[str] = Field(default_factory=list)
    feeling_score: int = 3  # 1-5
    notes: str = ""
    water_consumed_since_last: int = 0  # glasses

    # Phase name at submission time, stored as a snapshot
    phase: Optional[str] = None

    @field_validator("timestamp")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        """Naive timestamps are taken as UTC so every stored value is aware."""
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
