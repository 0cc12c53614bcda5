from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class DoseEvent(BaseModel):
    """A single logged dose. Created once, never mutated."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: Optional[str] = None
    timestamp: datetime
    amount: float  # mg
    notes: str = ""
    initial_feeling_score: int = 3  # 1=dreading, 5=great expectations
    water_prepared: int = 0  # glasses

    # Optional context captured on the log form
    location: Optional[str] = None
    with_trusted_companions: Optional[bool] = None
    supplements_taken: List[str] = Field(default_factory=list)
    purity_source: Optional[str] = None

    # Reserved for partitioning by local profile
    owner_id: Optional[str] = None

    @field_validator("timestamp")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        """Naive timestamps are taken as UTC so every stored value is aware."""
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
