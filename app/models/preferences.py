from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Theme(str, Enum):
    SYSTEM = "system"
    LIGHT = "light"
    DARK = "dark"


class UserPreferences(BaseModel):
    """Local profile settings. Nothing in the engine reads these."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    theme: Theme = Theme.SYSTEM
    notifications_enabled: bool = True
    emergency_contact_name: str = ""
    emergency_contact_number: str = ""  # free text as typed

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
