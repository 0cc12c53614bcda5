from .blob import StoredBlob
from .dose import DoseEvent
from .checkin import CheckInEvent
from .preferences import UserPreferences, Theme
