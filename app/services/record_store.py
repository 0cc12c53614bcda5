"""
Record Store - owns the dose and check-in collections for the local profile.

Each collection is persisted as its own JSON array blob. Reads tolerate
missing or corrupt data (empty collection); writes are best effort and
never raise to the caller.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Dict, List, Optional, Type
import json
import logging
import threading
import uuid

from pydantic import BaseModel, TypeAdapter, ValidationError as PydanticValidationError

from app.models import CheckInEvent, DoseEvent
from app.storage import KeyValueStore

logger = logging.getLogger(__name__)

DOSAGES_KEY = "dosages"
CHECK_INS_KEY = "checkIns"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class LoadStatus(str, Enum):
    OK = "ok"
    MISSING = "missing"
    CORRUPT = "corrupt"
    UNAVAILABLE = "unavailable"  # backend read raised


@dataclass
class LoadReport:
    """Outcome of decoding each blob. Failed blobs were replaced by empty lists."""
    statuses: Dict[str, LoadStatus] = field(default_factory=dict)

    @property
    def degraded(self) -> bool:
        return any(
            status in (LoadStatus.CORRUPT, LoadStatus.UNAVAILABLE)
            for status in self.statuses.values()
        )

    def to_dict(self) -> dict:
        return {key: status.value for key, status in self.statuses.items()}


@dataclass
class SaveReport:
    """Outcome of the last write of each blob, for a save-confirmation signal."""
    results: Dict[str, bool] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return all(self.results.values())

    def merge(self, other: "SaveReport"):
        self.results.update(other.results)
        for key in other.results:
            self.errors.pop(key, None)
        self.errors.update(other.errors)

    def to_dict(self) -> dict:
        return {"ok": self.ok, "results": dict(self.results), "errors": dict(self.errors)}


class RecordStore:
    """In-memory dose and check-in collections backed by a key-value store."""

    def __init__(
        self,
        kv: KeyValueStore,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = new_id,
        save_retries: int = 1,
        autoload: bool = True
    ):
        self.kv = kv
        self.clock = clock
        self.id_factory = id_factory
        self.save_retries = max(0, save_retries)

        self._dosages: List[DoseEvent] = []
        self._check_ins: List[CheckInEvent] = []
        self._lock = threading.Lock()

        self.last_load = LoadReport()
        self.last_save = SaveReport()

        if autoload:
            self.load()

    # --- Collections ---

    @property
    def dosages(self) -> List[DoseEvent]:
        """Insertion order, which is not necessarily timestamp order."""
        return list(self._dosages)

    @property
    def check_ins(self) -> List[CheckInEvent]:
        return list(self._check_ins)

    def now(self) -> datetime:
        return self.clock()

    # --- Mutations ---

    def add_dose(self, dose: DoseEvent) -> DoseEvent:
        """Append a dose and persist the dose collection. No validation."""
        with self._lock:
            if not dose.id:
                dose = dose.model_copy(update={"id": self.id_factory()})
            self._dosages.append(dose)
            self._save_key(DOSAGES_KEY, self._dosages)
        logger.info(f"Logged dose {dose.id} ({dose.amount} mg)")
        return dose

    def add_check_in(self, check_in: CheckInEvent) -> CheckInEvent:
        """Append a check-in and persist the check-in collection."""
        with self._lock:
            if not check_in.id:
                check_in = check_in.model_copy(update={"id": self.id_factory()})
            self._check_ins.append(check_in)
            self._save_key(CHECK_INS_KEY, self._check_ins)
        logger.info(f"Recorded check-in {check_in.id} for dose {check_in.dose_id}")
        return check_in

    def reset_all(self) -> SaveReport:
        """Drop every record and persist the empty state. Cannot be undone."""
        with self._lock:
            self._dosages = []
            self._check_ins = []
            report = self._save_all()
        logger.warning("All dose and check-in records were reset")
        return report

    # --- Queries ---

    def get_dose(self, dose_id: str) -> Optional[DoseEvent]:
        for dose in self._dosages:
            if dose.id == dose_id:
                return dose
        return None

    def latest_dose(self) -> Optional[DoseEvent]:
        """Most recent dose by timestamp."""
        if not self._dosages:
            return None
        return max(self._dosages, key=lambda d: d.timestamp)

    def doses_newest_first(self) -> List[DoseEvent]:
        return sorted(self._dosages, key=lambda d: d.timestamp, reverse=True)

    def check_ins_for_dose(self, dose_id: str) -> List[CheckInEvent]:
        """Check-ins referencing dose_id, oldest first. Empty for unknown ids."""
        matches = [c for c in self._check_ins if c.dose_id == dose_id]
        return sorted(matches, key=lambda c: c.timestamp)

    def has_check_ins(self, dose_id: str) -> bool:
        return any(c.dose_id == dose_id for c in self._check_ins)

    # --- Persistence ---

    def load(self) -> LoadReport:
        """Replace in-memory state with the persisted blobs."""
        report = LoadReport()
        with self._lock:
            self._dosages, report.statuses[DOSAGES_KEY] = self._load_key(DOSAGES_KEY, DoseEvent)
            self._check_ins, report.statuses[CHECK_INS_KEY] = self._load_key(CHECK_INS_KEY, CheckInEvent)
        self.last_load = report
        return report

    def save(self) -> SaveReport:
        with self._lock:
            return self._save_all()

    def _load_key(self, key: str, model: Type[BaseModel]):
        try:
            raw = self.kv.get(key)
        except Exception as e:
            logger.error(f"Could not read {key}: {e}")
            return [], LoadStatus.UNAVAILABLE

        if raw is None:
            return [], LoadStatus.MISSING

        try:
            records = TypeAdapter(List[model]).validate_json(raw)
        except PydanticValidationError as e:
            logger.warning(f"Discarding undecodable {key} blob ({e.error_count()} errors)")
            return [], LoadStatus.CORRUPT
        return records, LoadStatus.OK

    def _save_all(self) -> SaveReport:
        report = SaveReport()
        report.merge(self._save_key(DOSAGES_KEY, self._dosages))
        report.merge(self._save_key(CHECK_INS_KEY, self._check_ins))
        return report

    def _save_key(self, key: str, records: List[BaseModel]) -> SaveReport:
        """Write one blob, retrying on failure. Never raises."""
        payload = json.dumps([r.to_dict() for r in records]).encode("utf-8")
        report = SaveReport()

        for attempt in range(self.save_retries + 1):
            try:
                self.kv.set(key, payload)
                report.results[key] = True
                report.errors.pop(key, None)
                break
            except Exception as e:
                logger.error(f"Failed to save {key} (attempt {attempt + 1}): {e}")
                report.results[key] = False
                report.errors[key] = str(e)

        self.last_save.merge(report)
        return report
