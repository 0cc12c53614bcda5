from sqlalchemy import Column, String, DateTime, LargeBinary
from datetime import datetime, timezone

from app.db.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class StoredBlob(Base):
    """One opaque value in the local key-value store."""
    __tablename__ = "kv_blobs"

    key = Column(String, primary_key=True)
    value = Column(LargeBinary, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)

    def to_dict(self):
        return {
            "key": self.key,
            "size": len(self.value) if self.value is not None else 0,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None
        }
