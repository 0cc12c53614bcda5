from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models import StoredBlob
from .base import KeyValueStore, StorageError


class SqlKeyValueStore(KeyValueStore):
    """Key-value store on top of the kv_blobs table. One session per call."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get(self, key: str) -> Optional[bytes]:
        db = self.session_factory()
        try:
            blob = db.query(StoredBlob).filter(StoredBlob.key == key).first()
            return bytes(blob.value) if blob else None
        except SQLAlchemyError as e:
            raise StorageError(f"read of {key} failed: {e}") from e
        finally:
            db.close()

    def set(self, key: str, value: bytes) -> None:
        db = self.session_factory()
        try:
            blob = db.query(StoredBlob).filter(StoredBlob.key == key).first()
            if blob:
                blob.value = value
            else:
                db.add(StoredBlob(key=key, value=value))
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise StorageError(f"write of {key} failed: {e}") from e
        finally:
            db.close()
