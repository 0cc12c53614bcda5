from abc import ABC, abstractmethod
from typing import Optional


class StorageError(Exception):
    """Raised by a key-value backend when a read or write cannot complete."""


class KeyValueStore(ABC):
    """Opaque blob persistence: no transactions, no atomicity across keys."""

    @abstractmethod
    def get(self, key: str) -> Optional[bytes]:
        """Return the stored bytes for key, or None if nothing is stored."""
        pass

    @abstractmethod
    def set(self, key: str, value: bytes) -> None:
        """Store value under key, replacing any previous value.

        Backends raise StorageError for failures they recognise. Callers that
        must not fail still treat any exception as a failed write.
        """
        pass
