from typing import Dict, Optional

from .base import KeyValueStore, StorageError


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, bytes]] = None, fail_writes: int = 0):
        """
        Args:
            initial: Pre-seeded blobs, e.g. a corrupt payload to test decoding
            fail_writes: Number of upcoming set() calls that raise StorageError
        """
        self.blobs: Dict[str, bytes] = dict(initial or {})
        self.fail_writes = fail_writes
        self.write_count = 0

    def get(self, key: str) -> Optional[bytes]:
        return self.blobs.get(key)

    def set(self, key: str, value: bytes) -> None:
        self.write_count += 1
        if self.fail_writes > 0:
            self.fail_writes -= 1
            raise StorageError(f"simulated write failure for {key}")
        self.blobs[key] = bytes(value)
